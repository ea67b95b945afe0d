import math

import numpy as np
import pytest

from flightsim.vecmath import (
    look_at,
    normalize,
    ortho,
    perspective,
    pre_multiply,
    scale,
    transform_normal,
    translate,
    vec3,
)


def test_vec3_components():
    v = vec3(1, 2, 3)
    assert v.tolist() == [1.0, 2.0, 3.0]


def test_normalize_unit_length_and_direction():
    v = normalize(vec3(3, -4, 12))
    assert math.isclose(np.linalg.norm(v), 1.0)
    assert np.allclose(np.cross(v, vec3(3, -4, 12)), 0.0)


def test_normalize_zero_raises():
    with pytest.raises(ValueError):
        normalize(vec3(0, 0, 0))


def test_look_at_maps_eye_to_origin_and_center_forward():
    eye = vec3(1, 2, 3)
    center = vec3(4, 2, -1)
    m = look_at(eye, center, vec3(0, 1, 0))
    assert np.allclose(pre_multiply(eye, m), 0.0)
    mapped = pre_multiply(center, m)
    dist = np.linalg.norm(center - eye)
    assert np.allclose(mapped, [0.0, 0.0, -dist])


def test_look_at_rotation_is_orthonormal():
    m = look_at(vec3(0, 5, 0), vec3(10, 0, 3), vec3(0, 1, 0))
    r = m[:3, :3]
    assert np.allclose(r @ r.T, np.identity(3))


def test_perspective_maps_near_and_far_planes():
    m = perspective(math.radians(60), 1.5, 0.1, 3000.0)
    assert math.isclose(pre_multiply(vec3(0, 0, -0.1), m)[2], -1.0, abs_tol=1e-9)
    assert math.isclose(pre_multiply(vec3(0, 0, -3000.0), m)[2], 1.0, abs_tol=1e-6)


def test_perspective_edge_of_view_hits_unit_y():
    fov = math.radians(90)
    m = perspective(fov, 1.0, 1.0, 10.0)
    depth = 5.0
    y = depth * math.tan(fov / 2)
    assert math.isclose(pre_multiply(vec3(0, y, -depth), m)[1], 1.0)


def test_perspective_rejects_degenerate():
    with pytest.raises(ValueError):
        perspective(1.0, 0.0, 0.1, 10.0)
    with pytest.raises(ValueError):
        perspective(1.0, 1.0, 5.0, 5.0)


def test_ortho_maps_box_corners_to_unit_cube():
    m = ortho(-2, 6, -1, 3, 0, 10)
    assert np.allclose(pre_multiply(vec3(-2, -1, 0), m), [-1, -1, -1])
    assert np.allclose(pre_multiply(vec3(6, 3, -10), m), [1, 1, 1])


def test_ortho_rejects_empty_volume():
    with pytest.raises(ValueError):
        ortho(1, 1, 0, 1, 0, 1)


def test_translate_then_scale_composition():
    m = scale(translate(np.identity(4), vec3(1, 2, 3)), vec3(2, 2, 2))
    assert np.allclose(pre_multiply(vec3(1, 1, 1), m), [3, 4, 5])


def test_translate_round_trip():
    m = translate(translate(np.identity(4), vec3(5, -3, 2)), vec3(-5, 3, -2))
    assert np.allclose(m, np.identity(4))


def test_pre_multiply_inverse_round_trip():
    m = look_at(vec3(3, 1, 2), vec3(0, 0, 0), vec3(0, 1, 0))
    p = vec3(7, -2, 4)
    back = pre_multiply(pre_multiply(p, m), np.linalg.inv(m))
    assert np.allclose(back, p)


def test_pre_multiply_infinite_point_raises():
    m = np.zeros((4, 4))
    with pytest.raises(ValueError):
        pre_multiply(vec3(1, 1, 1), m)


def test_transform_normal_ignores_translation_and_normalizes():
    m = translate(np.identity(4), vec3(10, 10, 10))
    n = transform_normal(vec3(0, 0, 5), m)
    assert np.allclose(n, [0, 0, 1])


def test_transform_normal_rotation_preserves_unit_length():
    m = look_at(vec3(0, 0, 0), vec3(1, 1, 0), vec3(0, 0, 1))
    n = transform_normal(vec3(1, 2, 3), m)
    assert math.isclose(np.linalg.norm(n), 1.0)