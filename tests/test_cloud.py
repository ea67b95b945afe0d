import numpy as np
import pytest

from flightsim.cloud import (
    CloudState,
    LightSetup,
    light_distance_plane,
    light_matrices,
    pack_screen_block,
    pack_timings,
    pack_view_block,
    screen_triangle,
    sort_particles,
)
from flightsim.vecmath import look_at, normalize, perspective


def _view_projection():
    view = look_at((0.0, 0.0, 5.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    return perspective(1.0, 1.5, 0.1, 20.0) @ view, view


LIGHT_DIR = normalize((1.0, -1.0, 0.0))


def test_screen_triangle_corners():
    tri = screen_triangle()
    assert tri.tolist() == [[-1.0, -1.0], [3.0, -1.0], [-1.0, 3.0]]


def test_light_matrices_direction_follows_light():
    vp, _ = _view_projection()
    light = light_matrices(vp, (0.0, 0.0, -1.0), LIGHT_DIR)
    assert isinstance(light, LightSetup)
    assert np.allclose(light.direction, LIGHT_DIR)
    assert light.far_plane > 0
    assert light.projection[2, 2] == pytest.approx(-2.0 / light.far_plane)
    assert np.allclose(light.view_projection, light.projection @ light.view)


def test_light_matrices_rejects_horizontal_light():
    vp, _ = _view_projection()
    with pytest.raises(ValueError):
        light_matrices(vp, (0.0, 0.0, -1.0), (1.0, 0.0, 0.0))


def test_light_distance_plane_identity():
    plane = light_distance_plane(np.identity(4), 2.0)
    assert plane.tolist() == [0.0, 0.0, -0.5, 0.0]


def test_light_distance_plane_zero_far_rejected():
    with pytest.raises(ValueError):
        light_distance_plane(np.identity(4), 0.0)


def test_light_distance_plane_spans_zero_to_one():
    vp, _ = _view_projection()
    light = light_matrices(vp, (0.0, 0.0, -1.0), LIGHT_DIR)
    plane = light_distance_plane(light.view, light.far_plane)
    origin = np.linalg.inv(light.view) @ np.array([0.0, 0.0, 0.0, 1.0])
    far_point = origin[:3] + LIGHT_DIR * light.far_plane
    assert float(plane @ origin) == pytest.approx(0.0, abs=1e-4)
    assert float(plane @ np.append(far_point, 1.0)) == pytest.approx(1.0, abs=1e-4)


def test_sort_particles_orders_far_to_near_and_culls():
    result = sort_particles([1.0, 5.0, 3.0, 100.0], 10.0)
    assert result.tolist() == [1, 2, 0]


def test_sort_particles_all_culled():
    assert sort_particles([50.0, 60.0], 10.0).tolist() == []


def test_pack_screen_block():
    projection = np.arange(16, dtype=float).reshape(4, 4)
    block = pack_screen_block(projection, 4, 2)
    assert block.shape == (20,)
    assert block[:16].tolist() == projection.T.ravel().tolist()
    assert block[16] == 0.25
    assert block[17] == 0.5
    assert block[18:].tolist() == [0.0, 0.0]


def test_pack_screen_block_rejects_bad_size():
    with pytest.raises(ValueError):
        pack_screen_block(np.identity(4), 0, 2)


def test_pack_view_block_layout():
    view = np.identity(4)
    block = pack_view_block(view, np.identity(4), (1.0, 2.0, 3.0))
    assert block.shape == (64,)
    assert block[:16].tolist() == np.identity(4).ravel().tolist()
    assert block[48:52].tolist() == [1.0, 2.0, 3.0, 0.0]
    assert block[52:56].tolist() == [1.0, 0.0, 0.0, 0.0]
    assert block[56:60].tolist() == [0.0, 1.0, 0.0, 0.0]
    assert block[60:64].tolist() == [0.0, 0.0, -1.0, 0.0]


def test_pack_view_block_inverse_matches():
    vp, view = _view_projection()
    projection = vp @ np.linalg.inv(view)
    block = pack_view_block(view, projection, (0.0, 0.0, 5.0))
    packed_vp = block[16:32].reshape(4, 4).T
    packed_inv = block[32:48].reshape(4, 4).T
    assert np.allclose(packed_vp @ packed_inv, np.identity(4), atol=1e-3)


def test_pack_timings():
    assert pack_timings(2.5, 0.25).tolist() == [2.5, 0.25]


def test_cloud_state_finish_frame_sorts_and_swaps():
    state = CloudState(800, 600, 10.0, max_particles=4)
    assert state.read_buffer == 0
    visible = state.finish_frame([1.0, 5.0, 3.0, 100.0])
    assert visible.tolist() == [1, 2, 0]
    assert state.num_render == 3
    assert state.read_buffer == 1
    assert state.write_buffer == 0


def test_cloud_state_depth_count_checked():
    state = CloudState(800, 600, 10.0, max_particles=4)
    with pytest.raises(ValueError):
        state.finish_frame([1.0, 2.0])


def test_cloud_state_rejects_bad_particle_count():
    with pytest.raises(ValueError):
        CloudState(800, 600, 10.0, max_particles=0)


def test_cloud_state_prepare_frame():
    vp, view = _view_projection()
    state = CloudState(800, 600, 20.0, max_particles=4)
    light = state.prepare_frame(np.linalg.inv(vp), view, (0.0, 0.0, -1.0), LIGHT_DIR)
    assert np.allclose(state.light_view_projection, light.view_projection)
    assert np.allclose(state.light_direction_view, -LIGHT_DIR)
    assert np.allclose(state.light_distance_plane, light_distance_plane(light.view, light.far_plane))