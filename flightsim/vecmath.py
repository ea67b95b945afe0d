"""Small 3D vector and 4x4 matrix helpers built on numpy.

Matrices are row-major numpy arrays meant to multiply column vectors
(``m @ v``), so translations live in the last column.
"""

from __future__ import annotations

import math

import numpy as np

_EPSILON = 1e-12


def vec3(x, y, z) -> np.ndarray:
    """Return a float vector of three components."""
    return np.array([x, y, z], dtype=float)


def _as_vec3(v) -> np.ndarray:
    arr = np.asarray(v, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr


def _as_mat4(m) -> np.ndarray:
    arr = np.asarray(m, dtype=float)
    if arr.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {arr.shape}")
    return arr


def normalize(v) -> np.ndarray:
    """Return ``v`` scaled to unit length; a zero vector raises ValueError."""
    arr = np.asarray(v, dtype=float)
    length = float(np.linalg.norm(arr))
    if length < _EPSILON:
        raise ValueError("cannot normalize a zero-length vector")
    return arr / length


def look_at(eye, center, up) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye = _as_vec3(eye)
    f = normalize(_as_vec3(center) - eye)
    s = normalize(np.cross(f, _as_vec3(up)))
    u = np.cross(s, f)
    m = np.identity(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -np.dot(s, eye)
    m[1, 3] = -np.dot(u, eye)
    m[2, 3] = np.dot(f, eye)
    return m


def perspective(fovy, aspect, near, far) -> np.ndarray:
    """Right-handed perspective projection; ``fovy`` is in radians."""
    if aspect == 0:
        raise ValueError("aspect ratio must be non-zero")
    if far == near:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    if abs(tan_half) < _EPSILON:
        raise ValueError("field of view must be non-zero")
    m = np.zeros((4, 4))
    m[0, 0] = 1.0 / (aspect * tan_half)
    m[1, 1] = 1.0 / tan_half
    m[2, 2] = -(far + near) / (far - near)
    m[3, 2] = -1.0
    m[2, 3] = -(2.0 * far * near) / (far - near)
    return m


def ortho(left, right, bottom, top, near, far) -> np.ndarray:
    """Orthographic projection mapping the given box onto the unit cube."""
    if right == left or top == bottom or far == near:
        raise ValueError("orthographic volume must have non-zero extent")
    m = np.identity(4)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


def translate(m, v) -> np.ndarray:
    """Return ``m`` followed (on the right) by a translation by ``v``."""
    t = np.identity(4)
    t[:3, 3] = _as_vec3(v)
    return _as_mat4(m) @ t


def scale(m, v) -> np.ndarray:
    """Return ``m`` followed (on the right) by a per-axis scale by ``v``."""
    s = np.diag(np.append(_as_vec3(v), 1.0))
    return _as_mat4(m) @ s


def pre_multiply(v, m) -> np.ndarray:
    """Transform point ``v`` by ``m`` and apply the perspective divide."""
    h = _as_mat4(m) @ np.append(_as_vec3(v), 1.0)
    if abs(h[3]) < _EPSILON:
        raise ValueError("point maps to infinity (w is zero)")
    return h[:3] / h[3]


def transform_normal(v, m) -> np.ndarray:
    """Rotate direction ``v`` by the upper 3x3 part of ``m`` and normalize."""
    return normalize(_as_mat4(m)[:3, :3] @ _as_vec3(v))