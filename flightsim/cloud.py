"""CPU side of the particle cloud renderer.

This covers the light-space matrices for the Fourier opacity map, the
depth sorting of cloud particles and the packing of the uniform blocks
that the cloud shaders read. Matrices are row-major and multiply column
vectors; packed blocks are column-major float32, as the shaders expect.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product

import numpy as np

from flightsim.vecmath import look_at, normalize, ortho, pre_multiply, transform_normal

MAX_CLOUD_PARTICLES = 10000
FOURIER_OPACITY_MAP_SIZE = 1024
MAX_INDEXABLE_PARTICLES = 1 << 16

# Blur offsets for the two filter passes over the opacity map.
FOM_FILTER_HORIZONTAL = (1.5 / FOURIER_OPACITY_MAP_SIZE, 0.0, -1.5 / FOURIER_OPACITY_MAP_SIZE, 0.0)
FOM_FILTER_VERTICAL = (0.0, 1.5 / FOURIER_OPACITY_MAP_SIZE, 0.0, -1.5 / FOURIER_OPACITY_MAP_SIZE)

SCREEN_BLOCK_FLOATS = 4 * 5
VIEW_BLOCK_FLOATS = 4 * 16

_SCREEN_TRIANGLE = ((-1.0, -1.0), (3.0, -1.0), (-1.0, 3.0))


def screen_triangle() -> np.ndarray:
    """Corners of the single triangle that covers the whole viewport."""
    return np.array(_SCREEN_TRIANGLE, dtype=np.float32)


def _inverse(m) -> np.ndarray:
    try:
        return np.linalg.inv(np.asarray(m, dtype=float))
    except np.linalg.LinAlgError as exc:
        raise ValueError("matrix is singular") from exc


@dataclass(frozen=True)
class LightSetup:
    """Orthographic light camera enclosing the viewer's frustum."""

    view: np.ndarray
    projection: np.ndarray
    far_plane: float

    @property
    def view_projection(self) -> np.ndarray:
        """Projection times view."""
        return self.projection @ self.view

    @property
    def right(self) -> np.ndarray:
        """Light camera's right axis in world space."""
        return self.view[0, :3].copy()

    @property
    def up(self) -> np.ndarray:
        """Light camera's up axis in world space."""
        return self.view[1, :3].copy()

    @property
    def direction(self) -> np.ndarray:
        """Direction the light camera looks along, in world space."""
        return -self.view[2, :3]


def light_matrices(view_projection, view_dir, light_dir) -> LightSetup:
    """Fit an orthographic light camera around the frustum of ``view_projection``.

    The light's up vector is chosen perpendicular to ``light_dir`` and close
    to ``view_dir``; a light with no vertical component is rejected.
    """
    view_dir = np.asarray(view_dir, dtype=float)
    light_dir = np.asarray(light_dir, dtype=float)
    if light_dir[1] == 0:
        raise ValueError("light direction must have a vertical component")
    light_up = np.array(
        [
            view_dir[0],
            -(light_dir[2] * view_dir[2] + light_dir[0] * view_dir[0]) / light_dir[1],
            view_dir[2],
        ]
    )
    light_camera = look_at(np.zeros(3), -light_dir, light_up)
    to_light_camera = light_camera @ _inverse(view_projection)

    corners = np.array([pre_multiply(c, to_light_camera) for c in product((-1.0, 1.0), repeat=3)])
    low = corners.min(axis=0)
    high = corners.max(axis=0)

    far_plane = float(high[2] - low[2])
    centre = np.array([(low[0] + high[0]) * 0.5, (low[1] + high[1]) * 0.5, low[2]])
    light_pos = pre_multiply(centre, _inverse(light_camera))
    view = look_at(light_pos, light_pos + light_dir, light_up)
    projection = ortho(low[0], high[0], low[1], high[1], 0.0, far_plane)
    return LightSetup(view=view, projection=projection, far_plane=far_plane)


def light_distance_plane(light_view, far_plane) -> np.ndarray:
    """Plane giving a point's distance from the light, scaled so ``far_plane`` maps to 1."""
    if far_plane == 0:
        raise ValueError("far plane distance must be non-zero")
    view = np.asarray(light_view, dtype=float)
    return (-view[2, :] / far_plane).astype(np.float32)


def sort_particles(depths, far_plane) -> np.ndarray:
    """Indices of visible particles ordered from farthest to nearest.

    Particles deeper than ``far_plane`` are the ones culled by the move
    pass and are left out.
    """
    depths = np.asarray(depths, dtype=float).ravel()
    order = np.argsort(-depths, kind="stable")
    visible = order[depths[order] <= far_plane]
    return visible.astype(np.uint16 if depths.size <= MAX_INDEXABLE_PARTICLES else np.int64)


def _column_major(m) -> np.ndarray:
    return np.asarray(m, dtype=float).T.ravel()


def _padded(v) -> np.ndarray:
    return np.append(np.asarray(v, dtype=float)[:3], 0.0)


def pack_screen_block(projection, width, height) -> np.ndarray:
    """Screen uniform block: projection matrix, then the inverse resolution."""
    if width <= 0 or height <= 0:
        raise ValueError("screen resolution must be positive")
    block = np.zeros(SCREEN_BLOCK_FLOATS, dtype=np.float32)
    block[:16] = _column_major(projection)
    block[16] = 1.0 / width
    block[17] = 1.0 / height
    return block


def pack_view_block(view, projection, camera_position) -> np.ndarray:
    """View uniform block.

    Holds the view, view-projection and inverse view-projection matrices,
    then the camera position, right, up and viewing direction, each padded
    to four floats.
    """
    view = np.asarray(view, dtype=float)
    view_projection = np.asarray(projection, dtype=float) @ view
    parts = [
        _column_major(view),
        _column_major(view_projection),
        _column_major(_inverse(view_projection)),
        _padded(camera_position),
        _padded(view[0, :3]),
        _padded(view[1, :3]),
        _padded(-view[2, :3]),
    ]
    return np.concatenate(parts).astype(np.float32)


def pack_timings(time, delta_time) -> np.ndarray:
    """Timings uniform block: total time and frame time."""
    return np.array([time, delta_time], dtype=np.float32)


class CloudState:
    """Per-frame state of the cloud renderer kept on the CPU.

    Particle data lives in two buffers that swap roles every frame: the
    move pass reads one and writes the other, and the depths written in a
    frame decide the drawing order of the next.
    """

    def __init__(self, width, height, far_plane, max_particles=MAX_CLOUD_PARTICLES):
        if width <= 0 or height <= 0:
            raise ValueError("screen resolution must be positive")
        if not 0 < max_particles <= MAX_INDEXABLE_PARTICLES:
            raise ValueError(f"particle count must be in 1..{MAX_INDEXABLE_PARTICLES}")
        self.width = int(width)
        self.height = int(height)
        self.far_plane = float(far_plane)
        self.max_particles = int(max_particles)
        self.index_order = np.arange(self.max_particles, dtype=np.uint16)
        self.num_render = 0
        self.read_buffer = 0
        self.light: LightSetup | None = None
        self.light_view_projection = np.identity(4)
        self.light_distance_plane = np.zeros(4, dtype=np.float32)
        self.light_direction_view = np.zeros(3)

    @property
    def write_buffer(self) -> int:
        """Index of the buffer the move pass writes this frame."""
        return 1 - self.read_buffer

    @property
    def visible_indices(self) -> np.ndarray:
        """Particle indices to draw, farthest first."""
        return self.index_order[: self.num_render].copy()

    def prepare_frame(self, inverse_view_projection, view, camera_direction, light_dir) -> LightSetup:
        """Set up the light camera and lighting uniforms for this frame."""
        view_projection = _inverse(inverse_view_projection)
        light = light_matrices(view_projection, camera_direction, light_dir)
        self.light = light
        self.light_view_projection = light.view_projection
        self.light_distance_plane = light_distance_plane(light.view, light.far_plane)
        self.light_direction_view = transform_normal(-np.asarray(light_dir, dtype=float), view)
        return light

    def finish_frame(self, depths) -> np.ndarray:
        """Sort by the depths the move pass wrote and swap the particle buffers."""
        depths = np.asarray(depths, dtype=float).ravel()
        if depths.size != self.max_particles:
            raise ValueError(f"expected {self.max_particles} depths, got {depths.size}")
        visible = sort_particles(depths, self.far_plane)
        self.num_render = len(visible)
        self.index_order[: self.num_render] = visible
        self.read_buffer = self.write_buffer
        return self.visible_indices