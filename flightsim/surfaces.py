"""Layout of the airport ground: asphalt slabs, runway paint, cross markings and tree billboards."""

from __future__ import annotations

import numpy as np

from flightsim.terrain import PatchSpec
from flightsim.vecmath import translate

ASPHALT = PatchSpec(128, 128, -199.9)
PAINT = PatchSpec(4, 32, -199.8)
CROSS = PatchSpec(8, 36, -199.8)

ASPHALT_SLABS = 4
ASPHALT_START_Z = -256 - 64
ASPHALT_STEP_Z = 128
CROSS_COUNT = 8
CROSS_START = (-56.0, 0.0, -40.0)
CROSS_STEP_X = 16
PAINT_COUNT = 2
PAINT_STEP_Z = 48

TREE_HEIGHT = -200.0
TREE_HALF_SIZE = 1.0
TREE_SCALE = 100.0


def asphalt_transforms() -> list[np.ndarray]:
    """Model matrices of the asphalt slabs laid end to end along z."""
    trans = translate(np.identity(4), (0.0, 0.0, ASPHALT_START_Z))
    transforms = []
    for _ in range(ASPHALT_SLABS):
        trans = translate(trans, (0.0, 0.0, ASPHALT_STEP_Z))
        transforms.append(trans)
    return transforms


def cross_transforms(base) -> list[np.ndarray]:
    """Model matrices of the cross markings on the slab placed at ``base``."""
    trans = translate(base, CROSS_START)
    transforms = []
    for _ in range(CROSS_COUNT):
        transforms.append(trans)
        trans = translate(trans, (float(CROSS_STEP_X), 0.0, 0.0))
    return transforms


def paint_transforms(base) -> list[np.ndarray]:
    """Model matrices of the centre-line paint strips on the slab placed at ``base``.

    The first strip sits at the slab's own origin.
    """
    trans = np.asarray(base, dtype=float)
    transforms = []
    for _ in range(PAINT_COUNT):
        transforms.append(trans)
        trans = translate(trans, (0.0, 0.0, float(PAINT_STEP_Z)))
    return transforms


def tree_quad(height=TREE_HALF_SIZE) -> tuple[np.ndarray, np.ndarray]:
    """Corners and triangle-strip indices of a square billboard of half size ``height``."""
    vertices = np.array(
        [(-height, -height), (-height, height), (height, -height), (height, height)],
        dtype=float,
    )
    indices = np.array([0, 1, 2, 3], dtype=np.uint32)
    return vertices, indices


def tree_model_matrix() -> np.ndarray:
    """Model matrix that scales the billboard to world size."""
    return np.diag([TREE_SCALE, TREE_SCALE, TREE_SCALE, 1.0])