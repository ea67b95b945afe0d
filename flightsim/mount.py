"""One square chunk of procedurally generated mountain terrain."""

from __future__ import annotations

import numpy as np

from flightsim.heightgen import HeightGenerator
from flightsim.terrain import Mesh, build_grid
from flightsim.vecmath import translate


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class Mount:
    """A mountain chunk of ``N`` by ``N`` grid points placed at (x_offset, z_offset).

    Neighbouring chunks are ``CHUNK_WIDTH - 1`` apart so that their edge
    rows share the same heights.
    """

    N = 64
    CHUNK_WIDTH = 512
    CHUNK_HEIGHT = 512
    ABSOLUTE_HEIGHT = -200.0
    MESH_WIDTH = CHUNK_WIDTH / N
    MESH_HEIGHT = CHUNK_HEIGHT / N

    def __init__(self, mount_id, x_offset, z_offset, generator: HeightGenerator):
        self.id = mount_id
        self.x_offset = int(x_offset)
        self.z_offset = int(z_offset)
        self.generator = generator
        self.heights: np.ndarray | None = None
        self.mesh: Mesh | None = None

    @property
    def grid_offset(self) -> tuple[int, int]:
        """Offset of this chunk's first grid point in the generator's lattice."""
        return (
            _trunc_div(self.x_offset, self.CHUNK_WIDTH - 1) * (self.N - 1),
            _trunc_div(self.z_offset, self.CHUNK_HEIGHT - 1) * (self.N - 1),
        )

    @property
    def model_matrix(self) -> np.ndarray:
        """Translation placing the chunk in the world."""
        return translate(np.identity(4), (float(self.x_offset), 0.0, float(self.z_offset)))

    def build(self) -> Mesh:
        """Sample the heights and build the chunk's mesh."""
        i_offset, j_offset = self.grid_offset
        heights = np.empty((self.N, self.N), dtype=float)

        def height_at(i: int, j: int) -> float:
            h = self.ABSOLUTE_HEIGHT + self.generator.generate_height(i_offset + i, j_offset + j)
            heights[i, j] = h
            return h

        self.mesh = build_grid(self.N, self.CHUNK_WIDTH, self.CHUNK_HEIGHT, height_at)
        self.heights = heights
        return self.mesh