"""Regular grid meshes for ground patches."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

UV_REPEAT = 40


@dataclass(frozen=True)
class PatchSpec:
    """Size and elevation of a flat square-grid patch with ``n`` points per side."""

    chunk_width: int
    chunk_height: int
    absolute_height: float
    n: int = 128


GRASS = PatchSpec(512, 512, -200.0)


@dataclass
class Mesh:
    """Triangle mesh: per-vertex positions, texture coordinates and normals."""

    vertices: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray
    normals: np.ndarray

    @property
    def triangles(self) -> np.ndarray:
        """Indices grouped as one row per triangle."""
        return self.indices.reshape(-1, 3)


def _half(extent):
    return extent // 2 if isinstance(extent, int) else extent / 2


def build_grid(n, chunk_width, chunk_height, height_at: Callable[[int, int], float]) -> Mesh:
    """Grid of ``n`` by ``n`` points centred on the origin.

    ``height_at(i, j)`` gives the elevation of grid point ``(i, j)``. Each
    grid cell becomes two triangles.
    """
    if n < 2:
        raise ValueError("a grid needs at least two points per side")
    step = 1.0 / (n - 1)
    half_w = _half(chunk_width)
    half_h = _half(chunk_height)
    vertices = []
    uvs = []
    indices = []
    for i in range(n):
        for j in range(n):
            vertices.append(
                (i * step * chunk_width - half_w, float(height_at(i, j)), j * step * chunk_height - half_h)
            )
            uvs.append((i / n * UV_REPEAT, j / n * UV_REPEAT))
            if i < n - 1 and j < n - 1:
                here = i * n + j
                indices += [here, here + n, here + n + 1, here, here + 1, here + n + 1]
    return Mesh(
        vertices=np.array(vertices, dtype=float),
        uvs=np.array(uvs, dtype=float),
        indices=np.array(indices, dtype=np.uint32),
        normals=compute_normals(vertices, indices),
    )


def compute_normals(vertices, indices) -> np.ndarray:
    """Smooth upward-facing vertex normals blended triangle by triangle."""
    verts = np.asarray(vertices, dtype=float).tolist()
    flat = np.asarray(indices, dtype=np.int64).ravel()
    if flat.size % 3:
        raise ValueError("index count must be a multiple of three")
    normals = [[0.0, 0.0, 0.0] for _ in verts]
    for a, b, c in flat.reshape(-1, 3).tolist():
        (x0, y0, z0), (x1, y1, z1), (x2, y2, z2) = verts[a], verts[b], verts[c]
        ux, uy, uz = x1 - x0, y1 - y0, z1 - z0
        vx, vy, vz = x2 - x0, y2 - y0, z2 - z0
        nx, ny, nz = uy * vz - uz * vy, uz * vx - ux * vz, ux * vy - uy * vx
        if ny < 0:
            nx, ny, nz = -nx, -ny, -nz
        for k in (a, b, c):
            sx, sy, sz = normals[k][0] + nx, normals[k][1] + ny, normals[k][2] + nz
            length = math.sqrt(sx * sx + sy * sy + sz * sz)
            if length > 0:
                normals[k] = [sx / length, sy / length, sz / length]
    return np.array(normals, dtype=float).reshape(-1, 3)


def build_patch(spec: PatchSpec) -> Mesh:
    """Flat patch at ``spec.absolute_height``."""
    return build_grid(spec.n, spec.chunk_width, spec.chunk_height, lambda i, j: spec.absolute_height)