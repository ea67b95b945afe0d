"""Endless mountain terrain assembled from chunks created around the viewer."""

from __future__ import annotations

import math

from flightsim.heightgen import HeightGenerator
from flightsim.mount import Mount

FLAT_HEIGHT = -200.0
SURFACE_CLEARANCE = 0.5
DEFAULT_CACHE_SIZE = 1

# Neighbours in the order they are drawn: left, right, top, down,
# left-top, left-down, right-down, right-top.
_NEIGHBOURS = (
    (-1, 0),
    (1, 0),
    (0, 1),
    (0, -1),
    (-1, 1),
    (-1, -1),
    (1, -1),
    (1, 1),
)

Chunk = tuple[int, int]


def barycentric(p1, p2, p3, pos) -> float:
    """Height at ``pos`` (x, z) on the triangle through ``p1``, ``p2``, ``p3`` (x, y, z)."""
    x1, y1, z1 = (float(c) for c in p1)
    x2, y2, z2 = (float(c) for c in p2)
    x3, y3, z3 = (float(c) for c in p3)
    px, pz = (float(c) for c in pos)
    det = (z2 - z3) * (x1 - x3) + (x3 - x2) * (z1 - z3)
    if det == 0:
        raise ValueError("triangle is degenerate in the x-z plane")
    l1 = ((z2 - z3) * (px - x3) + (x3 - x2) * (pz - z3)) / det
    l2 = ((z3 - z1) * (px - x3) + (x1 - x3) * (pz - z3)) / det
    l3 = 1.0 - l1 - l2
    return l1 * y1 + l2 * y2 + l3 * y3


def neighbour_offsets() -> list[Chunk]:
    """Chunk offsets of the eight neighbours, in drawing order."""
    return list(_NEIGHBOURS)


def chunk_of(world_x, world_z) -> Chunk:
    """Index of the chunk containing the world point (x, z)."""
    x = world_x + Mount.CHUNK_WIDTH // 2
    z = world_z + Mount.CHUNK_HEIGHT // 2
    return (math.floor(x / Mount.CHUNK_WIDTH), math.floor(z / Mount.CHUNK_HEIGHT))


class Mounts:
    """A growing set of mountain chunks sharing one height generator.

    Chunks within ``cache_size`` of the origin are built up front; others
    are built on demand as the viewer approaches them.
    """

    def __init__(self, generator=None, cache_size=DEFAULT_CACHE_SIZE):
        if cache_size < 0:
            raise ValueError("cache size must not be negative")
        self.generator = generator if generator is not None else HeightGenerator()
        self.cache_size = int(cache_size)
        self.current_chunk: Chunk = (0, 0)
        self._chunks: dict[Chunk, Mount] = {}
        self._ensure((0, 0))
        for i in range(-self.cache_size, self.cache_size + 1):
            for j in range(-self.cache_size, self.cache_size + 1):
                self._ensure((i, j))

    def _ensure(self, chunk: Chunk) -> Mount:
        mount = self._chunks.get(chunk)
        if mount is None:
            i, j = chunk
            mount = Mount(
                len(self._chunks),
                i * (Mount.CHUNK_WIDTH - 1),
                j * (Mount.CHUNK_HEIGHT - 1),
                self.generator,
            )
            mount.build()
            self._chunks[chunk] = mount
        return mount

    def visible_chunks(self, position) -> list[Mount]:
        """The chunk under ``position`` followed by its eight neighbours.

        Missing chunks are built on the way.
        """
        x, _, z = (float(c) for c in position)
        self.current_chunk = chunk_of(x, z)
        cx, cz = self.current_chunk
        return [self._ensure((cx + dx, cz + dz)) for dx, dz in ((0, 0), *_NEIGHBOURS)]

    def height_at(self, world_x, world_z) -> float:
        """Ground height under (x, z), slightly raised above the surface.

        Points in chunks not built yet, in a chunk's last grid row or column,
        or left of a chunk's local origin give the flat height of -200.
        """
        wx = world_x + Mount.CHUNK_WIDTH // 2
        wz = world_z + Mount.CHUNK_HEIGHT // 2
        chunk = (math.floor(wx / Mount.CHUNK_WIDTH), math.floor(wz / Mount.CHUNK_HEIGHT))
        mount = self._chunks.get(chunk)
        if mount is None or mount.heights is None:
            return FLAT_HEIGHT

        chunk_x = math.fmod(wx, Mount.CHUNK_WIDTH)
        chunk_z = math.fmod(wz, Mount.CHUNK_HEIGHT)
        grid_x = math.floor(chunk_x / Mount.MESH_WIDTH)
        grid_z = math.floor(chunk_z / Mount.MESH_HEIGHT)
        mesh_x = math.fmod(chunk_x, Mount.MESH_WIDTH) / Mount.MESH_WIDTH
        mesh_z = math.fmod(chunk_z, Mount.MESH_HEIGHT) / Mount.MESH_HEIGHT
        if not (0 <= grid_x < Mount.N - 1 and 0 <= grid_z < Mount.N - 1):
            return FLAT_HEIGHT

        h = mount.heights
        if mesh_x <= 1 - mesh_z:
            surface = barycentric(
                (0, h[grid_x, grid_z], 0),
                (1, h[grid_x + 1, grid_z], 0),
                (0, h[grid_x, grid_z + 1], 1),
                (mesh_x, mesh_z),
            )
        else:
            surface = barycentric(
                (1, h[grid_x + 1, grid_z], 0),
                (1, h[grid_x + 1, grid_z + 1], 1),
                (0, h[grid_x, grid_z + 1], 1),
                (mesh_x, mesh_z),
            )
        return SURFACE_CLEARANCE + surface

    def __contains__(self, chunk) -> bool:
        return tuple(chunk) in self._chunks

    def __len__(self) -> int:
        return len(self._chunks)