"""Oriented bounding boxes attached to a moving object."""

from __future__ import annotations

from itertools import product

import numpy as np

_CUBE_EDGES = (
    ((-1, -1, -1), (-1, -1, 1)),
    ((1, -1, -1), (1, -1, 1)),
    ((-1, 1, -1), (-1, 1, 1)),
    ((1, 1, -1), (1, 1, 1)),
    ((-1, -1, -1), (-1, 1, -1)),
    ((1, -1, -1), (1, 1, -1)),
    ((-1, -1, 1), (-1, 1, 1)),
    ((1, -1, 1), (1, 1, 1)),
    ((-1, -1, -1), (1, -1, -1)),
    ((-1, 1, -1), (1, 1, -1)),
    ((-1, -1, 1), (1, -1, 1)),
    ((-1, 1, 1), (1, 1, 1)),
)


class BoundingBox:
    """A box centred at ``position`` with half-extents ``scale`` in object space.

    The box follows its object through the object's model matrix, which is
    refreshed with :meth:`update`.
    """

    def __init__(self, object_model, position, scale):
        local = np.diag(np.append(np.asarray(scale, dtype=float), 1.0))
        local[:3, 3] = np.asarray(position, dtype=float)
        self.local_model = local
        self.update(object_model)

    @property
    def world_model(self) -> np.ndarray:
        """Matrix mapping the unit cube to world space."""
        return self.object_model @ self.local_model

    def update(self, object_model) -> None:
        """Take a new object model matrix and recompute the inverse transform."""
        self.object_model = np.asarray(object_model, dtype=float).copy()
        try:
            self._inverse = np.linalg.inv(self.world_model)
        except np.linalg.LinAlgError as exc:
            raise ValueError("bounding box transform is singular") from exc

    def contains(self, point) -> bool:
        """True when the world-space ``point`` lies inside or on the box."""
        local = self._inverse @ np.append(np.asarray(point, dtype=float), 1.0)
        return bool(np.all(np.abs(local[:3]) <= 1.0))

    def corners(self) -> list[np.ndarray]:
        """The eight world-space corners."""
        m = self.world_model
        return [(m @ np.array([*c, 1.0]))[:3] for c in product((-1.0, 1.0), repeat=3)]

    def edges(self) -> list[tuple[np.ndarray, np.ndarray]]:
        """The twelve world-space edges as (start, end) pairs."""
        m = self.world_model

        def to_world(p):
            return (m @ np.array([*p, 1.0]))[:3]

        return [(to_world(a), to_world(b)) for a, b in _CUBE_EDGES]