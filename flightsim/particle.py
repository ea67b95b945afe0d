"""Flame particles that drift with a push and react to their neighbours."""

from __future__ import annotations

import random

import numpy as np

from flightsim.vecmath import normalize, vec3

INITIAL_LIFETIME = 100.0
CROWD_LIMIT = 20
CROWD_REPULSION = 0.02
SPARSE_ATTRACTION = -2.0


def squared_magnitude(v) -> float:
    """Squared length of a 3-vector."""
    x, y, z = (float(c) for c in v)
    return x * x + y * y + z * z


class Particle:
    """A particle spawned slightly below and around ``position``."""

    def __init__(self, position, velocity, rng=None):
        rng = rng if rng is not None else random.Random()
        jitter = vec3((rng.random() - 0.5) / 100, -0.1, (rng.random() - 0.5) / 100)
        self.position = np.asarray(position, dtype=float) + jitter
        self.velocity = np.array(velocity, dtype=float)
        self.lifetime = INITIAL_LIFETIME

    def update(self, in_range, direction, delta_time) -> None:
        """Age the particle and move it.

        It accelerates along ``direction``; crowded particles (more than 20
        in range) push away from their neighbours, sparse ones pull in.
        """
        neighbours = list(in_range)
        factor = CROWD_REPULSION if len(neighbours) > CROWD_LIMIT else SPARSE_ATTRACTION
        acceleration = normalize(np.asarray(direction, dtype=float))
        self.lifetime -= delta_time
        for other in neighbours:
            if other is not self:
                acceleration = acceleration + (self.position - other.position) * factor
        self.velocity = self.velocity + acceleration * delta_time / 10.0
        self.position = self.position + self.velocity * delta_time