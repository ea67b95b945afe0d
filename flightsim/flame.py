"""Particle flame with a k-d tree for neighbour lookups."""

from __future__ import annotations

import random
from collections.abc import Iterator

import numpy as np

from flightsim.particle import Particle, squared_magnitude
from flightsim.vecmath import normalize

NUMBER_OF_PARTICLES = 10000
SPAWN_PER_UPDATE = 60
SPAWN_HEADROOM = 6
NEIGHBOUR_RANGE = 0.3
SEARCH_LIMIT = 100000.0
ROOT_DEPTH = 2
HIDDEN_COORDINATE = -5.0


def find_median(start, middle, end) -> int:
    """Which of three values is their median: 1 (start), 2 (middle) or 3 (end)."""
    if start > end:
        if middle > start:
            return 1
        if end > middle:
            return 3
        return 2
    if start > middle:
        return 1
    if middle > end:
        return 3
    return 2


class KDTree:
    """Binary tree over particles, split at the middle of the given order.

    Each node holds one particle; the particles before it form the left
    subtree and those after it the right one, so in-order iteration gives
    back the original order.
    """

    def __init__(self, depth, particles):
        particles = list(particles)
        if not particles:
            raise ValueError("a tree needs at least one particle")
        median = len(particles) // 2
        self.depth = depth
        self.point: Particle = particles[median]
        self.left = KDTree(depth + 1, particles[:median]) if median > 0 else None
        self.right = KDTree(depth + 1, particles[median + 1 :]) if median + 1 < len(particles) else None

    def __iter__(self) -> Iterator[Particle]:
        if self.left is not None:
            yield from self.left
        yield self.point
        if self.right is not None:
            yield from self.right

    def find_in_range(self, squared_range, position) -> list[Particle]:
        """Particles whose squared distance to ``position`` is within ``squared_range``.

        The search walks the tree depth first and skips every node at least
        as far as the nearest out-of-range particle seen so far, so it is a
        fast approximation rather than an exhaustive search.
        """
        position = np.asarray(position, dtype=float)
        found: list[Particle] = []
        largest = SEARCH_LIMIT
        stack: list[KDTree] = [self]
        while stack:
            node = stack.pop()
            distance = squared_magnitude(position - node.point.position)
            if distance >= largest:
                continue
            if distance <= squared_range:
                found.append(node.point)
            else:
                largest = distance
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return found


class Flame:
    """A stream of particles emitted from a moving nozzle."""

    def __init__(self, position, velocity, rng=None):
        self._rng = rng if rng is not None else random.Random()
        self.particles: list[Particle] = [Particle(position, velocity, self._rng)]
        self._positions = np.full((NUMBER_OF_PARTICLES, 3), HIDDEN_COORDINATE)

    def update(self, position, velocity, direction, delta_time) -> None:
        """Emit new particles, move all of them and drop the expired ones."""
        normalize(np.asarray(direction, dtype=float))
        if len(self.particles) < NUMBER_OF_PARTICLES - SPAWN_HEADROOM:
            self.particles.extend(
                Particle(position, velocity, self._rng) for _ in range(SPAWN_PER_UPDATE)
            )
        tree = KDTree(ROOT_DEPTH, self.particles)
        survivors: list[Particle] = []
        for particle in self.particles:
            neighbours = tree.find_in_range(NEIGHBOUR_RANGE, particle.position)
            particle.update(neighbours, direction, delta_time)
            if particle.lifetime >= 0:
                survivors.append(particle)
        self.particles = survivors

        positions = np.full((NUMBER_OF_PARTICLES, 3), HIDDEN_COORDINATE)
        shown = survivors[:NUMBER_OF_PARTICLES]
        if shown:
            positions[: len(shown)] = [p.position for p in shown]
        self._positions = positions

    def positions(self) -> np.ndarray:
        """Particle positions from the last update; unused rows hold -5."""
        return self._positions.copy()