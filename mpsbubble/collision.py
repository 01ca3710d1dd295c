"""Pairwise collisions between particles that come too close."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from mpsbubble.particles import GHOST, Particles

log = logging.getLogger(__name__)


@dataclass
class CollisionCounts:
    """Number of collisions in one sweep, split by the kinds of partners."""

    total: int = 0
    fluid_and_fluid: int = 0
    fluid_and_wall: int = 0
    fluid_and_dummy_wall: int = 0

    def record(
        self, type_i: int, type_j: int, wall_type: int, dummy_wall_type: int
    ) -> None:
        """Count one collision between particles of the given types."""
        walls = (wall_type, dummy_wall_type)
        if type_i not in walls:
            if type_j not in walls:
                self.fluid_and_fluid += 1
            elif type_j == wall_type:
                self.fluid_and_wall += 1
            else:
                self.fluid_and_dummy_wall += 1
        elif type_i == wall_type:
            self.fluid_and_wall += 1
        else:
            self.fluid_and_dummy_wall += 1
        self.total += 1

    def report(self) -> str:
        """Summary of the counts, or an empty string when nothing collided."""
        if self.total < 1:
            return ""
        text = (
            f"Collision occured. -----total:               {self.total}\n"
            f"                        fluid and fluid:     {self.fluid_and_fluid}\n"
            f"                        fluid and wall:      {self.fluid_and_wall}\n"
            f"                        fluid and dummyWall: {self.fluid_and_dummy_wall}\n"
        )
        log.info("%s", text.rstrip("\n"))
        return text


def resolve_collisions(
    particles: Particles,
    neighbors: Sequence[Iterable[int]],
    mass_density: Sequence[float],
    collision_distance: float,
    coefficient: float,
    dt: float,
    wall_type: int,
    dummy_wall_type: int,
) -> CollisionCounts:
    """Push apart approaching particle pairs closer than ``collision_distance``.

    Each pair exchanges an impulse along the line joining them so that their
    relative normal velocity is reversed and scaled by ``coefficient``. Wall
    and dummy-wall particles take part but are never moved.
    """
    dims = particles.dimensions
    pos = particles.position
    vel = particles.velocity
    types = particles.type
    limit_squared = collision_distance * collision_distance
    walls = (wall_type, dummy_wall_type)
    counts = CollisionCounts()

    for i, kind_i in enumerate(types):
        if kind_i == GHOST:
            continue
        mass_i = mass_density[kind_i]
        for j in neighbors[i]:
            if j <= i or types[j] == GHOST:
                continue
            vector = [pos[d][j] - pos[d][i] for d in range(dims)]
            squared = sum(c * c for c in vector)
            if squared >= limit_squared:
                continue

            distance = math.sqrt(squared)
            kind_j = types[j]
            mass_j = mass_density[kind_j]
            normal = [c / distance for c in vector]
            dot = sum((vel[d][i] - vel[d][j]) * normal[d] for d in range(dims))
            impulse = (1.0 + coefficient) * dot * (mass_i * mass_j) / (mass_i + mass_j)
            if impulse < 0.0:
                continue

            correction_i = [-(impulse / mass_i) * n for n in normal]
            correction_j = [(impulse / mass_j) * n for n in normal]
            counts.record(kind_i, kind_j, wall_type, dummy_wall_type)

            if kind_i not in walls:
                for d in range(dims):
                    vel[d][i] += correction_i[d]
                    pos[d][i] += correction_i[d] * dt
            if kind_j not in walls:
                for d in range(dims):
                    vel[d][j] += correction_j[d]
                    pos[d][j] += correction_j[d] * dt

    counts.report()
    return counts