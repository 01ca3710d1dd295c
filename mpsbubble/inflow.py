"""Inflow boundary: particles fed into the domain across a plane."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import MutableSequence, Sequence

from mpsbubble.particles import GHOST, ZDIM, Particles


def _three() -> list[float]:
    return [0.0, 0.0, 0.0]


def _point(particles: Particles, index: int) -> tuple[float, float, float]:
    return tuple(particles.position[d][index] for d in range(3))  # type: ignore[return-value]


@dataclass
class InflowBoundary:
    """A plane through ``position`` whose normal is the inflow velocity."""

    enabled: bool
    wall_type: int
    dummy_wall_type: int
    position: list[float] = field(default_factory=_three)
    velocity: list[float] = field(default_factory=_three)
    auto_level: bool = False
    moles_of_bubbles: float = 0.0
    number_of_bubbles: float = 0.0

    def _speed(self, dimensions: int) -> float:
        return math.sqrt(sum(v * v for v in self.velocity[:dimensions]))

    def signed_distance(self, point: Sequence[float], dimensions: int) -> float:
        """Distance of ``point`` from the plane, positive downstream."""
        along = sum(
            v * (p - origin)
            for v, p, origin in zip(
                self.velocity[:dimensions], point[:dimensions], self.position[:dimensions]
            )
        )
        return along / self._speed(dimensions)

    def classify(self, particles: Particles, index: int, average_distance: float) -> int:
        """Particle type that an inflow particle should currently have."""
        if not self.enabled or not particles.is_inflow[index]:
            return GHOST
        distance = self.signed_distance(_point(particles, index), particles.dimensions)
        if distance < -average_distance:
            return self.dummy_wall_type
        if distance < average_distance:
            return self.wall_type
        return 0

    def set_level(self, particles: Particles) -> bool:
        """Move the plane to the most downstream inflow particle.

        Returns False when automatic levelling is off or there is no inflow particle.
        """
        if not self.auto_level:
            return False
        best = None
        highest = -1.0e9
        for index, inflow in enumerate(particles.is_inflow):
            if not inflow:
                continue
            distance = self.signed_distance(_point(particles, index), particles.dimensions)
            if distance > highest:
                highest = distance
                best = index
        if best is None:
            return False
        self.position = list(_point(particles, best))
        return True

    def assign_types(self, particles: Particles, average_distance: float) -> None:
        """Set the type of every inflow particle from its place relative to the plane."""
        for index, inflow in enumerate(particles.is_inflow):
            if inflow:
                particles.type[index] = self.classify(particles, index, average_distance)

    def apply_velocity(self, particles: Particles) -> None:
        """Give every inflow particle the inflow velocity."""
        if not self.enabled:
            return
        for index, inflow in enumerate(particles.is_inflow):
            if not inflow:
                continue
            for d in range(3):
                particles.velocity[d][index] = self.velocity[d]
            if particles.dimensions == 2:
                particles.velocity[ZDIM][index] = 0.0

    def release_particles(
        self,
        particles: Particles,
        ghost_stack: MutableSequence[int],
        average_distance: float,
    ) -> None:
        """Turn inflow particles that crossed the plane into fluid.

        Each released particle is replaced upstream by a ghost taken from
        ``ghost_stack``; an empty stack raises IndexError.
        """
        if not self.enabled:
            return
        speed = self._speed(particles.dimensions)
        for index, inflow in enumerate(particles.is_inflow):
            if not inflow:
                continue
            wanted = self.classify(particles, index, average_distance)
            if particles.type[index] != wanted and wanted == self.wall_type:
                particles.type[index] = self.wall_type
            if wanted != 0:
                continue
            if not ghost_stack:
                raise IndexError("no ghost particle is left to refill the inflow")
            spare = ghost_stack.pop()
            for d in range(3):
                particles.position[d][spare] = (
                    particles.position[d][index]
                    - 4 * average_distance * self.velocity[d] / speed
                )
            particles.type[spare] = self.dummy_wall_type
            particles.is_inflow[spare] = True
            particles.moles_of_bubbles[spare] = 0.0
            particles.number_of_bubbles[spare] = 0.0
            particles.impurity_concentration[spare] = 0.0
            particles.bubble_radius[spare] = 0.0
            if particles.dimensions == 2:
                particles.velocity[ZDIM][spare] = 0.0

            particles.type[index] = 0
            particles.moles_of_bubbles[index] = self.moles_of_bubbles
            particles.number_of_bubbles[index] = self.number_of_bubbles
            particles.impurity_concentration[index] = 0.0
            particles.is_inflow[index] = False