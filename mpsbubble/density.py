"""Particle number density."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from mpsbubble.particles import GHOST, Particles

WeightFunction = Callable[[float, float], float]

CONSTANT_WEIGHT_RADIUS_RATIO = 2.1


@dataclass
class NumberDensity:
    """Number density of every particle, in total and split by neighbour type.

    ``constant_weight`` counts the neighbours within 2.1 particle spacings.
    """

    total: list[float]
    by_type: list[list[float]]
    constant_weight: list[float]


def particle_number_density(
    particles: Particles,
    neighbors: Sequence[Iterable[int]],
    weight: WeightFunction,
    radius: float,
    number_of_types: int,
    average_distance: float,
) -> NumberDensity:
    """Compute number densities and store the totals in ``particles.number_density``.

    Ghost particles keep their previous density.
    """
    count = len(particles)
    by_type = [[0.0] * number_of_types for _ in range(count)]
    constant_weight = [0.0] * count
    limit = CONSTANT_WEIGHT_RADIUS_RATIO * average_distance

    for i, kind in enumerate(particles.type):
        if kind == GHOST:
            continue
        row = by_type[i]
        for j in neighbors[i]:
            other = particles.type[j]
            if other == GHOST:
                continue
            distance = particles.distance(i, j)
            row[other] += weight(distance, radius)
            if distance <= limit:
                constant_weight[i] += 1.0
        particles.number_density[i] = sum(row)

    return NumberDensity(
        total=particles.number_density.copy(),
        by_type=by_type,
        constant_weight=constant_weight,
    )