"""Pressure-gradient velocity correction."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from mpsbubble.particles import (
    GHOST,
    GHOST_OR_DUMMY,
    XDIM,
    YDIM,
    ZDIM,
    Particles,
    move_particles,
)

log = logging.getLogger(__name__)

WeightFunction = Callable[[float, float], float]


@dataclass
class GradientSettings:
    """Parameters of the pressure-gradient model."""

    radius: float
    n_zero: float
    mass_density: Sequence[float]
    wall_type: int
    dummy_wall_type: int
    use_tensor: bool = False
    kondo: bool = False
    artificial_pressure: float = 0.0
    kondo_collision_ratio: float = 0.0
    average_distance: float = 0.0


def gradient_tensor_inverse(
    tensor: Sequence[Sequence[float]], dimensions: int
) -> list[list[float]]:
    """Inverse of the 2x2 gradient tensor, embedded in a 3x3 matrix.

    A singular tensor gives ``dimensions`` times the identity; in three
    dimensions no inverse is available and the zero matrix is returned.
    """
    if dimensions == 3:
        return [[0.0] * 3 for _ in range(3)]
    det = tensor[0][0] * tensor[1][1] - tensor[0][1] * tensor[1][0]
    if det == 0:
        return [[float(dimensions) if r == c else 0.0 for c in range(3)] for r in range(3)]
    inverse = [[1.0 if r == c else 0.0 for c in range(3)] for r in range(3)]
    inverse[0][0] = tensor[1][1] / det
    inverse[0][1] = -tensor[0][1] / det
    inverse[1][0] = -tensor[1][0] / det
    inverse[1][1] = tensor[0][0] / det
    return inverse


def pressure_gradient_correction(
    particles: Particles,
    neighbors: Sequence[Iterable[int]],
    weight: WeightFunction,
    settings: GradientSettings,
    dt: float,
) -> list[list[float]]:
    """Fill ``particles.velocity_correction`` from the pressure gradient and return it."""
    dims = particles.dimensions
    pos = particles.position
    types = particles.type
    pressure = particles.pressure
    correction = particles.velocity_correction
    collision_radius = settings.kondo_collision_ratio * settings.average_distance

    for i, kind in enumerate(types):
        correction[XDIM][i] = 0.0
        correction[YDIM][i] = 0.0
        if dims == 3:
            correction[ZDIM][i] = 0.0

        if particles.boundary_condition[i] == GHOST_OR_DUMMY:
            continue
        if kind in (GHOST, settings.dummy_wall_type, settings.wall_type):
            continue

        for j in neighbors[i]:
            other = types[j]
            if other in (GHOST, settings.dummy_wall_type):
                continue

            xji = pos[XDIM][i] - pos[XDIM][j]
            yji = pos[YDIM][i] - pos[YDIM][j]
            squared = xji * xji + yji * yji
            zji = 0.0
            if dims == 3:
                zji = pos[ZDIM][i] - pos[ZDIM][j]
                squared += zji * zji
            distance = math.sqrt(squared)
            average_density = (
                settings.mass_density[kind] + settings.mass_density[other]
            ) / 2.0

            magnitude = dt if settings.use_tensor else dims * dt
            if settings.kondo:
                magnitude *= (
                    pressure[j] - pressure[i] + settings.artificial_pressure
                ) / distance
            else:
                magnitude *= (pressure[j] + pressure[i]) / distance
            magnitude *= weight(distance, settings.radius)
            magnitude /= average_density * settings.n_zero

            dvz = 0.0
            if settings.use_tensor:
                inverse = gradient_tensor_inverse(
                    [[xji * xji, xji * yji], [xji * yji, yji * yji]], dims
                )
                dvx = magnitude * (xji * inverse[0][0] + yji * inverse[0][1]) / distance
                dvy = magnitude * (xji * inverse[1][0] + yji * inverse[1][1]) / distance
                if dims == 3:
                    dvz = magnitude * zji / distance
                    log.warning("gradient tensor is not available in three dimensions")
            else:
                dvx = magnitude * xji / distance
                dvy = magnitude * yji / distance
                if dims == 3:
                    dvz = magnitude * zji / distance

            if settings.kondo and distance < collision_radius:
                push = 0.01 * (collision_radius - distance) * dt / distance
                dvx -= push * xji
                dvy -= push * yji
                if dims == 3:
                    dvz -= push * zji

            correction[XDIM][i] += dvx
            correction[YDIM][i] += dvy
            if dims == 3:
                correction[ZDIM][i] += dvz

    return correction


def correct_velocity_and_position(
    particles: Particles,
    neighbors: Sequence[Iterable[int]],
    weight: WeightFunction,
    settings: GradientSettings,
    dt: float,
) -> None:
    """Add the pressure-gradient correction to velocities and move particles by it."""
    for d in range(particles.dimensions):
        particles.velocity_correction[d] = [0.0] * len(particles)
    pressure_gradient_correction(particles, neighbors, weight, settings, dt)
    for d in range(particles.dimensions):
        particles.velocity[d] = [
            v + c for v, c in zip(particles.velocity[d], particles.velocity_correction[d])
        ]
    move_particles(particles, particles.velocity_correction, dt)