"""Cavitation bubbles: growth, rising and buoyancy."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence

from mpsbubble.particles import GHOST, YDIM, Particles

WeightFunction = Callable[[float, float], float]


def _three() -> list[float]:
    return [0.0, 0.0, 0.0]


@dataclass
class FluidProperties:
    """Physical properties of the liquid and its bubbles."""

    liquid_density: float
    bubble_density: float
    kinematic_viscosity: float
    gravity: list[float] = field(default_factory=_three)
    saturated_vapor_pressure: float = 0.0


@dataclass
class BubbleSettings:
    """Model parameters of the bubble calculation."""

    wall_type: int
    dummy_wall_type: int
    rigid_type: int
    beta_zero: float
    average_distance: float
    time_to_update_average_pressure: float = 0.0
    initial_dt: float = 0.0


def saturated_vapor_pressure(temperature: float) -> float:
    """Saturated vapour pressure of water in Pa at ``temperature`` degrees Celsius."""
    return 610.78 * 10.0 ** ((7.5 * temperature) / (temperature + 237.3))


def vertical_cosine(particles: Particles, distance: float, i: int, j: int) -> float:
    """Cosine between the vector from ``i`` to ``j`` and the vertical axis."""
    return (particles.position[YDIM][j] - particles.position[YDIM][i]) / abs(distance)


def influence_radius(average_distance: float, dimensions: int) -> float:
    """Radius within which a rising bubble spreads to neighbours."""
    if dimensions == 2:
        return 4.1 * average_distance
    return 3.1 * average_distance


def bubble_volume(diameter: float, dimensions: int) -> float:
    """Volume assigned to a bubble of the given diameter."""
    return diameter**dimensions


def radius_change(
    bucket_pressure: float, properties: FluidProperties, dt: float
) -> float:
    """Change of bubble radius over ``dt`` driven by the vapour pressure difference."""
    delta_p = properties.saturated_vapor_pressure - bucket_pressure
    rate = math.copysign(1.0, delta_p) * math.sqrt(
        2.0 * abs(delta_p) / (3.0 * properties.liquid_density)
    )
    return rate * dt


def rising_velocity(diameter: float, properties: FluidProperties) -> float:
    """Terminal rising velocity of a bubble in the Stokes, Allen or Newton regime."""
    rho = properties.liquid_density
    nu = properties.kinematic_viscosity
    mu = rho * nu
    drive = (properties.bubble_density - rho) * properties.gravity[YDIM]

    velocity = diameter**2 * drive / (18.0 * mu)
    reynolds = velocity * diameter / nu
    if reynolds >= 2:
        velocity = ((4.0 / 225.0) * drive**2 / (rho * mu)) ** (1.0 / 3.0) * diameter
        reynolds = velocity * diameter / nu
        if reynolds >= 500:
            velocity = math.sqrt((4.0 / (3 * 0.44)) * drive * diameter / rho)
    return velocity


def _excluded(settings: BubbleSettings) -> tuple[int, int, int, int]:
    return (settings.wall_type, settings.dummy_wall_type, settings.rigid_type, GHOST)


def rise_bubbles(
    particles: Particles,
    neighbors: Sequence[Iterable[int]],
    weight: WeightFunction,
    properties: FluidProperties,
    settings: BubbleSettings,
    dt: float,
) -> None:
    """Grow every bubble and hand part of it to the neighbours above."""
    dims = particles.dimensions
    excluded = _excluded(settings)
    radius = particles.bubble_radius
    bubbles = particles.number_of_bubbles
    previous = particles.number_of_bubbles_previous
    reach = influence_radius(settings.average_distance, dims)

    for i, kind in enumerate(particles.type):
        if kind in excluded:
            continue
        radius[i] += radius_change(particles.bucket_pressure[i], properties, dt)
        if radius[i] < 0:
            radius[i] = 0.0
        velocity = rising_velocity(radius[i] * 2, properties)
        if velocity <= 0.0:
            continue
        beta = settings.beta_zero / velocity

        for j in neighbors[i]:
            if j == i or particles.type[j] in excluded:
                continue
            distance = particles.distance(i, j)
            if distance == 0.0:
                continue
            cosine = vertical_cosine(particles, distance, i, j)
            if cosine <= 0.0:
                continue
            share = (dt / beta) * weight(distance, reach) * cosine
            bubbles[j] += share * previous[i]
            bubbles[i] -= share * previous[i]
            spread = math.pow(share, 1.0 / dims)
            radius[j] += spread * radius[i]
            radius[i] -= spread * radius[i]


def apply_buoyancy(
    particles: Particles,
    properties: FluidProperties,
    settings: BubbleSettings,
    dt: float,
) -> None:
    """Accelerate particles carrying bubbles against gravity."""
    dims = particles.dimensions
    spacing = settings.average_distance
    rho = properties.liquid_density
    factor = (rho - properties.bubble_density) / rho

    for i, kind in enumerate(particles.type):
        if kind in (GHOST, settings.dummy_wall_type, settings.wall_type):
            continue
        r = particles.bubble_radius[i]
        if dims == 3:
            void_rate = 4 * math.pi * r**3 / (3 * spacing**3) + 4 * math.pi * r**3
        else:
            void_rate = 4 * math.pi * r**2 / spacing**2 + 4 * math.pi * r**2
        for d in range(dims):
            particles.velocity[d][i] -= factor * void_rate * properties.gravity[d] * dt


def calculate_bubbles(
    particles: Particles,
    neighbors: Sequence[Iterable[int]],
    weight: WeightFunction,
    properties: FluidProperties,
    settings: BubbleSettings,
    dt: float,
    time_step: int,
    simulation_time: float,
) -> bool:
    """Run one bubble step once the start-up period is over.

    Returns True when the bubbles were updated.
    """
    if time_step < settings.initial_dt * 10:
        return False
    if simulation_time < settings.time_to_update_average_pressure:
        return False
    rise_bubbles(particles, neighbors, weight, properties, settings, dt)
    apply_buoyancy(particles, properties, settings, dt)
    return True