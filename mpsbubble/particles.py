"""Particle state arrays and the basic kinematic updates applied to them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

XDIM, YDIM, ZDIM = 0, 1, 2

GHOST = -1
"""Particle type of a particle that no longer takes part in the calculation."""

GHOST_OR_DUMMY = -1
"""Boundary-condition flag of ghost and dummy-wall particles."""


def _scalars(count: int) -> list[float]:
    return [0.0] * count


def _vectors(count: int) -> list[list[float]]:
    return [[0.0] * count for _ in range(3)]


@dataclass
class Particles:
    """Structure-of-arrays state of every particle in the simulation.

    Vector quantities are stored as three rows, one per axis, so that
    ``position[YDIM][i]`` is the y coordinate of particle ``i``.
    """

    dimensions: int
    type: list[int] = field(default_factory=list)
    initial_type: list[int] = field(default_factory=list)
    position: list[list[float]] = field(default_factory=list)
    velocity: list[list[float]] = field(default_factory=list)
    velocity_correction: list[list[float]] = field(default_factory=list)
    pressure: list[float] = field(default_factory=list)
    number_density: list[float] = field(default_factory=list)
    moles_of_bubbles: list[float] = field(default_factory=list)
    number_of_bubbles: list[float] = field(default_factory=list)
    impurity_concentration: list[float] = field(default_factory=list)
    bubble_radius: list[float] = field(default_factory=list)
    void_rate: list[float] = field(default_factory=list)
    bucket_pressure: list[float] = field(default_factory=list)
    source_term: list[float] = field(default_factory=list)
    boundary_condition: list[int] = field(default_factory=list)
    is_inflow: list[bool] = field(default_factory=list)
    position_previous: list[list[float]] = field(default_factory=list)
    velocity_previous: list[list[float]] = field(default_factory=list)
    pressure_previous: list[float] = field(default_factory=list)
    number_density_previous: list[float] = field(default_factory=list)
    moles_of_bubbles_previous: list[float] = field(default_factory=list)
    number_of_bubbles_previous: list[float] = field(default_factory=list)
    impurity_concentration_previous: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.type)

    def store_previous(self) -> None:
        """Copy the current state into the ``*_previous`` arrays."""
        self.position_previous = [row.copy() for row in self.position]
        self.velocity_previous = [row.copy() for row in self.velocity]
        self.pressure_previous = self.pressure.copy()
        self.number_density_previous = self.number_density.copy()
        self.moles_of_bubbles_previous = self.moles_of_bubbles.copy()
        self.number_of_bubbles_previous = self.number_of_bubbles.copy()
        self.impurity_concentration_previous = self.impurity_concentration.copy()

    def squared_distance(self, i: int, j: int) -> float:
        """Squared distance between particles ``i`` and ``j``."""
        axes = 3 if self.dimensions == 3 else 2
        return sum(
            (self.position[d][j] - self.position[d][i]) ** 2 for d in range(axes)
        )

    def distance(self, i: int, j: int) -> float:
        """Distance between particles ``i`` and ``j``."""
        return math.sqrt(self.squared_distance(i, j))

    def is_ghost(self, i: int) -> bool:
        return self.type[i] == GHOST

    def make_ghost(self, i: int) -> None:
        """Take particle ``i`` out of the calculation."""
        self.type[i] = GHOST


def new_particles(count: int, dimensions: int) -> Particles:
    """Create ``count`` zero-initialised fluid particles."""
    if count < 0:
        raise ValueError("particle count must not be negative")
    if dimensions not in (2, 3):
        raise ValueError("dimensions must be 2 or 3")
    return Particles(
        dimensions=dimensions,
        type=[0] * count,
        initial_type=[0] * count,
        position=_vectors(count),
        velocity=_vectors(count),
        velocity_correction=_vectors(count),
        pressure=_scalars(count),
        number_density=_scalars(count),
        moles_of_bubbles=_scalars(count),
        number_of_bubbles=_scalars(count),
        impurity_concentration=_scalars(count),
        bubble_radius=_scalars(count),
        void_rate=_scalars(count),
        bucket_pressure=_scalars(count),
        source_term=_scalars(count),
        boundary_condition=[0] * count,
        is_inflow=[False] * count,
        position_previous=_vectors(count),
        velocity_previous=_vectors(count),
        pressure_previous=_scalars(count),
        number_density_previous=_scalars(count),
        moles_of_bubbles_previous=_scalars(count),
        number_of_bubbles_previous=_scalars(count),
        impurity_concentration_previous=_scalars(count),
    )


def move_particles(
    particles: Particles, velocities: Sequence[Sequence[float]], dt: float
) -> None:
    """Advance every non-ghost particle by ``velocities * dt``."""
    for i, kind in enumerate(particles.type):
        if kind == GHOST:
            continue
        for d in range(particles.dimensions):
            particles.position[d][i] += velocities[d][i] * dt


def apply_gravity(
    particles: Particles,
    gravity: Sequence[float],
    dt: float,
    wall_type: int,
    dummy_wall_type: int,
) -> None:
    """Accelerate every fluid particle by gravity over one time step."""
    for i, kind in enumerate(particles.type):
        if kind in (GHOST, dummy_wall_type, wall_type):
            continue
        for d in range(particles.dimensions):
            particles.velocity[d][i] += gravity[d] * dt


def distance_between_points(
    first: Sequence[float], second: Sequence[float], dimensions: int
) -> float:
    """Euclidean distance between two points over the first ``dimensions`` axes."""
    return math.sqrt(sum((b - a) ** 2 for a, b in zip(first[:dimensions], second[:dimensions])))


@dataclass(frozen=True)
class InteractionRadii:
    """Interaction radii in metres."""

    number_density: float
    gradient: float
    gradient_squared: float
    laplacian_viscosity: float
    laplacian_pressure: float
    collision: float
    collision_squared: float


def interaction_radii(
    average_distance: float,
    number_density_ratio: float,
    gradient_ratio: float,
    viscosity_ratio: float,
    pressure_ratio: float,
    collision_ratio: float,
) -> InteractionRadii:
    """Convert radii given as multiples of the particle spacing into metres."""
    gradient = gradient_ratio * average_distance
    collision = collision_ratio * average_distance
    return InteractionRadii(
        number_density=number_density_ratio * average_distance,
        gradient=gradient,
        gradient_squared=gradient * gradient,
        laplacian_viscosity=viscosity_ratio * average_distance,
        laplacian_pressure=pressure_ratio * average_distance,
        collision=collision,
        collision_squared=collision * collision,
    )