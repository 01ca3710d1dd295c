"""Uniform bucket grids used to find neighbouring particles quickly."""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Optional, Sequence

from mpsbubble.domain import Domain, Location
from mpsbubble.particles import GHOST, Particles

log = logging.getLogger(__name__)

RECOMMENDED_CAPACITY_MARGIN = 3

BucketKey = tuple[int, int, int]


class BucketOverflowError(RuntimeError):
    """More particles fell into one bucket than its capacity allows."""

    def __init__(self, key: BucketKey, count: int) -> None:
        super().__init__(
            f"the number of particles in bucket{list(key)} exceeded the limit "
            f"({count}); please increase the capacity of buckets"
        )
        self.key = key
        self.count = count


class BucketPlacementError(ValueError):
    """A particle lies outside the bucket grid."""

    def __init__(self, key: BucketKey, position: Sequence[float]) -> None:
        super().__init__(
            f"particle was not able to be stored in bucket {list(key)} "
            f"at position {list(position)}"
        )
        self.key = key
        self.position = tuple(position)


def bucket_capacity(width_ratio: float, margin_ratio: float, dimensions: int) -> int:
    """Estimate how many particles one bucket can hold.

    ``width_ratio`` is the bucket width in units of the particle spacing.
    """
    estimated = (width_ratio + 1.0) ** dimensions
    return int(estimated * margin_ratio)


def _point(particles: Particles, index: int) -> tuple[float, float, float]:
    return (
        particles.position[0][index],
        particles.position[1][index],
        particles.position[2][index],
    )


class BucketGrid:
    """Grid of cubic buckets covering the computational domain.

    A ``capacity`` of None lets every bucket grow as needed.
    """

    def __init__(
        self,
        lower: Sequence[float],
        upper: Sequence[float],
        width: float,
        dimensions: int,
        capacity: Optional[int],
    ) -> None:
        if width <= 0:
            raise ValueError("bucket width must be positive")
        if dimensions not in (2, 3):
            raise ValueError("dimensions must be 2 or 3")
        self.lower = list(lower)
        self.upper = list(upper)
        self.width = width
        self.dimensions = dimensions
        self.capacity = capacity
        shape = [1, 1, 1]
        for d in range(dimensions):
            shape[d] = math.floor(abs(self.upper[d] - self.lower[d]) / width) + 1
        self.shape: tuple[int, int, int] = (shape[0], shape[1], shape[2])
        self.max_count = 0
        self._lists: list[list[list[list[int]]]] = self._empty()
        for d in range(dimensions):
            log.info("bucket width[%d] = %f [m]", d, width)
        for d in range(dimensions):
            log.info("number of buckets[%d] = %d", d, self.shape[d])
        log.info("capacity of bucket = %s", capacity)

    def _empty(self) -> list[list[list[list[int]]]]:
        nx, ny, nz = self.shape
        return [[[[] for _ in range(nz)] for _ in range(ny)] for _ in range(nx)]

    def __getitem__(self, key: BucketKey) -> list[int]:
        ix, iy, iz = key
        return self._lists[ix][iy][iz]

    def locate(self, position: Sequence[float]) -> BucketKey:
        """Bucket indices of a point; raises BucketPlacementError off the grid."""
        place = [0, 0, 0]
        for d in range(self.dimensions):
            place[d] = math.floor((position[d] - self.lower[d]) / self.width)
        key: BucketKey = (place[0], place[1], place[2])
        checked = 3 if self.dimensions == 3 else 2
        if any(not 0 <= key[d] < self.shape[d] for d in range(checked)):
            raise BucketPlacementError(key, position[: self.dimensions])
        return key

    def count(self, particles: Particles, domain: Domain) -> Counter[BucketKey]:
        """Number of in-domain, non-ghost particles in each occupied bucket."""
        counts: Counter[BucketKey] = Counter()
        for i, kind in enumerate(particles.type):
            if kind == GHOST:
                continue
            if domain.locate(particles.position, self.dimensions, i) is Location.OUT_OF_DOMAIN:
                continue
            counts[self.locate(_point(particles, i))] += 1
        return counts

    def store(self, particles: Particles, domain: Domain) -> None:
        """Sort every particle into its bucket.

        Particles that left the domain are turned into ghosts.
        """
        self._lists = self._empty()
        for i, kind in enumerate(particles.type):
            if kind == GHOST:
                continue
            if domain.locate(particles.position, self.dimensions, i) is Location.OUT_OF_DOMAIN:
                log.info("particle %d became a ghost particle", i)
                particles.make_ghost(i)
                continue
            key = self.locate(_point(particles, i))
            members = self[key]
            if self.capacity is not None and len(members) >= self.capacity:
                log.error("bucket%s is full: %d particles", list(key), len(members))
                raise BucketOverflowError(key, len(members))
            members.append(i)
        for plane in self._lists:
            for row in plane:
                for members in row:
                    self.max_count = max(self.max_count, len(members))

    def recommended_capacity(self) -> int:
        """Largest bucket population seen so far plus a safety margin."""
        return self.max_count + RECOMMENDED_CAPACITY_MARGIN


class PressureBuckets:
    """Grid of buckets over which pressures are averaged."""

    def __init__(
        self,
        lower: Sequence[float],
        upper: Sequence[float],
        width: float,
        dimensions: int,
    ) -> None:
        if width <= 0:
            raise ValueError("bucket width must be positive")
        if dimensions not in (2, 3):
            raise ValueError("dimensions must be 2 or 3")
        self.lower = list(lower)
        self.upper = list(upper)
        self.width = width
        self.dimensions = dimensions
        shape = [1, 1, 1]
        for d in range(dimensions):
            shape[d] = int(abs((self.upper[d] - self.lower[d]) / width)) + 1
        self.shape: tuple[int, int, int] = (shape[0], shape[1], shape[2])
        size = shape[0] * shape[1] * shape[2]
        self.pressure = [0.0] * size
        self.counts = [0] * size
        log.info("pressure bucket number: %d %d %d", *self.shape)
        log.info("pressure lower limit: %f %f %f", *self.lower[:3])
        log.info("pressure upper limit: %f %f %f", *self.upper[:3])

    def locate(self, position: Sequence[float]) -> Optional[BucketKey]:
        """Bucket indices of a point, or None when it lies outside the grid."""
        for d in range(self.dimensions):
            if position[d] < self.lower[d] or position[d] >= self.upper[d]:
                return None
        place = [0, 0, 0]
        for d in range(self.dimensions):
            place[d] = math.floor((position[d] - self.lower[d]) / self.width)
        return (place[0], place[1], place[2])

    def reset(self) -> None:
        """Clear accumulated pressures and counts."""
        self.pressure = [0.0] * len(self.pressure)
        self.counts = [0] * len(self.counts)