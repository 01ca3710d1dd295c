"""Rectangular computational domain and membership tests."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

log = logging.getLogger(__name__)


class Location(Enum):
    IN_DOMAIN = "in"
    OUT_OF_DOMAIN = "out"


class InvalidPositionError(ValueError):
    """A particle position is not a number."""

    def __init__(self, index: int) -> None:
        super().__init__(f"the position of particle {index} is infinity or NaN")
        self.index = index


def _three() -> list[float]:
    return [0.0, 0.0, 0.0]


@dataclass
class Domain:
    """Axis-aligned box; the upper limits are exclusive."""

    lower: list[float] = field(default_factory=_three)
    upper: list[float] = field(default_factory=_three)
    lower_margin_ratio: list[float] = field(default_factory=_three)
    upper_margin_ratio: list[float] = field(default_factory=_three)
    lower_previous: list[float] = field(default_factory=_three)
    upper_previous: list[float] = field(default_factory=_three)

    def fit_to(
        self,
        positions: Sequence[Sequence[float]],
        average_distance: float,
        dimensions: int,
    ) -> None:
        """Size the box around the given positions plus the margin ratios."""
        for d in range(dimensions):
            highest = max(positions[d])
            lowest = min(positions[d])
            width = highest - lowest
            self.upper_previous[d] = self.upper[d]
            self.lower_previous[d] = self.lower[d]
            self.upper[d] = (
                highest + self.upper_margin_ratio[d] * width + 0.5 * average_distance
            )
            self.lower[d] = lowest - self.lower_margin_ratio[d] * width
        for d in range(dimensions):
            log.info(
                "upper limit [%d] %f -> %f [m]", d, self.upper_previous[d], self.upper[d]
            )
        for d in range(dimensions):
            log.info(
                "lower limit [%d] %f -> %f [m]", d, self.lower_previous[d], self.lower[d]
            )

    def locate(
        self, position: Sequence[Sequence[float]], dimensions: int, index: int
    ) -> Location:
        """Tell whether particle ``index`` lies inside the box.

        Raises InvalidPositionError when a coordinate is NaN.
        """
        answer = Location.IN_DOMAIN
        for d in range(dimensions):
            value = position[d][index]
            if math.isnan(value):
                log.error("particle position is infinity or NaN: particle %d", index)
                raise InvalidPositionError(index)
            if value >= self.upper[d] or value < self.lower[d]:
                answer = Location.OUT_OF_DOMAIN
        return answer