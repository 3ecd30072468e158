"""Conversion of a required steel area into a whole number of bars."""

from __future__ import annotations

import math
from dataclasses import dataclass

from src.models.design_constants import MIN_BAR_COUNT
from src.models.errors import InvalidInputError


@dataclass(frozen=True)
class BarLayout:
    number: int
    diameter: float
    area: float

    def to_dict(self) -> dict[str, float]:
        return {"number": self.number, "diameter": self.diameter, "area": self.area}


def single_bar_area(diameter: float) -> float:
    """Cross-sectional area of one bar (mm2)."""
    return math.pi * (diameter / 2) ** 2


def resolve_bar_layout(As_req: float, diameter: float | None) -> BarLayout | None:
    """Round the required area up to whole bars, never fewer than two. None without a diameter."""
    if diameter is None:
        return None
    if diameter <= 0:
        raise InvalidInputError(f"Bar diameter must be positive, got {diameter}.")

    bar_area = single_bar_area(diameter)
    count = max(math.ceil(As_req / bar_area), MIN_BAR_COUNT)
    return BarLayout(number=count, diameter=diameter, area=count * bar_area)
