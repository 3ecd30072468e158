from __future__ import annotations

import math
from enum import Enum

from src.models.design_constants import DEFAULT_COVER_RATIO
from src.models.errors import InvalidInputError


class SectionShape(str, Enum):
    RECTANGULAR = "rectangular"
    FLANGED = "flanged"


def is_finite_number(value: float) -> bool:
    """True for a finite float-convertible number; ints too large for a float are not."""
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _check_positive(errors: list[str], **values: float) -> None:
    for name, value in values.items():
        if not is_finite_number(value) or value <= 0:
            errors.append(f"{name} must be a positive number, got {value}.")


def _check_cover(errors: list[str], cover: float | None, h: float) -> None:
    if cover is None:
        return
    if not is_finite_number(cover) or cover < 0:
        errors.append(f"concrete_cover must be zero or positive, got {cover}.")
    elif cover >= h:
        errors.append(f"Cover ({cover} mm) must be less than section height ({h} mm).")


class RectangularSection:
    shape = SectionShape.RECTANGULAR

    def __init__(self, b: float, h: float, fc: float, fy: float, cover: float | None = None) -> None:
        """
        Initialize a rectangular section with material and geometric properties.

        Args:
            b: Width of the section (mm)
            h: Total height of the section (mm)
            fc: Concrete compressive strength (MPa)
            fy: Steel yield strength (MPa)
            cover: Distance from extreme fiber to reinforcement centroid (mm).
                None means not given: 10% of the height is used.
        """
        errors: list[str] = []
        _check_positive(errors, width=b, height=h, concrete_compressive_strength=fc, steel_yield_strength=fy)
        if not errors:
            _check_cover(errors, cover, h)
        if errors:
            raise InvalidInputError(errors)

        self.b = b
        self.h = h
        self.fc = fc
        self.fy = fy
        self.cover_input = cover
        self.cover = DEFAULT_COVER_RATIO * h if cover is None else cover
        self.d = h - self.cover

    @property
    def min_steel_width(self) -> float:
        return self.b

    @property
    def max_steel_width(self) -> float:
        return self.b

    def describe(self) -> dict[str, float]:
        return {"b_mm": self.b, "h_mm": self.h, "d_mm": self.d, "fc_MPa": self.fc, "fy_MPa": self.fy}


class FlangedSection:
    shape = SectionShape.FLANGED

    def __init__(
        self,
        bf: float,
        bw: float,
        tf: float,
        h: float,
        fc: float,
        fy: float,
        cover: float | None = None,
    ) -> None:
        """
        Initialize a flanged (T) section.

        Args:
            bf: Flange width (mm), not smaller than the web width
            bw: Web width (mm)
            tf: Flange thickness (mm)
            h: Total height of the section (mm)
            fc: Concrete compressive strength (MPa)
            fy: Steel yield strength (MPa)
            cover: Distance from extreme fiber to reinforcement centroid (mm), None for 10% of h
        """
        errors: list[str] = []
        _check_positive(
            errors,
            flange_width=bf,
            web_width=bw,
            flange_thickness=tf,
            height=h,
            concrete_compressive_strength=fc,
            steel_yield_strength=fy,
        )
        if not errors:
            if bf < bw:
                errors.append(f"Flange width ({bf} mm) must not be smaller than web width ({bw} mm).")
            if tf >= h:
                errors.append(f"Flange thickness ({tf} mm) must be less than section height ({h} mm).")
            _check_cover(errors, cover, h)
        if errors:
            raise InvalidInputError(errors)

        self.bf = bf
        self.bw = bw
        self.tf = tf
        self.h = h
        self.fc = fc
        self.fy = fy
        self.cover_input = cover
        self.cover = DEFAULT_COVER_RATIO * h if cover is None else cover
        self.d = h - self.cover

    # Web width for the minimum, full flange width for the maximum.
    @property
    def min_steel_width(self) -> float:
        return self.bw

    @property
    def max_steel_width(self) -> float:
        return self.bf

    def describe(self) -> dict[str, float]:
        return {
            "bf_mm": self.bf,
            "bw_mm": self.bw,
            "tf_mm": self.tf,
            "h_mm": self.h,
            "d_mm": self.d,
            "fc_MPa": self.fc,
            "fy_MPa": self.fy,
        }
