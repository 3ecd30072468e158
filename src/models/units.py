"""Unit conversion helpers and per-shape units metadata. Internal calculations use N and mm."""

from __future__ import annotations

from src.models.design_constants import KNM_TO_NMM
from src.models.section import SectionShape

MOMENT_UNIT = "kN.m"

_COMMON_UNITS = {
    "height": "mm",
    "concrete_cover": "mm (default: 10% of height)",
    "concrete_compressive_strength": "MPa",
    "steel_yield_strength": "MPa",
    "reinforcement_bar_diameter": "mm (optional)",
    "draft": "boolean (optional)",
}

SECTION_UNITS = {
    SectionShape.RECTANGULAR: {
        "moment": MOMENT_UNIT,
        "width": "mm",
        **_COMMON_UNITS,
    },
    SectionShape.FLANGED: {
        "moment": MOMENT_UNIT,
        "flange_width": "mm",
        "web_width": "mm",
        "flange_thickness": "mm",
        **_COMMON_UNITS,
        "negative_moment": "boolean (optional)",
    },
}


def section_units(shape: SectionShape | str) -> dict[str, str]:
    """Return the expected physical unit of every input field for a section shape."""
    return dict(SECTION_UNITS[SectionShape(shape)])


def kNm_to_Nmm(val_kNm: float) -> float:
    """Convert kN-m to N-mm."""
    return val_kNm * KNM_TO_NMM


def mm2_to_cm2(val_mm2: float) -> float:
    """Convert mm^2 to cm^2."""
    return val_mm2 / 100
