from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from src.models.errors import InvalidInputError
from src.models.flexure import calculate_section_design
from src.models.result_types import SectionDesignResult
from src.models.section import FlangedSection, RectangularSection, SectionShape, is_finite_number

logger = logging.getLogger(__name__)

FIELD_ALIASES = {
    "reinforcement_bars_diameter": "reinforcement_bar_diameter",
}

_REQUIRED_FIELDS = {
    SectionShape.RECTANGULAR: (
        "moment",
        "width",
        "height",
        "concrete_compressive_strength",
        "steel_yield_strength",
    ),
    SectionShape.FLANGED: (
        "moment",
        "flange_width",
        "web_width",
        "flange_thickness",
        "height",
        "concrete_compressive_strength",
        "steel_yield_strength",
    ),
}


@dataclass
class SectionDesignRequest:
    section: RectangularSection | FlangedSection
    moment: float
    bar_diameter: float | None = None
    negative_moment: bool = False
    draft: bool = False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _normalize_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    data = dict(payload)
    for alias, name in FIELD_ALIASES.items():
        if alias in data and data.get(name) is None:
            data[name] = data.pop(alias)
    return data


def validate_section_payload(shape: SectionShape, payload: Mapping[str, Any]) -> list[str]:
    """Return input validation errors. Empty list means the payload can be designed."""
    errors: list[str] = []
    data = _normalize_keys(payload)

    for name in _REQUIRED_FIELDS[shape]:
        value = data.get(name)
        if value is None:
            errors.append(f"Missing required field: {name}.")
        elif not _is_number(value) or not is_finite_number(value) or value <= 0:
            errors.append(f"{name} must be a positive number, got {value!r}.")

    cover = data.get("concrete_cover")
    if cover is not None and (not _is_number(cover) or not is_finite_number(cover) or cover < 0):
        errors.append(f"concrete_cover must be zero or positive, got {cover!r}.")

    diameter = data.get("reinforcement_bar_diameter")
    if diameter is not None and (not _is_number(diameter) or not is_finite_number(diameter) or diameter <= 0):
        errors.append(f"reinforcement_bar_diameter must be a positive number, got {diameter!r}.")

    for flag in ("negative_moment", "draft"):
        value = data.get(flag)
        if value is not None and not isinstance(value, bool):
            errors.append(f"{flag} must be a boolean, got {value!r}.")

    return errors


def parse_section_payload(shape: SectionShape | str, payload: Mapping[str, Any]) -> SectionDesignRequest:
    """
    Build a design request from a flat mapping of named fields.

    Raises:
        InvalidInputError: a required field is missing/zero or an invariant is violated.
    """
    try:
        shape = SectionShape(shape)
    except ValueError:
        raise InvalidInputError(f"Unknown section shape: {shape!r}.") from None

    errors = validate_section_payload(shape, payload)
    if errors:
        raise InvalidInputError(errors)

    data = _normalize_keys(payload)
    fc = data["concrete_compressive_strength"]
    fy = data["steel_yield_strength"]
    cover = data.get("concrete_cover")

    if shape is SectionShape.RECTANGULAR:
        section = RectangularSection(data["width"], data["height"], fc, fy, cover)
    else:
        section = FlangedSection(
            data["flange_width"],
            data["web_width"],
            data["flange_thickness"],
            data["height"],
            fc,
            fy,
            cover,
        )

    return SectionDesignRequest(
        section=section,
        moment=data["moment"],
        bar_diameter=data.get("reinforcement_bar_diameter"),
        negative_moment=bool(data.get("negative_moment", False)),
        draft=bool(data.get("draft", False)),
    )


def design_section_from_payload(shape: SectionShape | str, payload: Mapping[str, Any]) -> SectionDesignResult:
    """Validate a flat input mapping and run the section design. Invalid input becomes an error result."""
    try:
        request = parse_section_payload(shape, payload)
    except InvalidInputError as exc:
        logger.warning("Rejected section input: %s", exc.message)
        return SectionDesignResult(
            status=f"Error: {exc.message}",
            status_code="error",
            shape=str(getattr(shape, "value", shape)),
            error_kind=exc.kind,
            draft=payload.get("draft") is True,
        )

    return calculate_section_design(
        request.section,
        request.moment,
        bar_diameter=request.bar_diameter,
        negative_moment=request.negative_moment,
        draft=request.draft,
    )
