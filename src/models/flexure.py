from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.models.bar_layout import resolve_bar_layout, single_bar_area
from src.models.design_constants import (
    ALPHA_MAX_NUMERATOR,
    COVER_STRAIN_FACTOR,
    PHI_FLEXURE,
    REINFORCEMENT_DOUBLY,
    REINFORCEMENT_TENSION,
    RESISTANCE_COEFF_LIMIT,
    STEEL_STRAIN_STRESS,
    WHITNEY_COEFF,
)
from src.models.errors import (
    ErrorKind,
    InvalidInputError,
    NonCompliantSectionError,
    OverStressedSectionError,
    SectionDesignError,
)
from src.models.geometry import EquivalentSection, resolve_geometry
from src.models.limits import apply_steel_limits, compute_steel_limits
from src.models.result_types import DesignQuantities, ReinforcementResult, SectionDesignResult, TraceCheck
from src.models.section import is_finite_number
from src.models.units import kNm_to_Nmm

if TYPE_CHECKING:
    from src.models.section import FlangedSection, RectangularSection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlexuralDesign:
    """Unclamped reinforcement of the equivalent section."""

    resistance_coeff: float
    alpha: float
    alpha_max: float
    gama: float
    As_tension: float
    As_compression: float | None = None
    y_max: float | None = None
    M_max: float | None = None
    M_comp: float | None = None
    fs_comp: float | None = None
    overhang_steel: float = 0.0

    @property
    def doubly_reinforced(self) -> bool:
        return self.As_compression is not None


def compute_alpha_max(fy: float) -> float:
    """Stress-block depth ratio at the ductility limit, a function of fy only."""
    return ALPHA_MAX_NUMERATOR / (STEEL_STRAIN_STRESS + fy)


def _flange_overhang_steel(section: FlangedSection) -> float:
    """Tension steel balancing the concrete force of the flange overhangs (mm2)."""
    return WHITNEY_COEFF * (section.fc / section.fy) * section.tf * (section.bf - section.bw)


def design_flexure(
    section: RectangularSection | FlangedSection,
    eq: EquivalentSection,
) -> FlexuralDesign:
    """
    Required tension (and, past the ductility limit, compression) steel for an equivalent rectangle.

    Args:
        section: The raw section, for material strengths and flange dimensions.
        eq: Equivalent rectangle from the geometry resolver (moment in N-mm).

    Raises:
        OverStressedSectionError: resistance coefficient above 0.5.
    """
    fc = section.fc
    fy = section.fy
    b = eq.b
    d = eq.d

    # The overhang can leave nothing for the web to carry.
    M = max(eq.Mu_Nmm, 0.0)

    resistance_coeff = M / (PHI_FLEXURE * WHITNEY_COEFF * fc * b * d ** 2)
    if resistance_coeff > RESISTANCE_COEFF_LIMIT:
        logger.warning("Section over-stressed: resistance coefficient %.4f > %.2f",
                       resistance_coeff, RESISTANCE_COEFF_LIMIT)
        raise OverStressedSectionError(
            f"Resistance coefficient {resistance_coeff:.4f} exceeds {RESISTANCE_COEFF_LIMIT}. "
            "The section cannot carry the applied moment.",
            resistance_coeff,
        )

    alpha = 1 - math.sqrt(1 - 2 * resistance_coeff)
    alpha_max = compute_alpha_max(fy)
    overhang_steel = _flange_overhang_steel(section) if eq.carries_flange_overhang else 0.0

    if alpha < alpha_max:
        gama = 1 - 0.5 * alpha
        As_tension = M / (PHI_FLEXURE * gama * d * fy) + overhang_steel
        logger.debug("Singly reinforced: alpha=%.4f < alpha_max=%.4f", alpha, alpha_max)
        return FlexuralDesign(
            resistance_coeff=resistance_coeff,
            alpha=alpha,
            alpha_max=alpha_max,
            gama=gama,
            As_tension=As_tension,
            overhang_steel=overhang_steel,
        )

    y_max = d * alpha_max
    area_max_coeff = alpha_max * (1 - 0.5 * alpha_max)
    M_max = PHI_FLEXURE * WHITNEY_COEFF * fc * area_max_coeff * b * d ** 2
    M_comp = M - M_max
    if M_comp <= 0 or math.isclose(M, M_max):
        # Exactly at the ductility limit: no moment left for compression steel.
        gama = 1 - 0.5 * alpha_max
        As_tension = M / (PHI_FLEXURE * gama * d * fy) + overhang_steel
        logger.debug("At ductility limit: alpha=%.4f, alpha_max=%.4f, singly reinforced", alpha, alpha_max)
        return FlexuralDesign(
            resistance_coeff=resistance_coeff,
            alpha=alpha,
            alpha_max=alpha_max,
            gama=gama,
            As_tension=As_tension,
            overhang_steel=overhang_steel,
        )
    fs_comp = min(STEEL_STRAIN_STRESS * (y_max - COVER_STRAIN_FACTOR * eq.cover) / y_max, fy)
    if fs_comp <= 0 or d <= eq.cover:
        logger.warning("Compression steel ineffective: fs'=%.1f MPa, d=%.1f mm, cover=%.1f mm", fs_comp, d, eq.cover)
        raise NonCompliantSectionError(
            "Compression reinforcement cannot develop stress at this cover. Enlarge the section."
        )
    As_compression = M_comp / (PHI_FLEXURE * fs_comp * (d - eq.cover))

    gama = 1 - 0.5 * alpha_max
    As_tension = M_max / (PHI_FLEXURE * gama * d * fy) + As_compression * fs_comp / fy + overhang_steel
    logger.debug(
        "Doubly reinforced: alpha=%.4f >= alpha_max=%.4f, fs'=%.1f MPa, As'=%.1f mm2",
        alpha, alpha_max, fs_comp, As_compression,
    )
    return FlexuralDesign(
        resistance_coeff=resistance_coeff,
        alpha=alpha,
        alpha_max=alpha_max,
        gama=gama,
        As_tension=As_tension,
        As_compression=As_compression,
        y_max=y_max,
        M_max=M_max,
        M_comp=M_comp,
        fs_comp=fs_comp,
        overhang_steel=overhang_steel,
    )


def _check_load_inputs(Mu: float, bar_diameter: float | None) -> None:
    errors: list[str] = []
    if not is_finite_number(Mu) or Mu <= 0:
        errors.append(f"moment must be a positive number, got {Mu}.")
    if bar_diameter is not None and (not is_finite_number(bar_diameter) or bar_diameter <= 0):
        errors.append(f"reinforcement_bar_diameter must be a positive number, got {bar_diameter}.")
    if errors:
        raise InvalidInputError(errors)


def _failure(
    section: RectangularSection | FlangedSection,
    kind: ErrorKind,
    message: str,
    quantities: DesignQuantities,
    trace: list[TraceCheck],
    draft: bool,
) -> SectionDesignResult:
    return SectionDesignResult(
        status=f"Error: {message}",
        status_code="error",
        trace=trace,
        shape=section.shape.value,
        error_kind=kind,
        quantities=quantities,
        draft=draft,
    )


def calculate_section_design(
    section: RectangularSection | FlangedSection,
    Mu: float,
    bar_diameter: float | None = None,
    negative_moment: bool = False,
    draft: bool = False,
) -> SectionDesignResult:
    """
    Design the flexural reinforcement of a section for an applied moment.

    Args:
        section: Rectangular or flanged section (mm, MPa).
        Mu: Applied moment magnitude (kNm).
        bar_diameter: Bar diameter (mm). None reports areas only.
        negative_moment: Hogging moment; flanged sections are then designed on the web alone.
        draft: Include every intermediate quantity in the output.

    Returns:
        SectionDesignResult, with status_code "error" and an error kind when the
        design is rejected. Domain problems never raise.
    """
    logger.info("Section design: shape=%s, Mu=%s kNm, h=%.1f mm", section.shape.value, Mu, section.h)

    quantities = DesignQuantities(cover=section.cover, d=section.d)
    trace: list[TraceCheck] = []

    try:
        _check_load_inputs(Mu, bar_diameter)
        Mu_Nmm = kNm_to_Nmm(Mu)

        eq = resolve_geometry(section, Mu_Nmm, negative_moment)
        quantities.b_eq = eq.b
        quantities.M_eq = eq.Mu_Nmm
        if eq.flange_capacity_Nmm is not None:
            quantities.flange_capacity = eq.flange_capacity_Nmm
            quantities.in_flange = eq.in_flange
            trace.append(
                TraceCheck(
                    code_ref="Flanged section reduction",
                    formula_id="flange_capacity",
                    inputs={**section.describe(), "Mu_Nmm": Mu_Nmm},
                    value=eq.flange_capacity_Nmm,
                    units="N-mm",
                    status="ok",
                    note="Neutral axis in flange." if eq.in_flange else "Web-only equivalent section.",
                )
            )

        design = design_flexure(section, eq)
        quantities.As_min, quantities.As_max = compute_steel_limits(section)
    except SectionDesignError as exc:
        if isinstance(exc, OverStressedSectionError):
            quantities.resistance_coeff = exc.resistance_coeff
            trace.append(
                TraceCheck(
                    code_ref="Flexural strength design",
                    formula_id="resistance_coefficient",
                    inputs={"Mu_eq_Nmm": quantities.M_eq, "b_mm": quantities.b_eq, "d_mm": section.d},
                    value=exc.resistance_coeff,
                    units="-",
                    status="error",
                    note="Section over-stressed.",
                )
            )
        return _failure(section, exc.kind, exc.message, quantities, trace, draft)
    except (ArithmeticError, ValueError):
        logger.exception("Unexpected computation error in section design")
        return _failure(section, ErrorKind.INTERNAL, "Unexpected computation error.", quantities, trace, draft)

    quantities.resistance_coeff = design.resistance_coeff
    quantities.alpha = design.alpha
    quantities.alpha_max = design.alpha_max
    quantities.gama = design.gama
    quantities.y_max = design.y_max
    quantities.M_max = design.M_max
    quantities.M_comp = design.M_comp
    quantities.fs_comp = design.fs_comp
    if eq.flange_capacity_Nmm is not None:
        quantities.overhang_steel = design.overhang_steel
    trace.append(
        TraceCheck(
            code_ref="Flexural strength design",
            formula_id="resistance_coefficient",
            inputs={"Mu_eq_Nmm": eq.Mu_Nmm, "b_mm": eq.b, "d_mm": eq.d, "fc_MPa": section.fc},
            value=design.resistance_coeff,
            units="-",
            status="ok",
        )
    )
    trace.append(
        TraceCheck(
            code_ref="Flexural strength design",
            formula_id="ductility_limit",
            inputs={"alpha": design.alpha, "fy_MPa": section.fy},
            value=design.alpha_max,
            units="-",
            status="ok",
            note=REINFORCEMENT_DOUBLY if design.doubly_reinforced else REINFORCEMENT_TENSION,
        )
    )

    try:
        As_design = apply_steel_limits(section, design.As_tension)
    except SectionDesignError as exc:
        quantities.As_tension = max(design.As_tension, quantities.As_min)
        trace.append(
            TraceCheck(
                code_ref="Reinforcement limits",
                formula_id="As_max",
                inputs={"As_req_mm2": design.As_tension},
                value=quantities.As_max,
                units="mm2",
                status="error",
                note="Required steel exceeds the maximum.",
            )
        )
        return _failure(section, exc.kind, exc.message, quantities, trace, draft)

    min_governs = As_design > design.As_tension
    trace.append(
        TraceCheck(
            code_ref="Reinforcement limits",
            formula_id="As_min",
            inputs={"fy_MPa": section.fy, "b_mm": section.min_steel_width, "d_mm": section.d},
            value=quantities.As_min,
            units="mm2",
            status="ok",
            note="Minimum steel governs." if min_governs else "",
        )
    )

    quantities.As_tension = As_design
    quantities.As_compression = design.As_compression
    quantities.reinforcement_type = REINFORCEMENT_DOUBLY if design.doubly_reinforced else REINFORCEMENT_TENSION
    if bar_diameter is not None:
        quantities.bar_area = single_bar_area(bar_diameter)

    tension = ReinforcementResult(area=As_design, bars=resolve_bar_layout(As_design, bar_diameter))
    compression = None
    if design.doubly_reinforced:
        compression = ReinforcementResult(
            area=design.As_compression,
            bars=resolve_bar_layout(design.As_compression, bar_diameter),
        )

    if design.doubly_reinforced:
        status = "OK (Compression Steel Required)"
    elif min_governs:
        status = "OK (Min Steel)"
    else:
        status = "OK"

    return SectionDesignResult(
        status=status,
        status_code="ok",
        trace=trace,
        shape=section.shape.value,
        tension=tension,
        compression=compression,
        quantities=quantities,
        draft=draft,
    )
