from __future__ import annotations

import logging

from src.models.design_constants import (
    BALANCED_COEFF,
    MAX_STEEL_RATIO,
    MIN_STEEL_COEFF,
    STEEL_STRAIN_STRESS,
)
from src.models.errors import NonCompliantSectionError
from src.models.section import FlangedSection, RectangularSection

logger = logging.getLogger(__name__)


def _compute_As_min(fy: float, b_mm: float, d_mm: float) -> float:
    """Minimum tension reinforcement: (0.9 / fy) * b * d."""
    return (MIN_STEEL_COEFF / fy) * b_mm * d_mm


def _compute_As_max(fc: float, fy: float, b_mm: float, d_mm: float) -> float:
    """Maximum tension reinforcement: 0.75 of the balanced ratio times b * d."""
    rho_b = (BALANCED_COEFF / (STEEL_STRAIN_STRESS + fy)) * (fc / fy)
    return MAX_STEEL_RATIO * rho_b * b_mm * d_mm


def compute_steel_limits(section: RectangularSection | FlangedSection) -> tuple[float, float]:
    """Return (As_min, As_max) in mm2. Flanged sections use the web for the minimum and the flange for the maximum."""
    As_min = _compute_As_min(section.fy, section.min_steel_width, section.d)
    As_max = _compute_As_max(section.fc, section.fy, section.max_steel_width, section.d)
    return As_min, As_max


def apply_steel_limits(section: RectangularSection | FlangedSection, As_req: float) -> float:
    """
    Clamp the required tension area to the minimum and check it against the maximum.

    Returns:
        The design tension area (mm2).

    Raises:
        NonCompliantSectionError: the clamped area exceeds the maximum.
    """
    As_min, As_max = compute_steel_limits(section)
    As_design = max(As_req, As_min)

    if As_design > As_max:
        logger.warning("Non-compliant section: As=%.1f mm2 > As_max=%.1f mm2", As_design, As_max)
        raise NonCompliantSectionError(
            f"Required tension reinforcement ({As_design:.1f} mm2) exceeds the maximum "
            f"allowed ({As_max:.1f} mm2). Enlarge the section."
        )
    return As_design
