"""Reduction of a section to the equivalent rectangle used by the flexural design."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.models.design_constants import PHI_FLEXURE, WHITNEY_COEFF
from src.models.section import FlangedSection, RectangularSection, SectionShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EquivalentSection:
    """Rectangle (b, d) carrying moment Mu that the design engine works on."""

    b: float
    d: float
    cover: float
    Mu_Nmm: float
    shape: SectionShape = SectionShape.RECTANGULAR
    in_flange: bool = False
    negative_moment: bool = False
    flange_capacity_Nmm: float | None = None
    overhang_moment_Nmm: float = 0.0

    @property
    def carries_flange_overhang(self) -> bool:
        """True when the overhang force is removed here and balanced by fixed steel."""
        return self.shape is SectionShape.FLANGED and self.in_flange and not self.negative_moment


def _flange_force_moment(section: FlangedSection, width: float) -> float:
    """Design moment of a flange strip of the given width about the tension steel (N-mm)."""
    return PHI_FLEXURE * WHITNEY_COEFF * section.fc * section.tf * width * (section.d - 0.5 * section.tf)


def resolve_geometry(
    section: RectangularSection | FlangedSection,
    Mu_Nmm: float,
    negative_moment: bool = False,
) -> EquivalentSection:
    if section.shape is SectionShape.RECTANGULAR:
        return EquivalentSection(b=section.b, d=section.d, cover=section.cover, Mu_Nmm=Mu_Nmm)

    flange_capacity = _flange_force_moment(section, section.bf)
    in_flange = Mu_Nmm < flange_capacity and not negative_moment

    if in_flange:
        overhang_moment = _flange_force_moment(section, section.bf - section.bw)
        width = section.bf
        moment = Mu_Nmm - overhang_moment
    else:
        # Hogging moment or neutral axis below the flange: web only.
        overhang_moment = 0.0
        width = section.bw
        moment = Mu_Nmm

    logger.debug(
        "Flanged geometry: capacity=%.1f N-mm, in_flange=%s, negative=%s, b_eq=%.1f mm",
        flange_capacity, in_flange, negative_moment, width,
    )
    return EquivalentSection(
        b=width,
        d=section.d,
        cover=section.cover,
        Mu_Nmm=moment,
        shape=SectionShape.FLANGED,
        in_flange=in_flange,
        negative_moment=negative_moment,
        flange_capacity_Nmm=flange_capacity,
        overhang_moment_Nmm=overhang_moment,
    )
