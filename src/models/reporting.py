from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.models.design_inputs import DesignInputs
from src.models.flexure import calculate_section_design
from src.models.flexure_checklist import build_flexure_checklist, build_flexure_summary
from src.models.result_types import SectionDesignResult
from src.models.section import FlangedSection, RectangularSection
from src.models.units import section_units


@dataclass
class ReportBundle:
    result: SectionDesignResult
    face_label: str
    units: dict[str, str]
    flexure_summary: dict[str, Any]
    flexure_checklist: list[dict[str, str]]
    warnings: list[str]

    def export_payload(self) -> dict[str, Any]:
        return {
            "section_design": self.result.to_dict(),
            "http_status": self.result.http_status,
            "units": self.units,
            "flexure_summary": self.flexure_summary,
            "flexure_checklist": self.flexure_checklist,
            "warnings": self.warnings,
        }


def face_label_for(design_inputs: DesignInputs) -> str:
    return "Superior (-)" if design_inputs.negative_moment else "Inferior (+)"


def build_design_report(section: RectangularSection | FlangedSection, design_inputs: DesignInputs) -> ReportBundle:
    result = calculate_section_design(
        section,
        design_inputs.moment,
        bar_diameter=design_inputs.bar_diameter,
        negative_moment=design_inputs.negative_moment,
        draft=design_inputs.draft,
    )
    label = face_label_for(design_inputs)
    checklist = build_flexure_checklist(label, result)

    warnings: list[str] = []
    if result.status_code == "error":
        warnings.append(result.status)
    warnings.extend(row["Comentario"] for row in checklist if row["Estado"] == "advertencia")

    return ReportBundle(
        result=result,
        face_label=label,
        units=section_units(section.shape),
        flexure_summary=build_flexure_summary(label, result),
        flexure_checklist=checklist,
        warnings=warnings,
    )
