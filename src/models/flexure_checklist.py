from __future__ import annotations

from typing import Any

from src.models.design_constants import RESISTANCE_COEFF_LIMIT
from src.models.errors import ErrorKind
from src.models.result_types import SectionDesignResult


def _state_from_status_code(status_code: str) -> str:
    if status_code == "ok":
        return "cumple"
    if status_code == "warning":
        return "advertencia"
    if status_code == "error":
        return "no cumple"
    return "pendiente"


def _criterion_from_result(res: SectionDesignResult) -> str:
    if res.status_code == "error":
        return "Sección rechazada"
    q = res.quantities
    if q.As_tension <= q.As_min + 1e-9:
        return "Gobierna acero mínimo"
    return "Gobierna demanda por momento"


def _round(value: float | None, digits: int) -> float | None:
    return None if value is None else round(float(value), digits)


def build_flexure_summary(face_label: str, res: SectionDesignResult) -> dict[str, Any]:
    q = res.quantities
    return {
        "cara": face_label,
        "estado": _state_from_status_code(res.status_code),
        "criterio_gobernante": _criterion_from_result(res),
        "tipo_refuerzo": q.reinforcement_type,
        "As_tension_mm2": _round(q.As_tension, 1),
        "As_compression_mm2": _round(q.As_compression, 1),
        "As_min_mm2": _round(q.As_min, 1),
        "As_max_mm2": _round(q.As_max, 1),
        "resistance_coeff": _round(q.resistance_coeff, 4),
        "alpha": _round(q.alpha, 4),
        "alpha_max": _round(q.alpha_max, 4),
    }


def build_flexure_checklist(face_label: str, res: SectionDesignResult) -> list[dict[str, str]]:
    q = res.quantities
    rows: list[dict[str, str]] = []

    if res.error_kind is ErrorKind.INVALID_INPUT:
        rows.append(
            {
                "Cara": face_label,
                "Check": "Datos de entrada",
                "Code Ref": "Entrada",
                "Formula": "required_fields",
                "Estado": "no cumple",
                "Valor": "-",
                "Comentario": res.status,
            }
        )
        return rows

    if q.resistance_coeff is not None:
        over_stressed = q.resistance_coeff > RESISTANCE_COEFF_LIMIT
        rows.append(
            {
                "Cara": face_label,
                "Check": "Capacidad de sección",
                "Code Ref": "Flexural strength design",
                "Formula": "resistance_coefficient",
                "Estado": "no cumple" if over_stressed else "cumple",
                "Valor": f"R={q.resistance_coeff:.4f} | limit={RESISTANCE_COEFF_LIMIT}",
                "Comentario": "Sección sobrecargada para el momento aplicado." if over_stressed else "",
            }
        )

    if q.alpha is not None:
        doubly = q.alpha >= q.alpha_max
        rows.append(
            {
                "Cara": face_label,
                "Check": "Límite de ductilidad",
                "Code Ref": "Flexural strength design",
                "Formula": "ductility_limit",
                "Estado": "advertencia" if doubly else "cumple",
                "Valor": f"alpha={q.alpha:.4f} | alpha_max={q.alpha_max:.4f}",
                "Comentario": "Requiere acero a compresión." if doubly else "Refuerzo simple.",
            }
        )

    if q.As_min is not None and q.As_tension is not None:
        rows.append(
            {
                "Cara": face_label,
                "Check": "Acero mínimo",
                "Code Ref": "Reinforcement limits",
                "Formula": "As_min",
                "Estado": "cumple" if q.As_tension + 1e-9 >= q.As_min else "no cumple",
                "Valor": f"As={q.As_tension:.1f} mm2 | As_min={q.As_min:.1f} mm2",
                "Comentario": _criterion_from_result(res),
            }
        )
        non_compliant = res.error_kind is ErrorKind.NON_COMPLIANT or q.As_tension > q.As_max
        rows.append(
            {
                "Cara": face_label,
                "Check": "Acero máximo",
                "Code Ref": "Reinforcement limits",
                "Formula": "As_max",
                "Estado": "no cumple" if non_compliant else "cumple",
                "Valor": f"As={q.As_tension:.1f} mm2 | As_max={q.As_max:.1f} mm2",
                "Comentario": "Aumentar la sección." if non_compliant else "",
            }
        )

    if res.status_code == "error" and not any(row["Estado"] == "no cumple" for row in rows):
        rows.append(
            {
                "Cara": face_label,
                "Check": "Diseño de sección",
                "Code Ref": "Flexural strength design",
                "Formula": res.error_kind.value,
                "Estado": "no cumple",
                "Valor": "-",
                "Comentario": res.status,
            }
        )

    return rows
