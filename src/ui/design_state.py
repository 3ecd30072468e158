from __future__ import annotations

from typing import Any

from src.models.design_inputs import DesignInputs


def init_design_state(session_state: dict[str, Any]) -> None:
    if "design_inputs" not in session_state:
        session_state["design_inputs"] = DesignInputs().to_dict()


def update_design_inputs(session_state: dict[str, Any], **kwargs: Any) -> None:
    init_design_state(session_state)
    session_state["design_inputs"].update(kwargs)


def get_design_snapshot(session_state: dict[str, Any]) -> DesignInputs:
    init_design_state(session_state)
    data = session_state["design_inputs"]
    diameter = data.get("bar_diameter", 16.0)
    return DesignInputs(
        shape=str(data.get("shape", "rectangular")),
        moment=float(data.get("moment", 150.0)),
        bar_diameter=None if diameter is None else float(diameter),
        negative_moment=bool(data.get("negative_moment", False)),
        draft=bool(data.get("draft", False)),
    )
