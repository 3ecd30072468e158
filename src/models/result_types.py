from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from src.models.bar_layout import BarLayout
from src.models.design_constants import AREA_UNIT
from src.models.errors import HTTP_STATUS_BY_KIND, ErrorKind


@dataclass
class TraceCheck:
    code_ref: str
    formula_id: str
    inputs: dict[str, float]
    value: float
    units: str
    status: str
    note: str = ""


@dataclass
class ResultBase:
    status: str
    status_code: str
    trace: list[TraceCheck] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError

    def __getitem__(self, key: str) -> Any:
        return self.to_dict()[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.to_dict().get(key, default)

    def keys(self):
        return self.to_dict().keys()

    def items(self):
        return self.to_dict().items()

    def values(self):
        return self.to_dict().values()

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def __len__(self) -> int:
        return len(self.to_dict())


@dataclass
class ReinforcementResult:
    area: float
    bars: BarLayout | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"area": self.area}
        if self.bars is not None:
            data["bars"] = self.bars.to_dict()
        return data


@dataclass
class DesignQuantities:
    """Intermediate quantities of one design call, filled as far as the calculation got."""

    cover: float | None = None
    d: float | None = None
    resistance_coeff: float | None = None
    alpha: float | None = None
    alpha_max: float | None = None
    gama: float | None = None
    As_min: float | None = None
    As_max: float | None = None
    As_tension: float | None = None
    As_compression: float | None = None
    reinforcement_type: str | None = None
    # Doubly reinforced branch
    y_max: float | None = None
    M_max: float | None = None
    M_comp: float | None = None
    fs_comp: float | None = None
    # Flanged sections
    flange_capacity: float | None = None
    in_flange: bool | None = None
    b_eq: float | None = None
    M_eq: float | None = None
    overhang_steel: float | None = None
    # Bar layout
    bar_area: float | None = None

    def to_draft_dict(self) -> dict[str, Any]:
        draft: dict[str, Any] = {
            "Concrete Cover": self.cover,
            "Depth of Reinforcement": self.d,
            "Coefficients": {
                "Area": self.resistance_coeff,
                "Alpha": self.alpha,
                "Alpha Max": self.alpha_max,
                "Gama": self.gama,
            },
            "Minimum Reinforcement Area": self.As_min,
            "Maximum Reinforcement Area": self.As_max,
            "Bottom Reinforcement Area": self.As_tension,
            "Top Reinforcement Area": self.As_compression,
            "Reinforcement Type": self.reinforcement_type,
        }
        if self.y_max is not None:
            draft["Y Max"] = self.y_max
            draft["M Max"] = self.M_max
            draft["M Comp"] = self.M_comp
            draft["Compression Steel Stress"] = self.fs_comp
        if self.flange_capacity is not None:
            draft["Flange Capacity"] = self.flange_capacity
            draft["Neutral Axis In Flange"] = self.in_flange
            draft["Equivalent Width"] = self.b_eq
            draft["Equivalent Moment"] = self.M_eq
            draft["Flange Overhang Steel"] = self.overhang_steel
        if self.bar_area is not None:
            draft["Single Bar Area"] = self.bar_area
        return draft


@dataclass
class SectionDesignResult(ResultBase):
    shape: str = ""
    error_kind: ErrorKind | None = None
    tension: ReinforcementResult | None = None
    compression: ReinforcementResult | None = None
    unit: str = AREA_UNIT
    quantities: DesignQuantities = field(default_factory=DesignQuantities)
    draft: bool = False

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @property
    def http_status(self) -> int:
        if self.error_kind is None:
            return 200
        return HTTP_STATUS_BY_KIND[self.error_kind]

    def result_payload(self) -> dict[str, Any] | None:
        """Response body: bottom (tension) and, when required, top (compression) steel."""
        if self.tension is None:
            return None
        payload: dict[str, Any] = {"Bottom Reinforcement": self.tension.to_dict()}
        if self.compression is not None:
            payload["Top Reinforcement"] = self.compression.to_dict()
        payload["unit"] = self.unit
        return payload

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "shape": self.shape,
            "status": self.status,
            "status_code": self.status_code,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "result": self.result_payload(),
        }
        if self.draft and self.ok:
            data["draft"] = self.quantities.to_draft_dict()
        data["trace"] = [t.__dict__ for t in self.trace]
        return data
