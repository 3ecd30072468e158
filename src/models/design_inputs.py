from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class DesignInputs:
    shape: str = "rectangular"
    moment: float = 150.0
    bar_diameter: float | None = 16.0
    negative_moment: bool = False
    draft: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
