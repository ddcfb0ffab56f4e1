from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

# Sentinel for "no usable value yet" (empty or unparseable input)
UNDEFINED = float("nan")

# Shown wherever a pace or speed can't be computed
PLACEHOLDER = "—"


class Mode(str, Enum):
    SPEED = "speed"     # % of base speed (recommended)
    PACE = "pace"       # % of base pace time (less common)

    @property
    def label(self) -> str:
        if self is Mode.PACE:
            return "% of pace time (less common)"
        return "% of speed (recommended)"


@dataclass(frozen=True)
class TargetRow:
    percentage: float
    pace_seconds: float
    kph: float

