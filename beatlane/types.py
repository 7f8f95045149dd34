from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional


class Lane(IntEnum):
    A = 0
    S = 1
    D = 2
    F = 3

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def coerce(cls, value: Any) -> Optional["Lane"]:
        """Map an int index or a lane label ("A", "s", ...) to a Lane.

        Returns None for anything outside the lane set.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return None
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None


class SessionPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


@dataclass
class Note:
    nid: int
    lane: Lane
    created_ms: float
    y: float = 0.0
    scale: float = 1.0
    pulse_until_ms: Optional[float] = None  # emphasis deadline (energy notes)

    @property
    def pulsing(self) -> bool:
        return self.pulse_until_ms is not None
