from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

HITFX_DURATION_MS = 180.0


@dataclass
class HitFX:
    x: float
    y: float
    t0_ms: float
    rgba: Tuple[int, int, int, int] = (120, 200, 255, 255)

    def age(self, now_ms: float) -> float:
        return float(now_ms) - self.t0_ms

    def alive(self, now_ms: float, duration_ms: float = HITFX_DURATION_MS) -> bool:
        return 0.0 <= self.age(now_ms) <= duration_ms


def prune_hitfx(hitfx: List[HitFX], now_ms: float, duration_ms: float = HITFX_DURATION_MS) -> List[HitFX]:
    return [fx for fx in hitfx if fx.alive(now_ms, duration_ms)]
