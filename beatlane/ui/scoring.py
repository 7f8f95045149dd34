from __future__ import annotations

from typing import Optional, Tuple


def format_clock(seconds: float) -> str:
    s = max(0, int(seconds))
    return f"{s // 60}:{s % 60:02d}"


def hit_ratio(hits: int, misses: int) -> float:
    total = int(hits) + int(misses)
    if total <= 0:
        return 0.0
    return float(hits) / float(total)


def energy_intensity(energy: Optional[float]) -> Optional[int]:
    # energy mapped to a 0..255 colour channel, None before warm-up
    if energy is None:
        return None
    v = int(float(energy) * 255.0)
    return 0 if v < 0 else 255 if v > 255 else v


def background_colors(intensity: int) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    return (intensity, 50, 150), (30, intensity, 160)
