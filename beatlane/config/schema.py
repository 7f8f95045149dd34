"""Immutable game configuration.

Every tunable of a session lives here and is passed explicitly to the
engine, so several sessions (or tests) never share mutable settings.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple

from ..types import Lane


@dataclass(frozen=True)
class GameConfig:
    """Immutable gameplay configuration.

    The playfield's far edge is the window height: a note whose position
    passes ``height`` counts as a miss.
    """

    # Window / playfield
    width: int = 800
    height: int = 600
    fps: int = 60

    # Note lifecycle
    fall_speed: float = 5.0          # px per tick
    spawn_interval_ms: float = 650.0
    energy_threshold: float = 0.3
    energy_release: float = 0.2
    pulse_ms: float = 100.0
    pulse_scale: float = 1.5

    # Scoring
    hit_zone_low: float = 550.0
    hit_zone_high: float = 600.0
    hit_reward: int = 10
    miss_limit: int = 15

    # Input
    lane_keys: Tuple[str, ...] = ("a", "s", "d", "f")

    # Audio
    energy_frame_size: int = 256
    volume: float = 0.3
    volume_step: float = 0.1
    hitsound_min_interval_ms: int = 30

    def validate(self) -> "GameConfig":
        """Check cross-field consistency.

        Returns:
            self, so callers can chain ``GameConfig(...).validate()``

        Raises:
            ValueError: On the first inconsistent value found
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"window size must be positive, got {self.width}x{self.height}")
        if self.fall_speed <= 0:
            raise ValueError("fall_speed must be positive")
        if self.spawn_interval_ms <= 0:
            raise ValueError("spawn_interval_ms must be positive")
        if self.energy_release > self.energy_threshold:
            raise ValueError("energy_release must not exceed energy_threshold")
        if self.hit_zone_low > self.hit_zone_high:
            raise ValueError("hit_zone_low must not exceed hit_zone_high")
        if self.hit_reward < 0:
            raise ValueError("hit_reward must be non-negative")
        if self.miss_limit <= 0:
            raise ValueError("miss_limit must be positive")
        if len(self.lane_keys) != len(Lane):
            raise ValueError(f"lane_keys needs {len(Lane)} entries, got {len(self.lane_keys)}")
        if self.energy_frame_size <= 0:
            raise ValueError("energy_frame_size must be positive")
        return self

    def lane_x(self, lane: Lane) -> float:
        # lanes sit on the dividers of a 5-column grid
        return self.width / 5.0 * (int(lane) + 1)

    @classmethod
    def from_args(cls, args: Any) -> GameConfig:
        """Build a config from an argparse namespace.

        Attributes missing from ``args`` (or set to None) keep their defaults.
        """
        kw: Dict[str, Any] = {}
        for f in fields(cls):
            v = getattr(args, f.name, None)
            if v is None:
                continue
            if f.name == "lane_keys":
                v = tuple(str(k).strip().lower() for k in (v.split(",") if isinstance(v, str) else v))
            kw[f.name] = v
        return cls(**kw)
