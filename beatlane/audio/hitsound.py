from __future__ import annotations

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class HitsoundPlayer:
    def __init__(self, *, audio: Any, path: Optional[str], min_interval_ms: int = 0):
        self.audio = audio
        self.path = path
        self.min_interval_ms = max(0, int(min_interval_ms))
        self.last_ms: float = -10**9
        self.sound: Any = None
        if path:
            self.sound = audio.load_sound(str(path))
            logger.debug("hitsound loaded: %s", path)

    def play(self, now_ms: float, volume: float = 1.0) -> bool:
        if self.sound is None:
            return False
        if self.min_interval_ms > 0 and now_ms - self.last_ms < self.min_interval_ms:
            return False
        self.audio.play_sound(self.sound, volume=volume)
        self.last_ms = float(now_ms)
        return True
