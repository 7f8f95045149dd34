from __future__ import annotations

import logging
from typing import Any, Iterable, List, Tuple

from ..config.schema import GameConfig
from ..types import Lane, Note

logger = logging.getLogger(__name__)


class LaneKeys:
    """Pressed / released flag per lane, indexed by Lane."""

    def __init__(self):
        self._down: List[bool] = [False] * len(Lane)

    def set(self, lane: Any, pressed: bool) -> bool:
        ln = Lane.coerce(lane)
        if ln is None:
            logger.debug("ignoring key state for unknown lane %r", lane)
            return False
        self._down[int(ln)] = bool(pressed)
        return True

    def is_down(self, lane: Lane) -> bool:
        return self._down[int(lane)]

    def __getitem__(self, lane: Lane) -> bool:
        return self._down[int(lane)]

    def pressed(self) -> List[Lane]:
        return [ln for ln in Lane if self._down[int(ln)]]

    def release_all(self):
        self._down = [False] * len(Lane)


class Judge:
    def __init__(self, config: GameConfig):
        self.config = config
        self.score = 0
        self.misses = 0
        self.hits = 0
        self.combo = 0
        self.max_combo = 0

    def reset(self):
        self.score = 0
        self.misses = 0
        self.hits = 0
        self.combo = 0
        self.max_combo = 0

    def in_hit_zone(self, note: Note) -> bool:
        return self.config.hit_zone_low <= note.y <= self.config.hit_zone_high

    def bump(self):
        self.hits += 1
        self.score += self.config.hit_reward
        self.combo += 1
        self.max_combo = max(self.max_combo, self.combo)

    def mark_miss(self, count: int = 1):
        if count <= 0:
            return
        self.misses += int(count)
        self.combo = 0

    def check_hits(self, notes: Iterable[Note], keys: LaneKeys) -> Tuple[List[Note], List[Note]]:
        """Consume every in-zone note whose lane key is held.

        Key state does not change mid-tick, so several notes of one lane
        inside the band are all consumed together.

        Returns:
            (remaining notes, notes hit this tick), both in input order
        """
        remaining: List[Note] = []
        hit: List[Note] = []
        for note in notes:
            if self.in_hit_zone(note) and keys.is_down(note.lane):
                self.bump()
                hit.append(note)
            else:
                remaining.append(note)
        return remaining, hit
