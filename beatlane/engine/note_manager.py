"""Note lifecycle management.

This module provides NoteManager, which spawns notes on a fixed cadence and
on audio energy spikes, advances them down the playfield and retires the
ones that fall past the far edge.
"""

from __future__ import annotations
from typing import List, Optional
import logging
import random

from ..config.schema import GameConfig
from ..math.util import finite_or_none
from ..types import Lane, Note


_LANES = list(Lane)


class NoteManager:
    """Owns the ordered list of active notes.

    Two independent spawn triggers are evaluated every tick:

    - cadence: one note whenever more than ``spawn_interval_ms`` has passed
      since the last cadence spawn;
    - energy: one emphasised note when energy rises above
      ``energy_threshold``, re-armed only once energy drops below
      ``energy_release``.

    Both may fire in the same tick.
    """

    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None):
        """Initialize note manager.

        Args:
            config: Gameplay configuration
            rng: Random source for lane selection (seed it for replays)
        """
        self.config = config
        self.rng = rng or random.Random()
        self.notes: List[Note] = []
        self.last_spawn_ms: float = 0.0
        self.beat_armed: bool = True  # debounce flag, False while a beat is held
        self._next_nid = 0
        self._logger = logging.getLogger(__name__)

    def reset(self) -> None:
        self.notes = []
        self.last_spawn_ms = 0.0
        self.beat_armed = True
        self._next_nid = 0

    def _new_note(self, now_ms: float) -> Note:
        lane = self.rng.choice(_LANES)
        note = Note(nid=self._next_nid, lane=lane, created_ms=float(now_ms))
        self._next_nid += 1
        self.notes.append(note)
        return note

    def spawn(self, now_ms: float, energy: Optional[float]) -> List[Note]:
        """Run both spawn triggers for one tick.

        Args:
            now_ms: Playback time in milliseconds
            energy: Energy sample for this tick, None when unavailable

        Returns:
            Notes created this tick (0, 1 or 2)
        """
        cfg = self.config
        spawned: List[Note] = []

        if now_ms - self.last_spawn_ms > cfg.spawn_interval_ms:
            spawned.append(self._new_note(now_ms))
            self.last_spawn_ms = float(now_ms)

        e = finite_or_none(energy)
        if e is not None:
            if e > cfg.energy_threshold and self.beat_armed:
                note = self._new_note(now_ms)
                note.pulse_until_ms = float(now_ms) + cfg.pulse_ms
                self.beat_armed = False
                spawned.append(note)
            if e < cfg.energy_release:
                self.beat_armed = True

        if spawned:
            self._logger.debug(
                "spawn t=%.1fms energy=%s lanes=%s",
                now_ms,
                "-" if e is None else f"{e:.3f}",
                ",".join(n.lane.label for n in spawned),
            )
        return spawned

    def advance(self, now_ms: float) -> List[Note]:
        """Move every note down one step and retire the ones past the far edge.

        Args:
            now_ms: Playback time in milliseconds, used for the emphasis pulse

        Returns:
            Notes removed as misses this tick
        """
        cfg = self.config
        far_edge = float(cfg.height)
        kept: List[Note] = []
        missed: List[Note] = []

        for note in self.notes:
            note.y += cfg.fall_speed
            if note.pulse_until_ms is not None and now_ms >= note.pulse_until_ms:
                note.pulse_until_ms = None
            note.scale = cfg.pulse_scale if note.pulse_until_ms is not None else 1.0

            # strictly past the edge; a note sitting on it can still be hit
            if note.y > far_edge:
                missed.append(note)
            else:
                kept.append(note)

        self.notes = kept
        return missed

    def replace(self, notes: List[Note]) -> None:
        self.notes = notes

    def __len__(self) -> int:
        return len(self.notes)


__all__ = ["NoteManager"]
