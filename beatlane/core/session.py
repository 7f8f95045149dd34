"""Game session state machine.

This module provides GameSession, the single object owning all mutable state
of one play session: active notes, lane key states, counters and phase.
A per-frame driver calls update() then render() while the session runs.
"""

from __future__ import annotations
from typing import Any, Callable, List, Optional
import logging
import random

from ..config.schema import GameConfig
from ..engine.effects import HitFX, prune_hitfx
from ..engine.judge import Judge, LaneKeys
from ..engine.note_manager import NoteManager
from ..errors import BeatlaneError
from ..math.util import finite_or_none
from ..types import Lane, Note, SessionPhase


Clock = Callable[[], Optional[float]]
EnergySource = Callable[[], Optional[float]]


class GameSession:
    """One play session: Idle -> Running -> Ended.

    ``start()`` is only valid from Idle and runs the asset loader first; a
    failed load leaves the session Idle. Reaching ``miss_limit`` misses (or
    calling ``stop()``) ends it. Going back to Running requires ``reset()``.
    """

    def __init__(
        self,
        config: GameConfig,
        clock: Clock,
        energy: Optional[EnergySource] = None,
        *,
        rng: Optional[random.Random] = None,
        renderer: Optional[Callable[["GameSession"], Any]] = None,
        on_hit: Optional[Callable[[Note], Any]] = None,
    ):
        """Initialize game session.

        Args:
            config: Gameplay configuration
            clock: Returns playback elapsed time in ms (None counts as 0)
            energy: Returns the current energy sample, None before warm-up
            rng: Random source for lane selection
            renderer: Frame renderer called by render()
            on_hit: Called once per hit note (e.g. hitsounds)
        """
        self.config = config
        self.clock = clock
        self.energy_source = energy
        self.renderer = renderer
        self.on_hit = on_hit

        self.note_manager = NoteManager(config, rng)
        self.judge = Judge(config)
        self.keys = LaneKeys()
        self.hitfx: List[HitFX] = []

        self.phase = SessionPhase.IDLE
        self.now_ms: float = 0.0
        self.energy: Optional[float] = None
        self.ticks = 0
        self.last_notice: Optional[str] = None

        self._logger = logging.getLogger(self.__class__.__name__)

    # read-only views for display

    @property
    def score(self) -> int:
        return self.judge.score

    @property
    def misses(self) -> int:
        return self.judge.misses

    @property
    def hits(self) -> int:
        return self.judge.hits

    @property
    def combo(self) -> int:
        return self.judge.combo

    @property
    def max_combo(self) -> int:
        return self.judge.max_combo

    @property
    def notes(self) -> List[Note]:
        return self.note_manager.notes

    @property
    def running(self) -> bool:
        return self.phase is SessionPhase.RUNNING

    # lifecycle

    def _clear(self) -> None:
        self.note_manager.reset()
        self.judge.reset()
        self.keys.release_all()
        self.hitfx = []
        self.now_ms = 0.0
        self.energy = None
        self.ticks = 0
        self.last_notice = None

    def reset(self) -> None:
        self._clear()
        self.phase = SessionPhase.IDLE
        self._logger.debug("session reset")

    def start(self, loader: Optional[Callable[[], Any]] = None) -> None:
        """Enter Running after the loader has made audio ready.

        Args:
            loader: Loads assets and starts playback. Any BeatlaneError it
                raises (AssetLoadError in practice) aborts the transition.

        Raises:
            BeatlaneError: From the loader; the session stays Idle
            RuntimeError: If the session is not Idle
        """
        if self.phase is not SessionPhase.IDLE:
            raise RuntimeError(f"cannot start a session in phase {self.phase.value}")

        if loader is not None:
            try:
                loader()
            except BeatlaneError as e:
                self._logger.error("start aborted: %s", e)
                raise

        self._clear()
        self.phase = SessionPhase.RUNNING
        self._logger.info("session started")

    def stop(self, notice: Optional[str] = None) -> None:
        if self.phase is not SessionPhase.RUNNING:
            return
        self.phase = SessionPhase.ENDED
        self.last_notice = notice
        self._logger.info(
            "session ended (score=%d, misses=%d, max_combo=%d)",
            self.score,
            self.misses,
            self.max_combo,
        )

    # input

    def set_key_state(self, lane: Any, pressed: bool) -> None:
        self.keys.set(lane, pressed)

    def lane_pressed(self, lane: Lane) -> bool:
        return self.keys.is_down(lane)

    # per-frame

    def _sample(self) -> None:
        t = finite_or_none(self.clock())
        # playback time never goes backwards within a session
        if t is not None and t > self.now_ms:
            self.now_ms = t
        self.energy = finite_or_none(self.energy_source()) if self.energy_source is not None else None

    def update(self) -> None:
        if self.phase is not SessionPhase.RUNNING:
            return

        self._sample()
        now = self.now_ms
        nm = self.note_manager

        nm.spawn(now, self.energy)

        missed = nm.advance(now)
        if missed:
            self.judge.mark_miss(len(missed))
            self._logger.debug("miss x%d (total=%d)", len(missed), self.misses)

        remaining, hit = self.judge.check_hits(nm.notes, self.keys)
        if hit:
            nm.replace(remaining)
            for note in hit:
                self.hitfx.append(HitFX(x=self.config.lane_x(note.lane), y=note.y, t0_ms=now))
                if self.on_hit is not None:
                    self.on_hit(note)

        self.hitfx = prune_hitfx(self.hitfx, now)
        self.ticks += 1

        if self.misses >= self.config.miss_limit:
            self.stop(notice="game_over")

    def render(self) -> None:
        if self.phase is not SessionPhase.RUNNING:
            return
        if self.renderer is not None:
            self.renderer(self)


__all__ = ["GameSession", "Clock", "EnergySource"]
