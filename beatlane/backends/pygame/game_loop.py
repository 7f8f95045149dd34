"""Per-frame driver.

GameLoop pumps pygame events, forwards lane keys to the session and calls
``update()`` then ``render()`` once per frame while the session is Running.
Idle, Ended and paused frames draw their own screens instead.
"""

from __future__ import annotations
from typing import Any, Optional
import logging

import pygame

from ...engine.autoplay import apply_autoplay
from ...renderer.pygame.ui_rendering import render_game_over, render_paused, render_title_screen
from ...types import SessionPhase

_START_KEYS = (pygame.K_SPACE, pygame.K_RETURN, pygame.K_KP_ENTER)
_VOLUME_UP_KEYS = (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS)
_VOLUME_DOWN_KEYS = (pygame.K_MINUS, pygame.K_KP_MINUS)


class GameLoop:
    """Main loop for one window.

    Args:
        host: The owning PygameSession (start / restart / volume / audio)
    """

    def __init__(self, host: Any):
        self.host = host
        self.session = host.session
        self.clock = pygame.time.Clock()
        self.running = False
        self.paused = False
        self.pause_frame: Optional[pygame.Surface] = None
        self.frames = 0
        self._logger = logging.getLogger(self.__class__.__name__)

    def run(self) -> Any:
        self.running = True
        while self.running:
            self.clock.tick(self.host.config.fps)
            for ev in pygame.event.get():
                self.handle_event(ev)
            if not self.running:
                break
            self.step()
            pygame.display.flip()
            self.frames += 1

        self._logger.info("loop finished after %d frames", self.frames)
        return {
            "score": self.session.score,
            "misses": self.session.misses,
            "max_combo": self.session.max_combo,
            "phase": self.session.phase.value,
        }

    def step(self) -> None:
        host = self.host
        session = self.session
        screen = host.screen

        if session.phase is SessionPhase.IDLE:
            render_title_screen(
                screen,
                fonts=host.fonts,
                lang=host.lang,
                lane_keys=host.config.lane_keys,
                load_error=host.load_error,
            )
            return

        if session.phase is SessionPhase.ENDED:
            render_game_over(screen, fonts=host.fonts, lang=host.lang, session=session)
            return

        if self.paused:
            render_paused(screen, fonts=host.fonts, lang=host.lang, frame=self.pause_frame)
            return

        if host.song_finished():
            session.stop(notice="song_end")
            return

        if host.autoplay:
            apply_autoplay(session, host.config)
        session.update()
        session.render()

    def handle_event(self, ev: Any) -> None:
        if ev.type == pygame.QUIT:
            self.running = False
            return

        if ev.type == pygame.KEYDOWN:
            self._on_key_down(ev.key)
        elif ev.type == pygame.KEYUP:
            lane = self.host.keymap.lane_for(ev.key)
            if lane is not None and not self.host.autoplay:
                self.session.set_key_state(lane, False)

    def _on_key_down(self, key: int) -> None:
        host = self.host
        session = self.session

        lane = host.keymap.lane_for(key)
        if lane is not None:
            if not host.autoplay:
                session.set_key_state(lane, True)
            return

        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in _START_KEYS:
            if session.phase is SessionPhase.IDLE:
                host.start()
            elif session.phase is SessionPhase.ENDED:
                host.back_to_title()
        elif key == pygame.K_p and session.running:
            self.toggle_pause()
        elif key == pygame.K_r and session.phase is not SessionPhase.IDLE:
            self.paused = False
            self.pause_frame = None
            host.restart()
        elif key in _VOLUME_UP_KEYS:
            host.change_volume(+1)
        elif key in _VOLUME_DOWN_KEYS:
            host.change_volume(-1)

    def toggle_pause(self) -> None:
        self.paused = not self.paused
        if self.paused:
            self.pause_frame = self.host.screen.copy()
            self.host.pause_audio()
        else:
            self.pause_frame = None
            self.host.resume_audio()
        self._logger.debug("paused=%s", self.paused)


__all__ = ["GameLoop"]
