"""Pygame session implementation.

This module provides the PygameSession class, which owns the window, the
audio backend and the GameSession for one run of the game, and wires them to
the per-frame driver.
"""

from __future__ import annotations
from typing import Any, Optional
import logging
import random

import pygame

from ...audio import create_audio_backend
from ...audio.energy import load_track
from ...audio.hitsound import HitsoundPlayer
from ...config.schema import GameConfig
from ...core.context import ResourceContext
from ...core.session import GameSession
from ...errors import AssetLoadError
from ...math.util import clamp
from ...renderer.pygame.fonts import load_fonts
from ...renderer.pygame.frame_renderer import FrameRenderer
from ...types import Note
from .clock import PlaybackClock
from .game_loop import GameLoop
from .input.keyboard import LaneKeyMap


class PygameSession:
    """Pygame-specific game session.

    ``run()`` calls initialize(), run_game_loop() and cleanup() in sequence,
    cleaning up even if the loop raises.
    """

    def __init__(
        self,
        config: GameConfig,
        *,
        music_path: Optional[str],
        audio_backend: str = "pygame",
        hitsound_path: Optional[str] = None,
        lang: str = "en",
        font_path: Optional[str] = None,
        font_size_multiplier: float = 1.0,
        autoplay: bool = False,
        seed: Optional[int] = None,
        show_debug: bool = False,
        autostart: bool = False,
    ):
        """Initialize Pygame session.

        Args:
            config: Gameplay configuration
            music_path: Track to play and analyse
            audio_backend: Audio backend name (see create_audio_backend)
            hitsound_path: Optional short sound played on every hit
            lang: UI language
            font_path: Optional TTF font
            font_size_multiplier: Scales every UI font
            autoplay: Press lanes automatically
            seed: Seed for lane selection
            show_debug: Draw FPS / energy line
            autostart: Start the session right after initialization
        """
        self.config = config
        self.music_path = music_path
        self.audio_backend_name = audio_backend
        self.hitsound_path = hitsound_path
        self.lang = lang
        self.font_path = font_path
        self.font_size_multiplier = font_size_multiplier
        self.autoplay = bool(autoplay)
        self.seed = seed
        self.show_debug = bool(show_debug)
        self.autostart = bool(autostart)

        self.resources = ResourceContext()
        self.volume = clamp(float(config.volume), 0.0, 1.0)
        self.load_error: Optional[str] = None

        self.screen: Optional[pygame.Surface] = None
        self.fonts: Any = None
        self.audio: Any = None
        self.clock: Optional[PlaybackClock] = None
        self.keymap: Optional[LaneKeyMap] = None
        self.session: Optional[GameSession] = None
        self.loop: Optional[GameLoop] = None
        self._initialized = False

        self._logger = logging.getLogger(self.__class__.__name__)

    def initialize(self) -> None:
        """Set up display, fonts, audio and the game session."""
        if not pygame.get_init():
            pygame.init()

        cfg = self.config
        self.screen = pygame.display.set_mode((cfg.width, cfg.height))
        pygame.display.set_caption("Beatlane")

        self.fonts = load_fonts(self.font_path, self.font_size_multiplier)
        self.resources.fonts.update(self.fonts)

        self.audio = create_audio_backend(self.audio_backend_name)
        self.resources.audio_backend = self.audio
        self.clock = PlaybackClock(self.audio)
        self.keymap = LaneKeyMap(cfg.lane_keys)

        renderer = FrameRenderer(
            self.screen,
            self.fonts,
            lang=self.lang,
            volume=lambda: self.volume,
            show_debug=self.show_debug,
        )
        self.session = GameSession(
            cfg,
            self.clock,
            self.energy_now,
            rng=random.Random(self.seed),
            renderer=renderer,
            on_hit=self._on_hit,
        )
        self.loop = GameLoop(self)
        renderer.clock = self.loop.clock

        self._initialized = True
        self._logger.info("Pygame session initialized: %dx%d", cfg.width, cfg.height)

        if self.autostart:
            self.start()

    # collaborators for GameSession

    def energy_now(self) -> Optional[float]:
        # reads the time the session sampled this tick, not the clock again
        track = self.resources.track
        if track is None or self.session is None:
            return None
        return track.energy_at(self.session.now_ms / 1000.0)

    def _on_hit(self, note: Note) -> None:
        hs = self.resources.hitsound
        if hs is not None and self.session is not None:
            hs.play(self.session.now_ms, volume=self.volume)

    def _load_and_play(self) -> None:
        cfg = self.config
        track = load_track(str(self.music_path or ""), frame_size=cfg.energy_frame_size)
        hitsound = None
        if self.hitsound_path:
            try:
                hitsound = HitsoundPlayer(
                    audio=self.audio,
                    path=self.hitsound_path,
                    min_interval_ms=cfg.hitsound_min_interval_ms,
                )
            except AssetLoadError as e:
                # the music is what matters; play on without hitsounds
                self._logger.warning("hitsound %s not loaded: %s", e.path, e.reason)
        self.audio.play_music_file(str(self.music_path), volume=self.volume)
        self.resources.track = track
        self.resources.hitsound = hitsound
        self.clock.restart()

    # actions driven by GameLoop

    def start(self) -> bool:
        try:
            self.session.start(self._load_and_play)
        except AssetLoadError as e:
            self.load_error = e.reason
            return False
        self.load_error = None
        return True

    def back_to_title(self) -> None:
        self.audio.stop_music()
        self.resources.track = None
        self.session.reset()

    def restart(self) -> bool:
        self.back_to_title()
        return self.start()

    def pause_audio(self) -> None:
        self.audio.pause_music()
        self.clock.pause()

    def resume_audio(self) -> None:
        self.audio.unpause_music()
        self.clock.resume()

    def song_finished(self) -> bool:
        # only meaningful when the mixer is actually playing the track
        if not getattr(self.audio, "available", False) or self.resources.track is None:
            return False
        return not self.audio.music_active()

    def change_volume(self, direction: int) -> float:
        step = float(self.config.volume_step) * (1 if direction > 0 else -1)
        self.volume = round(clamp(self.volume + step, 0.0, 1.0), 3)
        self.audio.set_music_volume(self.volume)
        self._logger.debug("volume=%.2f", self.volume)
        return self.volume

    # lifecycle

    def run_game_loop(self) -> Any:
        return self.loop.run()

    def cleanup(self) -> None:
        if self._initialized:
            self.resources.cleanup()
            pygame.quit()
            self._initialized = False
            self._logger.info("Pygame session cleaned up")

    def run(self) -> Any:
        try:
            self._logger.info("Initializing session")
            self.initialize()

            self._logger.info("Starting game loop")
            result = self.run_game_loop()

            self._logger.info("Game loop completed")
            return result
        finally:
            self._logger.info("Cleaning up session")
            self.cleanup()


__all__ = ["PygameSession"]
