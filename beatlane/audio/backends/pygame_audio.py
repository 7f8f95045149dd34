from __future__ import annotations

import logging
from typing import Any, Optional

import pygame

from ...errors import AssetLoadError

logger = logging.getLogger(__name__)


class PygameAudio:
    def __init__(self, *, channels: int = 16, **kwargs: Any):
        self.available = True
        try:
            pygame.mixer.pre_init(44100, -16, 2, 512)
            pygame.mixer.init()
            pygame.mixer.set_num_channels(int(channels))
        except pygame.error as e:
            # no audio device: the game still runs on the wall clock
            logger.warning("audio mixer unavailable: %s", e)
            self.available = False

        self._music_start_pos_sec: float = 0.0
        self._playing = False

    def close(self) -> None:
        if self.available:
            pygame.mixer.quit()
            self.available = False

    def play_music_file(self, path: str, volume: float = 1.0, start_pos_sec: float = 0.0) -> None:
        if not self.available:
            return
        try:
            pygame.mixer.music.load(str(path))
            pygame.mixer.music.set_volume(float(volume))
            self._music_start_pos_sec = max(0.0, float(start_pos_sec))
            pygame.mixer.music.play(loops=0, start=self._music_start_pos_sec)
        except pygame.error as e:
            raise AssetLoadError(str(path), str(e)) from e
        self._playing = True

    def stop_music(self) -> None:
        if self.available:
            pygame.mixer.music.stop()
        self._music_start_pos_sec = 0.0
        self._playing = False

    def pause_music(self) -> None:
        if self.available:
            pygame.mixer.music.pause()

    def unpause_music(self) -> None:
        if self.available:
            pygame.mixer.music.unpause()

    def set_music_volume(self, volume: float) -> None:
        if self.available:
            pygame.mixer.music.set_volume(float(volume))

    def music_pos_sec(self) -> Optional[float]:
        if not (self.available and self._playing):
            return None
        ms = pygame.mixer.music.get_pos()
        if ms is None or ms < 0:
            return float(self._music_start_pos_sec)
        return float(self._music_start_pos_sec) + float(ms) / 1000.0

    def music_active(self) -> bool:
        if not (self.available and self._playing):
            return False
        return bool(pygame.mixer.music.get_busy())

    def load_sound(self, path: str) -> Any:
        if not self.available:
            return None
        try:
            return pygame.mixer.Sound(str(path))
        except (pygame.error, FileNotFoundError) as e:
            raise AssetLoadError(str(path), str(e)) from e

    def play_sound(self, sound: Any, volume: float = 1.0) -> Any:
        if sound is None or not self.available:
            return None
        sound.set_volume(float(volume))
        return sound.play()
