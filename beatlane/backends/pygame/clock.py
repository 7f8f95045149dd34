from __future__ import annotations

from typing import Any, Optional

from ...math.util import now_sec


class PlaybackClock:
    """Playback elapsed time in ms.

    Follows the music position when the mixer reports one and falls back to
    the wall clock (minus paused time) otherwise.
    """

    def __init__(self, audio: Optional[Any] = None):
        self.audio = audio
        self._t0: Optional[float] = None
        self._pause_t: Optional[float] = None

    def restart(self) -> None:
        self._t0 = now_sec()
        self._pause_t = None

    def pause(self) -> None:
        if self._pause_t is None:
            self._pause_t = now_sec()

    def resume(self) -> None:
        if self._pause_t is not None and self._t0 is not None:
            self._t0 += now_sec() - self._pause_t
        self._pause_t = None

    def __call__(self) -> Optional[float]:
        if self.audio is not None:
            pos = self.audio.music_pos_sec()
            if pos is not None:
                return pos * 1000.0
        if self._t0 is None:
            return None
        ref = self._pause_t if self._pause_t is not None else now_sec()
        return (ref - self._t0) * 1000.0
