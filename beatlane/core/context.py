"""Resource management context for game sessions.

ResourceContext owns the session-scoped resources that need explicit
release: the audio backend, the loaded track and fonts.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional, Dict
import logging


@dataclass
class ResourceContext:
    """Session-scoped resource ownership."""

    audio_backend: Optional[Any] = None
    track: Optional[Any] = None        # beatlane.audio.energy.EnergyAnalyzer
    hitsound: Optional[Any] = None     # beatlane.audio.hitsound.HitsoundPlayer
    fonts: Dict[str, Any] = field(default_factory=dict)

    _logger: Optional[logging.Logger] = field(default=None, repr=False)

    def __post_init__(self):
        if self._logger is None:
            self._logger = logging.getLogger(__name__)

    def cleanup(self):
        """Release all resources.

        Call this when the session ends to stop playback and close the mixer.
        """
        if self._logger:
            self._logger.debug("Cleaning up resource context")

        if self.audio_backend is not None:
            self.audio_backend.stop_music()
            self.audio_backend.close()
            self.audio_backend = None

        self.track = None
        self.hitsound = None
        self.fonts.clear()
