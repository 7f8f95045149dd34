"""Track loading and energy analysis.

The energy of a frame is the sum of squared samples over a short window
(256 samples by default) of the mono downmix, read at the playback cursor.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import numpy as np
import soundfile as sf

from ..errors import AssetLoadError

logger = logging.getLogger(__name__)


class EnergyAnalyzer:
    """Energy of the decoded track around a playback position."""

    def __init__(self, samples: np.ndarray, samplerate: int, frame_size: int = 256):
        """
        Args:
            samples: Mono samples (1-D) or (frames, channels) array in [-1, 1]
            samplerate: Samples per second
            frame_size: Window length in samples
        """
        data = np.asarray(samples, dtype=np.float32)
        if data.ndim == 2:
            data = data.mean(axis=1)
        elif data.ndim != 1:
            raise ValueError(f"expected 1-D or 2-D samples, got shape {data.shape}")
        if int(samplerate) <= 0:
            raise ValueError("samplerate must be positive")

        self.samples = data
        self.samplerate = int(samplerate)
        self.frame_size = max(1, int(frame_size))

    @property
    def duration_sec(self) -> float:
        return float(len(self.samples)) / float(self.samplerate)

    def energy_at(self, pos_sec: Optional[float]) -> Optional[float]:
        """Energy of the window ending at ``pos_sec``.

        Returns None before playback has a position, before the first full
        window and past the end of the track.
        """
        if pos_sec is None or pos_sec < 0:
            return None
        end = int(float(pos_sec) * self.samplerate)
        if end < self.frame_size or end > len(self.samples):
            return None
        frame = self.samples[end - self.frame_size:end]
        return float(np.dot(frame, frame))


def load_track(path: str, frame_size: int = 256) -> EnergyAnalyzer:
    """Decode a music file for energy analysis.

    Raises:
        AssetLoadError: If the file is missing or cannot be decoded
    """
    if not path:
        raise AssetLoadError(str(path), "no music file given")
    if not os.path.isfile(path):
        raise AssetLoadError(str(path), "file not found")
    try:
        data, samplerate = sf.read(str(path), dtype="float32", always_2d=True)
    except RuntimeError as e:  # soundfile.LibsndfileError
        raise AssetLoadError(str(path), str(e)) from e
    if len(data) == 0:
        raise AssetLoadError(str(path), "track is empty")

    analyzer = EnergyAnalyzer(data, samplerate, frame_size=frame_size)
    logger.info(
        "loaded track %s (%.1fs, %d Hz, %d ch)",
        os.path.basename(str(path)),
        analyzer.duration_sec,
        samplerate,
        data.shape[1],
    )
    return analyzer
