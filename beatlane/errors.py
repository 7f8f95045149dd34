from __future__ import annotations


class BeatlaneError(Exception):
    pass


class AssetLoadError(BeatlaneError):
    """Raised when an audio asset cannot be read or decoded.

    For the music track this is fatal to starting a session: the session
    stays idle and the user may retry the start action. A missing hitsound
    is only logged.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"failed to load {path!r}: {reason}")
        self.path = path
        self.reason = reason
