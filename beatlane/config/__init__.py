from __future__ import annotations

from .schema import GameConfig

__all__ = ["GameConfig"]
