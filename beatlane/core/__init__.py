from __future__ import annotations

from .session import GameSession
from .context import ResourceContext

__all__ = ["GameSession", "ResourceContext"]
