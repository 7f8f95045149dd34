from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

import pygame

from ....types import Lane

logger = logging.getLogger(__name__)


class LaneKeyMap:
    """Maps pygame key codes to lanes, in lane order."""

    def __init__(self, key_names: Sequence[str]):
        self._by_code: Dict[int, Lane] = {}
        for lane, name in zip(Lane, key_names):
            try:
                code = pygame.key.key_code(str(name))
            except ValueError:
                raise ValueError(f"unknown key name for lane {lane.label}: {name!r}") from None
            self._by_code[code] = lane
        logger.debug("lane keys: %s", ", ".join(f"{n}->{ln.label}" for ln, n in zip(Lane, key_names)))

    def lane_for(self, key: int) -> Optional[Lane]:
        return self._by_code.get(int(key))

    def __len__(self) -> int:
        return len(self._by_code)
