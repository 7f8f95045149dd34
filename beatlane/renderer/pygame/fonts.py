from __future__ import annotations

import logging
import os
from typing import Dict, Optional

import pygame

logger = logging.getLogger(__name__)

# base pixel sizes, scaled by font_size_multiplier
_SIZES = {
    "hud": 20,
    "small": 16,
    "lane": 30,
    "title": 48,
}


def load_fonts(font_path: Optional[str], font_size_multiplier: float = 1.0) -> Dict[str, pygame.font.Font]:
    font_mul = float(font_size_multiplier) if font_size_multiplier is not None else 1.0
    if font_mul <= 1e-9:
        font_mul = 1.0

    if not pygame.font.get_init():
        pygame.font.init()

    fonts: Dict[str, pygame.font.Font] = {}
    for name, base in _SIZES.items():
        size = max(1, int(round(base * font_mul)))
        font = None
        if font_path and os.path.exists(str(font_path)):
            try:
                font = pygame.font.Font(str(font_path), size)
            except (OSError, pygame.error) as e:
                logger.warning("font %s unusable (%s), falling back to system font", font_path, e)
                font_path = None
        if font is None:
            font = pygame.font.SysFont("arial", size, bold=(name == "lane"))
        fonts[name] = font

    return fonts
