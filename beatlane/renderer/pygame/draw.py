from __future__ import annotations

import pygame


def draw_ring(dst: pygame.Surface, x: float, y: float, r: int, rgba, thickness=3):
    if r <= 0 or rgba[3] <= 0:
        return
    pygame.draw.circle(dst, rgba, (int(x), int(y)), r, thickness)


def blit_centered(dst: pygame.Surface, surf: pygame.Surface, cx: float, y: float):
    dst.blit(surf, (int(cx - surf.get_width() / 2), int(y)))
