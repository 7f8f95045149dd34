from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import pygame

from ...i18n import tr
from ...ui.scoring import hit_ratio
from .draw import blit_centered

BG_COLOR = (10, 10, 15)
TEXT = (230, 230, 230)
DIM = (160, 160, 160)
ERROR = (255, 120, 120)

_NOTICE_KEYS = {
    "game_over": "game_over",
    "song_end": "game_over.song_end",
}


def render_title_screen(
    screen: pygame.Surface,
    *,
    fonts: Dict[str, pygame.font.Font],
    lang: str,
    lane_keys: Sequence[str],
    load_error: Optional[str] = None,
):
    """Idle screen: title, start hint, key bindings and the last load error."""
    W, H = screen.get_size()
    screen.fill(BG_COLOR)

    title = fonts["title"].render(tr(lang, "title"), True, TEXT)
    blit_centered(screen, title, W / 2, H * 0.3)

    y = H * 0.3 + title.get_height() + 24
    txt = fonts["hud"].render(tr(lang, "title.start"), True, TEXT)
    blit_centered(screen, txt, W / 2, y)
    y += fonts["hud"].get_linesize()

    keys = " ".join(k.upper() for k in lane_keys)
    txt = fonts["small"].render(tr(lang, "title.keys", keys=keys), True, DIM)
    blit_centered(screen, txt, W / 2, y)
    y += fonts["small"].get_linesize() * 2

    if load_error:
        txt = fonts["small"].render(tr(lang, "title.load_failed", reason=load_error), True, ERROR)
        blit_centered(screen, txt, W / 2, y)

    hint = fonts["small"].render(tr(lang, "hud.hint"), True, DIM)
    pad = max(4, int(fonts["small"].get_linesize() * 0.25))
    screen.blit(hint, (16, H - fonts["small"].get_linesize() - pad))


def render_game_over(screen: pygame.Surface, *, fonts: Dict[str, pygame.font.Font], lang: str, session: Any):
    W, H = screen.get_size()
    screen.fill(BG_COLOR)

    key = _NOTICE_KEYS.get(session.last_notice or "", "game_over.stopped")
    head = fonts["title"].render(tr(lang, key), True, TEXT)
    if head.get_width() > W - 32:
        head = fonts["hud"].render(tr(lang, key), True, TEXT)
    blit_centered(screen, head, W / 2, H * 0.3)

    y = H * 0.3 + head.get_height() + 24
    res = fonts["hud"].render(
        tr(lang, "game_over.result", score=session.score, max_combo=session.max_combo),
        True,
        TEXT,
    )
    blit_centered(screen, res, W / 2, y)
    y += fonts["hud"].get_linesize()

    ratio = int(round(hit_ratio(session.hits, session.misses) * 100))
    acc = fonts["small"].render(tr(lang, "game_over.accuracy", ratio=ratio), True, DIM)
    blit_centered(screen, acc, W / 2, y)
    y += fonts["small"].get_linesize() * 2

    again = fonts["small"].render(tr(lang, "game_over.again"), True, DIM)
    blit_centered(screen, again, W / 2, y)


def render_paused(screen: pygame.Surface, *, fonts: Dict[str, pygame.font.Font], lang: str, frame: Optional[pygame.Surface]):
    W, H = screen.get_size()
    if frame is not None:
        screen.blit(frame, (0, 0))
    else:
        screen.fill(BG_COLOR)
    txt = fonts["hud"].render(tr(lang, "paused"), True, TEXT)
    screen.blit(txt, (W // 2 - txt.get_width() // 2, H // 2))
