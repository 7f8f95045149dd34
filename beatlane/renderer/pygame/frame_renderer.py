from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

import pygame

from ...engine.effects import HITFX_DURATION_MS, HitFX
from ...i18n import tr
from ...types import Lane, Note
from ...ui.scoring import background_colors, energy_intensity, format_clock
from .draw import draw_ring

NOTE_RADIUS = 20
NOTE_COLOR = (40, 90, 230)
NOTE_OUTLINE = (0, 0, 0)
LANE_COLOR = (255, 255, 255)
ZONE_COLOR = (255, 255, 255, 40)
TEXT_COLOR = (255, 255, 255)


GRADIENT_LEVELS = 16


class GradientCache:
    """Diagonal two-colour gradients.

    Intensities are snapped to GRADIENT_LEVELS steps, so at most that many
    full-window surfaces are ever held.
    """

    def __init__(self, size: Tuple[int, int], levels: int = GRADIENT_LEVELS):
        self.size = size
        self.step = max(1, 256 // max(1, int(levels)))
        self._cache: Dict[int, pygame.Surface] = {}

    def quantize(self, intensity: int) -> int:
        return min(255, (int(intensity) // self.step) * self.step)

    def get(self, intensity: int) -> pygame.Surface:
        intensity = self.quantize(intensity)
        surf = self._cache.get(intensity)
        if surf is None:
            c0, c1 = background_colors(intensity)
            mid = tuple((a + b) // 2 for a, b in zip(c0, c1))
            seed = pygame.Surface((2, 2), 0, 32)
            seed.set_at((0, 0), c0)
            seed.set_at((1, 0), mid)
            seed.set_at((0, 1), mid)
            seed.set_at((1, 1), c1)
            surf = pygame.transform.smoothscale(seed, self.size)
            self._cache[intensity] = surf
        return surf

    def __len__(self) -> int:
        return len(self._cache)


class FrameRenderer:
    """Draws one Running frame from session state. Never mutates the session."""

    def __init__(
        self,
        screen: pygame.Surface,
        fonts: Dict[str, pygame.font.Font],
        *,
        lang: str = "en",
        volume: Optional[Callable[[], float]] = None,
        show_debug: bool = False,
        clock: Optional[pygame.time.Clock] = None,
    ):
        self.screen = screen
        self.fonts = fonts
        self.lang = lang
        self.volume = volume
        self.show_debug = show_debug
        self.clock = clock
        self.gradients = GradientCache(screen.get_size())
        self._band: Optional[pygame.Surface] = None
        self._band_top = 0

    def __call__(self, session: Any) -> None:
        self.draw_frame(session)

    def draw_frame(self, session: Any) -> None:
        cfg = session.config

        self.draw_background(session.energy)
        self.draw_hit_zone(cfg)

        for note in session.notes:
            self.draw_note(note, cfg)

        self.draw_lanes(cfg)
        self.draw_pressed(session, cfg)

        for fx in session.hitfx:
            self.draw_hitfx(fx, session.now_ms)

        self.draw_hud(session)

    def draw_background(self, energy: Optional[float]) -> None:
        intensity = energy_intensity(energy)
        if intensity is None:
            self.screen.fill((0, 0, 0))
            return
        self.screen.blit(self.gradients.get(intensity), (0, 0))

    def zone_band(self, cfg: Any) -> pygame.Surface:
        # built once; the hit zone does not change during a run
        if self._band is None:
            h = max(1, int(cfg.hit_zone_high - cfg.hit_zone_low))
            self._band = pygame.Surface((cfg.width, h), pygame.SRCALPHA)
            self._band.fill(ZONE_COLOR)
            self._band_top = int(cfg.hit_zone_low)
        return self._band

    def draw_hit_zone(self, cfg: Any) -> None:
        band = self.zone_band(cfg)
        self.screen.blit(band, (0, self._band_top))

    def draw_note(self, note: Note, cfg: Any) -> None:
        x = int(cfg.lane_x(note.lane))
        y = int(note.y)
        r = max(1, int(NOTE_RADIUS * note.scale))
        pygame.draw.circle(self.screen, NOTE_COLOR, (x, y), r)
        pygame.draw.circle(self.screen, NOTE_OUTLINE, (x, y), r, 1)

    def draw_lanes(self, cfg: Any) -> None:
        for ln in Lane:
            x = int(cfg.lane_x(ln))
            pygame.draw.line(self.screen, LANE_COLOR, (x, 0), (x, cfg.height), 3)

    def draw_pressed(self, session: Any, cfg: Any) -> None:
        font = self.fonts["lane"]
        y = cfg.height - 50
        for ln in Lane:
            if not session.lane_pressed(ln):
                continue
            x = int(cfg.lane_x(ln))
            pygame.draw.circle(self.screen, NOTE_COLOR, (x, y), 25)
            pygame.draw.circle(self.screen, NOTE_OUTLINE, (x, y), 25, 1)
            label = font.render(ln.label, True, TEXT_COLOR)
            self.screen.blit(label, (x - label.get_width() // 2, y - label.get_height() // 2))

    def draw_hitfx(self, fx: HitFX, now_ms: float) -> None:
        age = fx.age(now_ms)
        if age < 0 or age > HITFX_DURATION_MS:
            return
        p = age / HITFX_DURATION_MS
        r = int(NOTE_RADIUS + 40 * p)
        rr, gg, bb, _ = fx.rgba
        a = int(255 * (1.0 - p))
        overlay = pygame.Surface((r * 2 + 4, r * 2 + 4), pygame.SRCALPHA)
        draw_ring(overlay, r + 2, r + 2, r, (rr, gg, bb, a), thickness=3)
        self.screen.blit(overlay, (int(fx.x) - r - 2, int(fx.y) - r - 2))

    def draw_hud(self, session: Any) -> None:
        font = self.fonts["hud"]
        small = self.fonts["small"]
        W = session.config.width
        lang = self.lang

        lines = [
            tr(lang, "hud.score", score=session.score),
            tr(lang, "hud.misses", misses=session.misses),
            tr(lang, "hud.combo", combo=session.combo),
        ]
        for i, s in enumerate(lines):
            self.screen.blit(font.render(s, True, TEXT_COLOR), (10, 10 + i * font.get_linesize()))

        clock_txt = font.render(tr(lang, "hud.time", clock=format_clock(session.now_ms / 1000.0)), True, TEXT_COLOR)
        self.screen.blit(clock_txt, (W - 150, 10))

        if self.volume is not None:
            vol = int(round(self.volume() * 100))
            vol_txt = small.render(tr(lang, "hud.volume", volume=vol), True, TEXT_COLOR)
            self.screen.blit(vol_txt, (W - 150, 10 + font.get_linesize()))

        if self.show_debug:
            fps = self.clock.get_fps() if self.clock is not None else 0.0
            e = session.energy
            dbg = small.render(
                f"FPS {fps:5.1f}  notes={len(session.notes)}  energy={'-' if e is None else f'{e:.3f}'}",
                True,
                TEXT_COLOR,
            )
            self.screen.blit(dbg, (10, 10 + 3 * font.get_linesize()))
