from __future__ import annotations

import random

import pygame
import pytest

from beatlane.config.schema import GameConfig
from beatlane.core.session import GameSession
from beatlane.renderer.pygame.fonts import load_fonts
from beatlane.renderer.pygame.frame_renderer import FrameRenderer, GradientCache
from beatlane.renderer.pygame.ui_rendering import render_game_over, render_paused, render_title_screen
from beatlane.types import Lane, Note
from beatlane.ui.scoring import background_colors, energy_intensity, format_clock, hit_ratio

from conftest import FakeClock, FakeEnergy


@pytest.fixture(scope="module")
def fonts():
    pygame.font.init()
    yield load_fonts(None, 1.0)
    pygame.font.quit()


def test_format_clock():
    assert format_clock(0) == "0:00"
    assert format_clock(65.9) == "1:05"
    assert format_clock(-3) == "0:00"


def test_energy_intensity_clamps():
    assert energy_intensity(None) is None
    assert energy_intensity(0.5) == 127
    assert energy_intensity(3.0) == 255
    assert energy_intensity(-1.0) == 0
    assert background_colors(10) == ((10, 50, 150), (30, 10, 160))


def test_hit_ratio():
    assert hit_ratio(0, 0) == 0.0
    assert hit_ratio(3, 1) == 0.75


def test_gradient_cache_reuses_surfaces():
    cache = GradientCache((80, 60))
    a = cache.get(100)
    assert a is cache.get(100)
    assert a.get_size() == (80, 60)
    # red fades from the top-left colour towards the bottom-right one
    assert a.get_at((0, 0)).r > a.get_at((79, 59)).r


def test_gradient_cache_stays_bounded_over_every_intensity():
    cache = GradientCache((80, 60))
    for i in range(256):
        cache.get(i)
    assert len(cache) <= 16
    assert cache.get(17) is cache.get(20)
    assert cache.get(255) is not cache.get(0)


def test_hit_zone_band_is_built_once(fonts):
    cfg = GameConfig()
    screen = pygame.Surface((cfg.width, cfg.height))
    renderer = FrameRenderer(screen, fonts)
    band = renderer.zone_band(cfg)
    renderer.draw_hit_zone(cfg)
    renderer.draw_hit_zone(cfg)
    assert renderer.zone_band(cfg) is band
    assert band.get_size() == (cfg.width, int(cfg.hit_zone_high - cfg.hit_zone_low))


def test_frame_render_is_read_only(fonts):
    cfg = GameConfig()
    screen = pygame.Surface((cfg.width, cfg.height))
    renderer = FrameRenderer(screen, fonts, volume=lambda: 0.3, show_debug=True)
    s = GameSession(cfg, FakeClock(1000), FakeEnergy(default=0.4), rng=random.Random(1), renderer=renderer)
    s.start()
    s.set_key_state(Lane.D, True)
    s.notes.append(Note(nid=99, lane=Lane.D, created_ms=0, y=545))
    s.update()

    snapshot = ([(n.nid, n.y, n.scale) for n in s.notes], s.score, s.misses, list(s.hitfx))
    s.render()
    s.render()
    assert snapshot == ([(n.nid, n.y, n.scale) for n in s.notes], s.score, s.misses, list(s.hitfx))
    assert s.score == 10

    # pressed lane marker is drawn at the lane centre near the bottom
    assert tuple(screen.get_at((int(cfg.lane_x(Lane.D)), cfg.height - 50)))[:3] != (0, 0, 0)


def test_background_is_black_without_energy(fonts):
    cfg = GameConfig()
    screen = pygame.Surface((cfg.width, cfg.height))
    renderer = FrameRenderer(screen, fonts)
    s = GameSession(cfg, FakeClock(), renderer=renderer)
    s.start()
    s.update()
    s.render()
    assert tuple(screen.get_at((cfg.width // 2 + 7, 300)))[:3] == (0, 0, 0)


def test_screens_draw_without_error(fonts):
    cfg = GameConfig()
    screen = pygame.Surface((cfg.width, cfg.height))
    render_title_screen(screen, fonts=fonts, lang="en", lane_keys=cfg.lane_keys, load_error="file not found")
    render_paused(screen, fonts=fonts, lang="zh-CN", frame=None)

    s = GameSession(cfg, FakeClock())
    s.start()
    s.stop(notice="game_over")
    render_game_over(screen, fonts=fonts, lang="en", session=s)
