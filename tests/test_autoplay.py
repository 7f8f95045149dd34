from __future__ import annotations

import random

from beatlane.config.schema import GameConfig
from beatlane.core.session import GameSession
from beatlane.engine.autoplay import apply_autoplay, autoplay_lanes
from beatlane.types import Lane, Note

from conftest import FakeClock


def test_lanes_with_notes_near_the_band_are_selected():
    cfg = GameConfig()
    notes = [
        Note(nid=0, lane=Lane.A, created_ms=0, y=545),
        Note(nid=1, lane=Lane.S, created_ms=0, y=300),
        Note(nid=2, lane=Lane.F, created_ms=0, y=600),
    ]
    assert autoplay_lanes(notes, cfg) == {Lane.A, Lane.F}


def test_autoplay_never_misses():
    cfg = GameConfig(spawn_interval_ms=200)
    s = GameSession(cfg, FakeClock(step_ms=16), rng=random.Random(2))
    s.start()
    for _ in range(1500):
        apply_autoplay(s, cfg)
        s.update()
    assert s.running
    assert s.misses == 0
    assert s.score > 0
    assert s.max_combo == s.score // cfg.hit_reward
