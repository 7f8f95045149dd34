from __future__ import annotations

import os
import random
from typing import List, Optional

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from beatlane.config.schema import GameConfig
from beatlane.core.session import GameSession


class FakeClock:
    """Playback time that only moves when a test says so."""

    def __init__(self, start_ms: float = 0.0, step_ms: float = 0.0):
        self.t = float(start_ms)
        self.step_ms = float(step_ms)

    def __call__(self) -> float:
        t = self.t
        self.t += self.step_ms
        return t


class FakeEnergy:
    def __init__(self, values: Optional[List[Optional[float]]] = None, default: Optional[float] = None):
        self.values = list(values or [])
        self.default = default

    def __call__(self) -> Optional[float]:
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def energy() -> FakeEnergy:
    return FakeEnergy()


@pytest.fixture
def session(config, clock, energy) -> GameSession:
    s = GameSession(config, clock, energy, rng=random.Random(7))
    s.start()
    return s
