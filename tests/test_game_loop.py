from __future__ import annotations

import numpy as np
import pygame
import pytest
import soundfile as sf

from beatlane.backends.pygame import session as session_mod
from beatlane.backends.pygame.session import PygameSession
from beatlane.config.schema import GameConfig
from beatlane.errors import AssetLoadError
from beatlane.types import Lane, SessionPhase


class StubAudio:
    """Mixer stand-in whose playback state the test controls."""

    available = True

    def __init__(self):
        self.active = True
        self.paused = False
        self.volume = None
        self.played = []
        self.stopped = 0
        self.closed = False
        self.bad_sounds = set()

    def close(self):
        self.closed = True

    def play_music_file(self, path, volume=1.0, start_pos_sec=0.0):
        self.played.append(path)
        self.volume = volume
        self.active = True

    def stop_music(self):
        self.stopped += 1
        self.active = False

    def pause_music(self):
        self.paused = True

    def unpause_music(self):
        self.paused = False

    def music_pos_sec(self):
        return None

    def music_active(self):
        return self.active

    def set_music_volume(self, volume):
        self.volume = volume

    def load_sound(self, path):
        if path in self.bad_sounds:
            raise AssetLoadError(path, "unsupported format")
        return f"sound:{path}"

    def play_sound(self, sound, volume=1.0):
        return None


def key(k, kind=pygame.KEYDOWN):
    return pygame.event.Event(kind, key=k)


@pytest.fixture
def track(tmp_path):
    path = tmp_path / "song.wav"
    sr = 8000
    t = np.arange(sr * 2, dtype=np.float32) / sr
    sf.write(str(path), 0.5 * np.sin(2 * np.pi * 220 * t), sr)
    return str(path)


@pytest.fixture
def audio(monkeypatch):
    stub = StubAudio()
    monkeypatch.setattr(session_mod, "create_audio_backend", lambda name: stub)
    return stub


@pytest.fixture
def make_host(audio):
    hosts = []

    def _make(music_path, **kwargs):
        host = PygameSession(GameConfig(), music_path=music_path, **kwargs)
        host.initialize()
        hosts.append(host)
        return host

    yield _make
    for host in hosts:
        host.cleanup()


def test_autostart_starts_playback_and_ticks(make_host, track, audio):
    host = make_host(track, autostart=True)
    assert host.session.running
    assert audio.played == [track]
    assert audio.volume == pytest.approx(0.3)

    host.loop.step()
    assert host.session.ticks == 1


def test_space_starts_from_title_and_returns_from_game_over(make_host, track, audio):
    host = make_host(track)
    assert host.session.phase is SessionPhase.IDLE
    host.loop.step()
    assert host.session.ticks == 0

    host.loop.handle_event(key(pygame.K_SPACE))
    assert host.session.running

    host.session.stop(notice="game_over")
    host.loop.step()
    host.loop.handle_event(key(pygame.K_RETURN))
    assert host.session.phase is SessionPhase.IDLE
    assert audio.stopped >= 1
    assert host.resources.track is None


def test_pause_freezes_updates_and_music(make_host, track, audio):
    host = make_host(track, autostart=True)
    host.loop.step()
    assert host.session.ticks == 1

    host.loop.handle_event(key(pygame.K_p))
    assert host.loop.paused
    assert audio.paused
    for _ in range(3):
        host.loop.step()
    assert host.session.ticks == 1

    host.loop.handle_event(key(pygame.K_p))
    assert not host.loop.paused
    assert not audio.paused
    host.loop.step()
    assert host.session.ticks == 2


def test_restart_clears_the_run(make_host, track, audio):
    host = make_host(track, autostart=True)
    host.session.judge.score = 50
    host.loop.handle_event(key(pygame.K_p))

    host.loop.handle_event(key(pygame.K_r))
    assert host.session.running
    assert host.session.score == 0
    assert not host.loop.paused
    assert audio.played == [track, track]


def test_volume_steps_and_stays_in_range(make_host, track, audio):
    host = make_host(track)
    host.loop.handle_event(key(pygame.K_EQUALS))
    assert host.volume == pytest.approx(0.4)
    assert audio.volume == pytest.approx(0.4)

    for _ in range(10):
        host.loop.handle_event(key(pygame.K_EQUALS))
    assert host.volume == pytest.approx(1.0)

    for _ in range(20):
        host.loop.handle_event(key(pygame.K_MINUS))
    assert host.volume == pytest.approx(0.0)
    assert audio.volume == pytest.approx(0.0)


def test_finished_track_ends_session_with_song_end(make_host, track, audio):
    host = make_host(track, autostart=True)
    host.loop.step()
    audio.active = False

    host.loop.step()
    assert host.session.phase is SessionPhase.ENDED
    assert host.session.last_notice == "song_end"
    host.loop.step()


def test_lane_keys_follow_key_events(make_host, track):
    host = make_host(track, autostart=True)
    host.loop.handle_event(key(pygame.K_a))
    assert host.session.lane_pressed(Lane.A)
    host.loop.handle_event(key(pygame.K_a, pygame.KEYUP))
    assert not host.session.lane_pressed(Lane.A)


def test_key_events_ignored_under_autoplay(make_host, track):
    host = make_host(track, autostart=True, autoplay=True)
    host.session.set_key_state(Lane.A, True)
    host.loop.handle_event(key(pygame.K_a, pygame.KEYUP))
    assert host.session.lane_pressed(Lane.A)

    host.loop.handle_event(key(pygame.K_s))
    assert not host.session.lane_pressed(Lane.S)


def test_load_failure_is_shown_on_title(make_host, tmp_path, audio):
    host = make_host(str(tmp_path / "missing.ogg"))
    host.loop.handle_event(key(pygame.K_SPACE))
    assert host.session.phase is SessionPhase.IDLE
    assert host.load_error == "file not found"
    assert audio.played == []
    host.loop.step()


def test_missing_hitsound_does_not_block_start(make_host, track, audio):
    audio.bad_sounds.add("hit.ogg")
    host = make_host(track, hitsound_path="hit.ogg", autostart=True)
    assert host.session.running
    assert host.load_error is None
    assert host.resources.hitsound is None


def test_escape_and_window_close_end_the_loop(make_host, track):
    host = make_host(track)
    host.loop.running = True
    host.loop.handle_event(key(pygame.K_ESCAPE))
    assert not host.loop.running

    pygame.event.post(pygame.event.Event(pygame.QUIT))
    result = host.run_game_loop()
    assert result == {"score": 0, "misses": 0, "max_combo": 0, "phase": "idle"}
