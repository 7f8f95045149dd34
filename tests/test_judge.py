from __future__ import annotations

from beatlane.config.schema import GameConfig
from beatlane.engine.judge import Judge, LaneKeys
from beatlane.types import Lane, Note


def note(nid: int, lane: Lane, y: float) -> Note:
    return Note(nid=nid, lane=lane, created_ms=0.0, y=y)


def test_lane_keys_last_write_wins():
    keys = LaneKeys()
    keys.set(Lane.A, True)
    keys.set(Lane.A, True)
    assert keys.is_down(Lane.A)
    keys.set(Lane.A, False)
    assert not keys[Lane.A]


def test_lane_keys_accepts_labels_and_indices():
    keys = LaneKeys()
    assert keys.set("d", True)
    assert keys.set(3, True)
    assert keys.pressed() == [Lane.D, Lane.F]


def test_lane_keys_ignores_unknown_lanes():
    keys = LaneKeys()
    for bad in ("Q", 9, -1, None, True, 2.5):
        assert keys.set(bad, True) is False
    assert keys.pressed() == []


def test_hit_inside_band_with_key_down_scores():
    judge = Judge(GameConfig())
    keys = LaneKeys()
    keys.set(Lane.S, True)

    notes = [note(0, Lane.S, 550), note(1, Lane.S, 600), note(2, Lane.A, 575)]
    remaining, hit = judge.check_hits(notes, keys)

    assert [n.nid for n in hit] == [0, 1]
    assert [n.nid for n in remaining] == [2]
    assert judge.score == 20
    assert judge.combo == 2


def test_notes_outside_band_or_unpressed_are_untouched():
    judge = Judge(GameConfig())
    keys = LaneKeys()
    keys.set(Lane.F, True)

    notes = [note(0, Lane.F, 545), note(1, Lane.F, 605), note(2, Lane.D, 560)]
    remaining, hit = judge.check_hits(notes, keys)

    assert hit == []
    assert remaining == notes
    assert notes[0].y == 545
    assert judge.score == 0


def test_miss_breaks_combo_but_keeps_max():
    judge = Judge(GameConfig())
    judge.bump()
    judge.bump()
    judge.mark_miss()
    assert judge.misses == 1
    assert judge.combo == 0
    assert judge.max_combo == 2
    judge.mark_miss(0)
    assert judge.misses == 1


def test_custom_reward():
    judge = Judge(GameConfig(hit_reward=25))
    keys = LaneKeys()
    keys.set(Lane.A, True)
    judge.check_hits([note(0, Lane.A, 580)], keys)
    assert judge.score == 25
