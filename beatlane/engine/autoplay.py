from __future__ import annotations

from typing import Iterable, Set

from ..config.schema import GameConfig
from ..types import Lane, Note


def autoplay_lanes(notes: Iterable[Note], config: GameConfig) -> Set[Lane]:
    """Lanes that have a note inside the hit zone (or one fall step above it).

    Looking one step ahead lets a held key meet the note on the tick it
    enters the band.
    """
    low = config.hit_zone_low - config.fall_speed
    high = config.hit_zone_high
    return {n.lane for n in notes if low <= n.y <= high}


def apply_autoplay(session, config: GameConfig) -> None:
    lanes = autoplay_lanes(session.notes, config)
    for ln in Lane:
        session.set_key_state(ln, ln in lanes)
