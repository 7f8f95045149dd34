"""Game engine module.

Note lifecycle, hit judgement, hit effects and autoplay.
"""

from .judge import Judge, LaneKeys
from .note_manager import NoteManager

__all__ = ["Judge", "LaneKeys", "NoteManager"]
