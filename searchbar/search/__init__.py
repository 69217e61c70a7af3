"""Search core: modes, mode history, matching and replacement decoding."""

from searchbar.search.codec import decode
from searchbar.search.engine import Direction, MatchResult, MatchSpan, advance, recompute
from searchbar.search.history import ModeHistory
from searchbar.search.modes import Mode, ModeSet

__all__ = [
    "Direction",
    "MatchResult",
    "MatchSpan",
    "Mode",
    "ModeHistory",
    "ModeSet",
    "advance",
    "decode",
    "recompute",
]
