"""Search mode toggles (match case, whole word, regex, multi-line)."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Mode(Enum):
    """One search toggle. Member order is the serialization order."""

    CASE_SENSITIVE = "case_sensitive"
    WHOLE_WORD = "whole_word"
    REGEX = "regex"
    MULTI_LINE = "multi_line"


MODE_ORDER: tuple[Mode, ...] = tuple(Mode)
MODE_COUNT = len(MODE_ORDER)


@dataclass(frozen=True)
class ModeSet:
    """The four search toggles.

    ``whole_word`` only applies while ``regex`` is off and ``multi_line`` only
    while it is on. A disabled toggle keeps its stored value so that it comes
    back when ``regex`` is flipped again; use the ``effective_*`` properties
    when matching.
    """

    case_sensitive: bool = False
    whole_word: bool = False
    regex: bool = False
    multi_line: bool = False

    @property
    def effective_whole_word(self) -> bool:
        return self.whole_word and not self.regex

    @property
    def effective_multi_line(self) -> bool:
        return self.multi_line and self.regex

    def get(self, mode: Mode) -> bool:
        return getattr(self, mode.value)

    def with_mode(self, mode: Mode, value: bool) -> ModeSet:
        return replace(self, **{mode.value: value})

    def toggled(self, mode: Mode) -> ModeSet:
        return self.with_mode(mode, not self.get(mode))

    def is_enabled(self, mode: Mode) -> bool:
        """Return whether the toggle for *mode* is usable under the current regex state."""
        if mode is Mode.WHOLE_WORD:
            return not self.regex
        if mode is Mode.MULTI_LINE:
            return self.regex
        return True

    def flags(self) -> tuple[bool, ...]:
        return tuple(self.get(mode) for mode in MODE_ORDER)

    @classmethod
    def from_flags(cls, flags: tuple[bool, ...] | list[bool]) -> ModeSet:
        if len(flags) != MODE_COUNT:
            raise ValueError(f"expected {MODE_COUNT} mode flags, got {len(flags)}")
        return cls(**{mode.value: bool(flag) for mode, flag in zip(MODE_ORDER, flags)})
