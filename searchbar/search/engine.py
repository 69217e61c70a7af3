"""Match computation and directional navigation over a text buffer."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Iterator

from loguru import logger

from searchbar.search.modes import ModeSet

_LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")


class Direction(Enum):
    """Navigation direction."""

    CURRENT = auto()
    FORWARD = auto()
    BACKWARD = auto()


@dataclass(frozen=True)
class MatchSpan:
    """Half-open ``[start, end)`` offset range in the buffer."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class MatchResult:
    """Ordered, non-overlapping spans plus the currently active one."""

    spans: tuple[MatchSpan, ...] = field(default_factory=tuple)
    active_index: int | None = None

    @property
    def hit_count(self) -> int:
        return len(self.spans)

    @property
    def active_span(self) -> MatchSpan | None:
        if self.active_index is None:
            return None
        return self.spans[self.active_index]


EMPTY_RESULT = MatchResult()


def fold_case(text: str) -> str:
    """Lowercase *text* char by char, keeping its length so offsets stay valid."""
    chars = []
    for ch in text:
        low = ch.lower()
        chars.append(low if len(low) == 1 else ch)
    return "".join(chars)


def is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _at_word_boundary(buffer: str, start: int, end: int) -> bool:
    if start > 0 and is_word_char(buffer[start - 1]):
        return False
    if end < len(buffer) and is_word_char(buffer[end]):
        return False
    return True


def _literal_spans(buffer: str, query: str, modes: ModeSet) -> Iterator[MatchSpan]:
    haystack = buffer if modes.case_sensitive else fold_case(buffer)
    needle = query if modes.case_sensitive else fold_case(query)
    whole_word = modes.effective_whole_word
    size = len(needle)
    pos = 0
    while True:
        idx = haystack.find(needle, pos)
        if idx == -1:
            return
        if whole_word and not _at_word_boundary(buffer, idx, idx + size):
            pos = idx + 1
            continue
        yield MatchSpan(idx, idx + size)
        pos = idx + size


def _line_offsets(buffer: str) -> Iterator[tuple[int, str]]:
    start = 0
    for m in _LINE_BREAK_RE.finditer(buffer):
        yield start, buffer[start : m.start()]
        start = m.end()
    yield start, buffer[start:]


def _regex_spans(buffer: str, pattern: re.Pattern[str], multi_line: bool) -> Iterator[MatchSpan]:
    if multi_line:
        chunks: Iterator[tuple[int, str]] = iter([(0, buffer)])
    else:
        chunks = _line_offsets(buffer)
    for offset, chunk in chunks:
        for m in pattern.finditer(chunk):
            if m.start() == m.end():
                continue
            yield MatchSpan(offset + m.start(), offset + m.end())


def compile_pattern(query: str, modes: ModeSet) -> re.Pattern[str] | None:
    """Compile *query* for regex mode, or return None if it is malformed."""
    flags = 0 if modes.case_sensitive else re.IGNORECASE
    if modes.effective_multi_line:
        flags |= re.MULTILINE | re.DOTALL
    try:
        return re.compile(query, flags)
    except (re.error, OverflowError, RecursionError) as exc:
        logger.debug(f"[search] invalid pattern {query!r}: {exc}")
        return None


def recompute(buffer: str, query: str, modes: ModeSet) -> MatchResult:
    """Compute all spans of *query* in *buffer* under *modes*.

    An empty query, or a pattern that does not compile, gives an empty result.
    """
    if not query:
        return EMPTY_RESULT

    if modes.regex:
        pattern = compile_pattern(query, modes)
        if pattern is None:
            return EMPTY_RESULT
        spans = tuple(_regex_spans(buffer, pattern, modes.effective_multi_line))
    else:
        spans = tuple(_literal_spans(buffer, query, modes))

    logger.debug(f"[search] query={query!r} hits={len(spans)}")
    return MatchResult(spans=spans, active_index=None)


def advance(result: MatchResult, direction: Direction, from_offset: int) -> MatchResult:
    """Return *result* with its active index moved in *direction* from *from_offset*."""
    spans = result.spans
    if not spans:
        return replace(result, active_index=None)

    if direction is Direction.CURRENT:
        current = result.active_index
        if current is not None and 0 <= current < len(spans):
            return result
        index = next((i for i, s in enumerate(spans) if s.start >= from_offset), len(spans) - 1)
    elif direction is Direction.FORWARD:
        index = next((i for i, s in enumerate(spans) if s.start > from_offset), 0)
    else:
        index = next(
            (i for i in range(len(spans) - 1, -1, -1) if spans[i].start < from_offset),
            len(spans) - 1,
        )
    return replace(result, active_index=index)
