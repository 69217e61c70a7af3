"""Search panel event contracts and lightweight signal bus."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

EventHandler = Callable[[object], None]

TOPIC_REPORT = "search.report"
TOPIC_VISIBILITY = "search.visibility"


class KeyIntent(Enum):
    """Key reactions of the search field, independent of any toolkit's key events."""

    FIND_NEXT = auto()
    FIND_PREVIOUS = auto()
    ESCAPE = auto()
    CLOSE = auto()
    ENTER = auto()
    SHIFT_ENTER = auto()
    HISTORY_PREVIOUS = auto()
    HISTORY_NEXT = auto()


@dataclass(frozen=True)
class MatchReport:
    """Summary handed to the host after each search."""

    hit_count: int
    is_empty: bool

    @property
    def replace_enabled(self) -> bool:
        return self.hit_count > 0 and not self.is_empty

    @property
    def status(self) -> str | None:
        """Status line text, or None for an empty query."""
        if self.is_empty:
            return None
        noun = "string" if self.hit_count == 1 else "strings"
        return f"{self.hit_count} {noun} found"


@dataclass(frozen=True)
class VisibilityChange:
    """Panel shown or hidden."""

    visible: bool


class EventHub:
    """Simple in-process pub/sub for panel listeners."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        self._handlers[event_name].append(handler)

    def publish(self, event_name: str, payload: object) -> None:
        for handler in list(self._handlers.get(event_name, [])):
            handler(payload)
