"""Interface the search panel requires from the editor it is attached to."""

from __future__ import annotations

from typing import Protocol, Sequence

from searchbar.panel.events import MatchReport
from searchbar.search.engine import MatchSpan


class HostEditor(Protocol):
    """Protocol defining the editor operations used by the search panel."""

    def text(self) -> str:
        """Return the full buffer text."""
        ...

    def current_caret_offset(self) -> int:
        ...

    def select_span(self, span: MatchSpan) -> None:
        ...

    def select_none(self) -> None:
        ...

    def replace_spans(self, spans: Sequence[MatchSpan], text: str) -> None:
        """Replace every span with *text* as a single undoable edit."""
        ...

    def is_editable(self) -> bool:
        ...

    def focus_self(self) -> None:
        ...

    def notify_match_result(self, report: MatchReport) -> None:
        """Receive hit count and empty-query flag after each search."""
        ...
