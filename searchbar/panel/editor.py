"""In-memory host editor used by the CLI and tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from loguru import logger

from searchbar.panel.events import MatchReport
from searchbar.search.engine import MatchSpan


@dataclass(frozen=True)
class EditSnapshot:
    """Undo record: buffer text and caret before an edit."""

    text: str
    caret: int


class BufferEditor:
    """Plain-text host editor with a caret, a single selection and undo.

    The caret sits at the start of the selection, so navigating forward
    from a selected hit finds the next one and backward finds the previous.
    """

    def __init__(
        self,
        text: str = "",
        *,
        editable: bool = True,
        on_report: Callable[[MatchReport], None] | None = None,
    ) -> None:
        self._text = text
        self._caret = 0
        self._selection: MatchSpan | None = None
        self._editable = editable
        self._undo: list[EditSnapshot] = []
        self._on_report = on_report
        self.focused = False
        self.last_report: MatchReport | None = None

    # ------------------------------------------------------------------ #
    # Host contract                                                        #
    # ------------------------------------------------------------------ #

    def text(self) -> str:
        return self._text

    def current_caret_offset(self) -> int:
        return self._caret

    def select_span(self, span: MatchSpan) -> None:
        self._selection = span
        self._caret = span.start

    def select_none(self) -> None:
        self._selection = None

    def replace_spans(self, spans: Sequence[MatchSpan], text: str) -> None:
        if not spans:
            return
        self._undo.append(EditSnapshot(self._text, self._caret))
        buffer = self._text
        for span in sorted(spans, key=lambda s: s.start, reverse=True):
            buffer = buffer[: span.start] + text + buffer[span.end :]
        self._text = buffer
        self._selection = None
        self._caret = min(self._caret, len(buffer))
        logger.debug(f"[editor] replaced {len(spans)} span(s), len={len(buffer)}")

    def is_editable(self) -> bool:
        return self._editable

    def focus_self(self) -> None:
        self.focused = True

    def notify_match_result(self, report: MatchReport) -> None:
        self.last_report = report
        if self._on_report is not None:
            self._on_report(report)

    # ------------------------------------------------------------------ #
    # Editor helpers                                                       #
    # ------------------------------------------------------------------ #

    @property
    def selection(self) -> MatchSpan | None:
        return self._selection

    @property
    def selected_text(self) -> str:
        if self._selection is None:
            return ""
        return self._text[self._selection.start : self._selection.end]

    def move_caret(self, offset: int) -> None:
        self._caret = max(0, min(offset, len(self._text)))
        self._selection = None

    def set_text(self, text: str) -> None:
        self._undo.append(EditSnapshot(self._text, self._caret))
        self._text = text
        self.move_caret(self._caret)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def undo(self) -> bool:
        """Restore the text before the last edit. Returns False if nothing to undo."""
        if not self._undo:
            return False
        snapshot = self._undo.pop()
        self._text = snapshot.text
        self._caret = snapshot.caret
        self._selection = None
        return True
