"""Search panel state, history commits and navigation."""

from __future__ import annotations

import re
from typing import Protocol

from loguru import logger

from searchbar.panel.events import (
    TOPIC_REPORT,
    TOPIC_VISIBILITY,
    EventHub,
    KeyIntent,
    MatchReport,
    VisibilityChange,
)
from searchbar.panel.host import HostEditor
from searchbar.search.codec import decode
from searchbar.search.engine import EMPTY_RESULT, Direction, MatchResult, advance, recompute
from searchbar.search.history import ModeHistory
from searchbar.search.modes import Mode, ModeSet
from searchbar.session.options_store import MemoryOptionsStore, SearchOptions, push_term

# backslash-n not preceded by another backslash
_TYPED_NEWLINE_RE = re.compile(r"(?<!\\)\\n")

DEFAULT_HISTORY_DEPTH = 10


class OptionsBackend(Protocol):
    def load(self) -> SearchOptions:
        ...

    def save(self, options: SearchOptions) -> None:
        ...


class SearchController:
    """Owns the live query and modes of a search panel attached to one editor.

    Every query or mode change recomputes the full match list against the
    bound buffer and reports the hit count to the host. Mode history is
    committed to the options store at Enter, close, replace, mode toggles,
    drops and preset activation.
    """

    def __init__(
        self,
        editor: HostEditor | None = None,
        *,
        store: OptionsBackend | None = None,
        history_depth: int = DEFAULT_HISTORY_DEPTH,
        hub: EventHub | None = None,
    ) -> None:
        self._store: OptionsBackend = store or MemoryOptionsStore()
        self._depth = history_depth
        self._hub = hub or EventHub()
        self._editor: HostEditor | None = None
        self._buffer = ""
        self._result: MatchResult = EMPTY_RESULT
        self._visible = False
        self._trigger_selected = False
        self._field_focused = False
        self._modes = ModeSet()

        self._options = self._store.load()
        self._query = self._options.searched[0] if self._options.searched else ""
        self._replacement = self._options.replaced[0] if self._options.replaced else ""
        self._history = ModeHistory.deserialize(self._options.search_modes, self._options.searched)
        self.set_modes(self._history.lookup(self._query))

        if editor is not None:
            self.bind_editor(editor, search=False)

    # ------------------------------------------------------------------ #
    # State                                                                #
    # ------------------------------------------------------------------ #

    @property
    def query(self) -> str:
        return self._query

    @property
    def modes(self) -> ModeSet:
        return self._modes

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def trigger_selected(self) -> bool:
        """Selected state of the external control that opens the panel."""
        return self._trigger_selected

    @property
    def field_focused(self) -> bool:
        return self._field_focused

    @property
    def result(self) -> MatchResult:
        return self._result

    @property
    def history(self) -> ModeHistory:
        return self._history

    @property
    def options(self) -> SearchOptions:
        return self._options

    @property
    def hub(self) -> EventHub:
        return self._hub

    @property
    def replacement(self) -> str:
        return self._replacement

    @replacement.setter
    def replacement(self, text: str) -> None:
        self._replacement = text

    # ------------------------------------------------------------------ #
    # Binding                                                              #
    # ------------------------------------------------------------------ #

    def bind_editor(self, editor: HostEditor, search: bool = True) -> None:
        """Attach the panel to *editor*; the last result is dropped, history is kept."""
        self._editor = editor
        self._buffer = editor.text()
        self._result = EMPTY_RESULT
        logger.debug(f"[panel] bound editor, buffer_len={len(self._buffer)}")
        if search:
            self._search(jump=False)
        else:
            self._report()

    def bind_buffer(self, text: str) -> None:
        """Replace the scanned text after the host changed its buffer."""
        self._buffer = text
        self._search(jump=False)

    # ------------------------------------------------------------------ #
    # User input                                                           #
    # ------------------------------------------------------------------ #

    def on_query_edited(self, text: str) -> None:
        if text == self._query:
            return
        if self._modes.regex and _TYPED_NEWLINE_RE.search(text):
            self._modes = self._modes.with_mode(Mode.MULTI_LINE, True)
        self._query = text
        self._search(jump=True)

    def on_mode_toggled(self, mode: Mode) -> None:
        self._modes = self._modes.toggled(mode)
        logger.debug(f"[panel] toggled {mode.value} -> {self._modes.get(mode)}")
        self.commit_history()
        self._search(jump=False)

    def set_modes(self, modes: ModeSet | None) -> None:
        """Apply *modes* as the live toggles (ignored if None)."""
        if modes is not None:
            self._modes = modes

    def on_history_recall(self, direction: Direction) -> None:
        """Restore the toggles remembered for the query the field now shows."""
        modes = self._history.lookup(self._query)
        logger.debug(f"[panel] history recall {direction.name}: {self._query!r} -> {modes}")
        self.set_modes(modes)

    def on_drop(self, text: str) -> None:
        self._set_query(text)
        self.commit_history()
        self._search(jump=True)

    def on_key_intent(self, intent: KeyIntent) -> None:
        if intent in (KeyIntent.FIND_NEXT, KeyIntent.FIND_PREVIOUS):
            if self._editor is not None:
                self._editor.select_none()
            self.deactivate(False)
        elif intent is KeyIntent.ESCAPE:
            self.deactivate(not self._query)
        elif intent is KeyIntent.CLOSE:
            self.deactivate(True)
        elif intent is KeyIntent.ENTER:
            self.jump(Direction.FORWARD, commit=True)
        elif intent is KeyIntent.SHIFT_ENTER:
            self.jump(Direction.BACKWARD, commit=True)
        elif intent is KeyIntent.HISTORY_PREVIOUS:
            self.on_history_recall(Direction.BACKWARD)
        elif intent is KeyIntent.HISTORY_NEXT:
            self.on_history_recall(Direction.FORWARD)

    # ------------------------------------------------------------------ #
    # Panel visibility                                                     #
    # ------------------------------------------------------------------ #

    def toggle(self) -> None:
        """Action of the external search control."""
        if self._visible:
            self.deactivate(True)
        else:
            self.activate("", True)

    def activate(self, preset: str = "", take_focus: bool = True) -> None:
        """Show the panel, optionally with a new search string.

        A search runs if *preset* differs from the current query, or if the
        panel was hidden.
        """
        invisible = not self._visible
        if invisible:
            self._set_visible(True)
        if take_focus:
            self._field_focused = True

        if preset and preset != self._query:
            self._modes = self._modes.with_mode(Mode.REGEX, False)
            self._set_query(preset)
            self.commit_history()
            invisible = True
        if invisible:
            self._search(jump=True)

    def deactivate(self, close: bool) -> bool:
        """Commit history and hand focus back; hide the panel if *close*.

        Returns True if the panel was closed.
        """
        self.commit_history()
        self._field_focused = False
        if self._editor is not None:
            self._editor.focus_self()
        if not close or not self._visible:
            return False
        self._set_visible(False)
        self._search(jump=True)
        return True

    # ------------------------------------------------------------------ #
    # Navigation and replacement                                           #
    # ------------------------------------------------------------------ #

    def jump(self, direction: Direction, commit: bool = False) -> MatchResult:
        """Move to the next/previous/current hit relative to the caret."""
        if commit:
            self.commit_history()
        if self._editor is not None:
            self._result = advance(self._result, direction, self._editor.current_caret_offset())
            span = self._result.active_span
            if span is not None:
                self._editor.select_span(span)
            else:
                self._editor.select_none()
        self._report()
        return self._result

    def replace(self, replacement: str | None = None) -> int:
        """Replace all current hits and close the panel.

        The replacement is escape-decoded in regex mode only. Returns the
        number of replaced spans.
        """
        text = self._replacement if replacement is None else replacement
        self._replacement = text
        self._options.replaced = push_term(self._options.replaced, text, self._depth)
        self.commit_history()

        value = decode(text) if self._modes.regex else text
        spans = self._result.spans
        replaced = 0
        if self._editor is None or not self._editor.is_editable():
            logger.debug("[panel] replace skipped: editor is read-only")
        elif not spans:
            logger.debug("[panel] replace skipped: no hits")
        else:
            self._editor.replace_spans(spans, value)
            self._buffer = self._editor.text()
            replaced = len(spans)
            logger.debug(f"[panel] replaced {replaced} hit(s)")

        self.deactivate(True)
        return replaced

    # ------------------------------------------------------------------ #
    # History                                                              #
    # ------------------------------------------------------------------ #

    def commit_history(self) -> None:
        """Record the live query and modes and persist the options."""
        options = self._options
        options.searched = push_term(options.searched, self._query, self._depth)
        self._history, options.search_modes = self._history.rebuild_and_store(
            options.searched, self._query, self._modes
        )
        self._store.save(options)

    # ------------------------------------------------------------------ #
    # Private helpers                                                      #
    # ------------------------------------------------------------------ #

    def _set_query(self, text: str) -> None:
        self._query = text

    def _set_visible(self, visible: bool) -> None:
        self._visible = visible
        self._trigger_selected = visible
        self._hub.publish(TOPIC_VISIBILITY, VisibilityChange(visible))

    def _effective_query(self) -> str:
        return self._query if self._visible else ""

    def _search(self, jump: bool) -> None:
        self._result = recompute(self._buffer, self._effective_query(), self._modes)
        if jump:
            self.jump(Direction.CURRENT)
        else:
            self._report()

    def _report(self) -> None:
        report = MatchReport(hit_count=self._result.hit_count, is_empty=not self._effective_query())
        if self._editor is not None:
            self._editor.notify_match_result(report)
        self._hub.publish(TOPIC_REPORT, report)
