"""Persistence helpers for search/replace history and the mode history string."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, Field, ValidationError


class SearchOptions(BaseModel):
    """Stored search state.

    ``search_modes`` is aligned positionally with ``searched``
    (see :mod:`searchbar.search.history`).
    """

    searched: list[str] = Field(default_factory=list)
    replaced: list[str] = Field(default_factory=list)
    search_modes: str = ""


def default_options_path() -> Path:
    """Return default path for persisted search options."""
    return Path.home() / ".searchbar" / "options.json"


def push_term(terms: list[str], text: str, depth: int) -> list[str]:
    """Return *terms* with *text* moved to the front, capped at *depth* entries."""
    if not text:
        return list(terms)
    result = [text] + [t for t in terms if t != text]
    return result[:depth]


class OptionsStore:
    """Reads and writes :class:`SearchOptions` as a JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_options_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> SearchOptions:
        """Load persisted options; a missing or damaged file gives defaults."""
        if not self._path.exists():
            return SearchOptions()

        try:
            return SearchOptions.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            logger.warning(f"[options] failed to read {self._path}: {exc}")
            return SearchOptions()

    def save(self, options: SearchOptions) -> None:
        """Persist options to disk. Write failures are logged, not raised."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(options.model_dump(), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            logger.warning(f"[options] failed to write {self._path}: {exc}")


class MemoryOptionsStore:
    """In-process options store for hosts that persist elsewhere."""

    def __init__(self, options: SearchOptions | None = None) -> None:
        self._options = options or SearchOptions()

    def load(self) -> SearchOptions:
        return self._options.model_copy(deep=True)

    def save(self, options: SearchOptions) -> None:
        self._options = options.model_copy(deep=True)
