"""Persisted search session state."""

from searchbar.session.options_store import MemoryOptionsStore, OptionsStore, SearchOptions, push_term

__all__ = ["MemoryOptionsStore", "OptionsStore", "SearchOptions", "push_term"]
