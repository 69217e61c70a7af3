"""Per-query memory of search modes and its flat persisted form.

The serialized string holds one block per searched term, in the same order
as the persisted searched-terms list::

    "!.!.,....,!..."    # three terms, four flags each

Each block lists the flags in :data:`MODE_ORDER` with ``!`` for on and ``.``
for off.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from searchbar.search.modes import MODE_COUNT, ModeSet

FLAG_ON = "!"
FLAG_OFF = "."
BLOCK_SEPARATOR = ","


def encode_modes(modes: ModeSet) -> str:
    return "".join(FLAG_ON if flag else FLAG_OFF for flag in modes.flags())


def decode_block(block: str) -> ModeSet:
    """Decode one block; anything but exactly four chars gives the all-off set."""
    if len(block) != MODE_COUNT:
        return ModeSet()
    return ModeSet.from_flags([ch == FLAG_ON for ch in block])


class ModeHistory:
    """Mapping from previously searched strings to their mode toggles."""

    def __init__(self, entries: dict[str, ModeSet] | None = None) -> None:
        self._entries: dict[str, ModeSet] = dict(entries or {})

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, query: object) -> bool:
        return query in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModeHistory):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"ModeHistory({self._entries!r})"

    def lookup(self, query: str) -> ModeSet | None:
        return self._entries.get(query)

    def serialize(self, ordered_queries: Sequence[str], current: ModeSet) -> str:
        """Encode the modes of *ordered_queries*.

        Queries without an entry get *current*, which is also stored as
        their entry.
        """
        blocks: list[str] = []
        for query in ordered_queries:
            modes = self._entries.get(query)
            if modes is None:
                modes = current
                self._entries[query] = modes
            blocks.append(encode_modes(modes))
        return BLOCK_SEPARATOR.join(blocks)

    @classmethod
    def deserialize(cls, serialized: str, ordered_queries: Sequence[str]) -> ModeHistory:
        blocks = serialized.split(BLOCK_SEPARATOR)
        entries: dict[str, ModeSet] = {}
        for query, block in zip(ordered_queries, blocks):
            if len(block) != MODE_COUNT:
                logger.debug(f"[history] invalid mode block {block!r} for {query!r}, using defaults")
            entries[query] = decode_block(block)
        return cls(entries)

    def rebuild_and_store(
        self,
        ordered_queries: Sequence[str],
        current_query: str,
        current_modes: ModeSet,
    ) -> tuple[ModeHistory, str]:
        """Rebuild the history for *ordered_queries* and serialize it.

        The entry for *current_query* and entries without a stored value
        take *current_modes*; all others keep what they had.
        """
        entries: dict[str, ModeSet] = {}
        for query in ordered_queries:
            modes = self._entries.get(query)
            if modes is None or query == current_query:
                modes = current_modes
            entries[query] = modes
        rebuilt = ModeHistory(entries)
        serialized = BLOCK_SEPARATOR.join(encode_modes(entries[q]) for q in ordered_queries)
        return rebuilt, serialized
