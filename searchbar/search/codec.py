"""Escape decoding for replacement text."""

from __future__ import annotations

_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\"}


def decode(text: str) -> str:
    """Replace ``\\n``, ``\\t`` and ``\\\\`` with newline, tab and backslash.

    Any other backslash pair is kept as written, and so is a lone trailing
    backslash.
    """
    out: list[str] = []
    escaped = False
    for ch in text:
        if escaped:
            out.append(_ESCAPES.get(ch, "\\" + ch))
            escaped = False
        elif ch == "\\":
            escaped = True
        else:
            out.append(ch)
    if escaped:
        out.append("\\")
    return "".join(out)
