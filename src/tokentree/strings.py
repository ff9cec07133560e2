"""Escape sequences for string literals."""

from __future__ import annotations

# Character after the backslash -> decoded character
ESCAPES: dict[str, str] = {
    "\\": "\\",
    "$": "$",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
}


def decode_escape(ch: str) -> str | None:
    """Return the character that ``\\`` + *ch* stands for, or None if invalid."""
    return ESCAPES.get(ch)


def ends_literal(source: str, pos: int) -> bool:
    """Return True if a literal run stops at *pos*.

    A run stops at the closing quote, at ``${``, and at end of input. A ``$``
    not followed by ``{`` is ordinary text.
    """
    if pos >= len(source):
        return True
    ch = source[pos]
    if ch == '"':
        return True
    return ch == "$" and source.startswith("{", pos + 1)
