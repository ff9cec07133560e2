"""Indentation-aware token tree lexer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tokentree.config import LexerOptions
    from tokentree.tree import Tree

__version__ = "0.1.0"


def lex(
    source: str | bytes,
    filename: str | None = None,
    options: LexerOptions | None = None,
) -> Tree:
    """Lex source text into its top-level Block token tree."""
    from tokentree.lexer import tokenize

    return tokenize(source, filename, options)
