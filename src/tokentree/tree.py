"""Token tree node types."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from tokentree.tokens import Span, Token


class Delimiter(Enum):
    BLOCK = auto()  # indentation-derived
    PARENTHESIS = auto()  # ( ... )
    CURLY = auto()  # ${ ... } inside a string
    INTERPOLATION = auto()  # " ... " wrapping a whole string


class Adjacency(Enum):
    """Whether another bare token follows on the same line."""

    SEQUENTIAL = auto()
    TERMINAL = auto()


@dataclass(frozen=True, slots=True)
class Leaf:
    """A single token with its span.

    ``adjacency`` is set for identifiers and integers only.
    """

    token: Token
    span: Span
    adjacency: Adjacency | None = None


@dataclass(frozen=True, slots=True)
class Tree:
    """Delimited group of child token trees, ordered by position."""

    delimiter: Delimiter
    children: tuple[TokenTree, ...]
    span: Span


TokenTree = Leaf | Tree


def iter_leaves(node: TokenTree) -> Iterator[Leaf]:
    """Yield every leaf under *node* in source order."""
    stack: list[TokenTree] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Leaf):
            yield current
        else:
            stack.extend(reversed(current.children))
