"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from tokentree.lexer import tokenize
from tokentree.tokens import Token
from tokentree.tree import Adjacency, Delimiter, Leaf, TokenTree, Tree


@pytest.fixture
def lex():
    """Return a helper that lexes source and returns the top-level children."""

    def _lex(source: str) -> tuple[TokenTree, ...]:
        return tokenize(source).children

    return _lex


def tokens_of(nodes: tuple[TokenTree, ...]) -> list[Token]:
    """Return the tokens of *nodes*, which must all be leaves."""
    assert all(isinstance(n, Leaf) for n in nodes), f"Expected only leaves, got {nodes}"
    return [n.token for n in nodes]


def adjacency_of(nodes: tuple[TokenTree, ...]) -> list[Adjacency | None]:
    """Return the tags of the bare tokens in *nodes*, skipping untagged leaves."""
    return [n.adjacency for n in nodes if isinstance(n, Leaf) and n.adjacency is not None]


def assert_tree(node: TokenTree, delimiter: Delimiter, num_children: int | None = None) -> Tree:
    """Assert that node is a Tree with the given delimiter and return it."""
    assert isinstance(node, Tree), f"Expected Tree, got {type(node).__name__}"
    assert node.delimiter == delimiter, f"Expected {delimiter}, got {node.delimiter}"
    if num_children is not None:
        assert len(node.children) == num_children, (
            f"Expected {num_children} children, got {len(node.children)}"
        )
    return node


def assert_spans_nested(tree: Tree, source: str) -> None:
    """Check that every child span is ordered, disjoint and inside its parent."""
    assert 0 <= tree.span.start <= tree.span.end <= len(source)
    stack = [tree]
    while stack:
        parent = stack.pop()
        prev_end = parent.span.start
        for child in parent.children:
            assert child.span.start >= prev_end, f"{child} overlaps its predecessor"
            assert child.span.end <= parent.span.end, f"{child} escapes {parent.span}"
            prev_end = child.span.end
            if isinstance(child, Tree):
                stack.append(child)
