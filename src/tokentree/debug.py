"""Token tree dump for debugging."""

from __future__ import annotations

import sys
from typing import TextIO

from tokentree.tokens import Comment, Identifier, Integer, Operator, StringLiteral, Token
from tokentree.tree import Leaf, TokenTree, Tree


def dump_tree(node: TokenTree, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable token tree to *file*."""
    file.write(format_tree(node))


def format_tree(node: TokenTree) -> str:
    """Return the dump of *node* as a string."""
    return "".join(f"{_indent(depth)}{line}\n" for depth, line in _walk(node))


def _indent(depth: int) -> str:
    return "  " * depth


def _walk(node: TokenTree) -> list[tuple[int, str]]:
    out: list[tuple[int, str]] = []
    stack: list[tuple[int, TokenTree]] = [(0, node)]
    while stack:
        depth, current = stack.pop()
        span = f"@{current.span.start}..{current.span.end}"
        if isinstance(current, Tree):
            out.append((depth, f"{current.delimiter.name.title()} {span}"))
            stack.extend((depth + 1, child) for child in reversed(current.children))
        else:
            out.append((depth, f"{_describe(current)} {span}"))
    return out


def _describe(leaf: Leaf) -> str:
    text = _describe_token(leaf.token)
    if leaf.adjacency is not None:
        text += f" [{leaf.adjacency.name.lower()}]"
    return text


def _describe_token(token: Token) -> str:
    if isinstance(token, Identifier):
        return f"Identifier({token.text!r})"
    if isinstance(token, StringLiteral):
        return f"StringLiteral({token.value!r})"
    if isinstance(token, Integer):
        suffix = token.kind.value if token.kind is not None else ""
        return f"Integer({token.value}{suffix})"
    if isinstance(token, Operator):
        return f"Operator({token.kind.name})"
    if isinstance(token, Comment):
        return "Comment"
    raise TypeError(f"unknown token {token!r}")
