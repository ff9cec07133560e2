"""Indentation grouping of logical lines into Block trees."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tokentree.errors import DEFAULT_FILENAME, InconsistentIndentation
from tokentree.tokens import Span, locate
from tokentree.tree import Delimiter, TokenTree, Tree

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Level:
    indent: str
    start: int
    end: int
    children: list[TokenTree] = field(default_factory=list)


class BlockBuilder:
    """Collect lexed lines and nest them by leading whitespace.

    Indentation is compared as whitespace text, not as a column count: a line
    opens a new level when its indentation extends the current one, and a
    dedent must land exactly on an indentation that is still open.
    """

    def __init__(self, source: str, filename: str = DEFAULT_FILENAME) -> None:
        self._source = source
        self._filename = filename
        self._levels = [_Level("", 0, 0)]

    @property
    def depth(self) -> int:
        """Number of open nested blocks."""
        return len(self._levels) - 1

    def add_line(self, indent: str, items: list[TokenTree], span: Span) -> None:
        """Place one logical line; *span* covers its content without indentation."""
        top = self._levels[-1]
        if indent != top.indent:
            if indent.startswith(top.indent):
                self._levels.append(_Level(indent, span.start, span.start))
                logger.debug("block opened at offset %d (depth %d)", span.start, self.depth)
            else:
                self._dedent(indent, span.start)

        level = self._levels[-1]
        level.children.extend(items)
        level.end = span.end

    def finish(self) -> Tree:
        """Close every open level and return the top-level Block."""
        while len(self._levels) > 1:
            self._close()
        root = self._levels[0]
        return Tree(Delimiter.BLOCK, tuple(root.children), Span(0, len(self._source)))

    def _dedent(self, indent: str, offset: int) -> None:
        while len(self._levels) > 1 and len(self._levels[-1].indent) > len(indent):
            self._close()
        if self._levels[-1].indent != indent:
            raise InconsistentIndentation(
                locate(self._source, offset), self._source, filename=self._filename
            )

    def _close(self) -> None:
        level = self._levels.pop()
        parent = self._levels[-1]
        parent.children.append(
            Tree(Delimiter.BLOCK, tuple(level.children), Span(level.start, level.end))
        )
        parent.end = level.end
        logger.debug("block closed at offset %d (depth %d)", level.end, self.depth)
