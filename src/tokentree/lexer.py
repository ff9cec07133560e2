"""tokentree lexer — converts source text into a tree of token groups."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from tokentree.config import LexerOptions
from tokentree.errors import (
    InvalidEncoding,
    InvalidEscape,
    LexError,
    NestingTooDeep,
    NumericOverflow,
    UnexpectedCharacter,
    UnterminatedComment,
    UnterminatedGroup,
    UnterminatedString,
)
from tokentree.layout import BlockBuilder
from tokentree.strings import decode_escape, ends_literal
from tokentree.tokens import (
    INTEGER_SUFFIXES,
    OPERATORS,
    U64_MAX,
    Comment,
    Identifier,
    Integer,
    Operator,
    Position,
    Span,
    StringLiteral,
    Token,
    is_bare_start,
    is_digit,
    is_ident_char,
    is_ident_start,
    is_inline_ws,
    locate,
)
from tokentree.tree import Adjacency, Delimiter, Leaf, TokenTree, Tree

logger = logging.getLogger(__name__)

_TOKEN_START = frozenset({"identifier", "integer", "operator", "string", "'('", "comment"})

_EXPECTED: dict[Delimiter | None, frozenset[str]] = {
    None: _TOKEN_START | {"newline", "end of input"},
    Delimiter.PARENTHESIS: _TOKEN_START | {"')'"},
    Delimiter.CURLY: _TOKEN_START | {"'}'"},
}

_CLOSERS = {Delimiter.PARENTHESIS: ")", Delimiter.CURLY: "}"}

# Longest digit run (after leading zeros) that can still fit in 64 bits
_U64_DIGITS = len(str(U64_MAX))


@dataclass(slots=True)
class _Frame:
    """An open group; ``delimiter`` is None for the logical line itself."""

    delimiter: Delimiter | None
    start: int
    children: list[TokenTree] = field(default_factory=list)


class Lexer:
    """Tokenize source text into a top-level Block token tree.

    Lines are handed to a BlockBuilder for indentation grouping. Within a line,
    parentheses, strings and ``${...}`` splices are tracked on an explicit
    frame stack, so arbitrarily nested input never recurses natively.
    """

    def __init__(
        self,
        source: str | bytes,
        filename: str | None = None,
        options: LexerOptions | None = None,
    ) -> None:
        self._options = options or LexerOptions()
        self._filename = filename or self._options.filename
        if isinstance(source, bytes):
            source = _decode(source, self._filename)
        self._source = source
        self._pos = 0
        self._frames: list[_Frame] = []
        self._blocks = BlockBuilder(source, self._filename)

    def tokenize(self) -> Tree:
        """Lex the full source and return the top-level Block."""
        while self._pos < len(self._source):
            line_start = self._pos
            self._skip_inline_ws()
            indent = self._source[line_start : self._pos]

            ch = self._peek()
            if ch == "\n":
                # Whitespace-only line
                self._advance()
                continue
            if ch == "":
                break
            self._lex_line(indent)

        tree = self._blocks.finish()
        logger.debug("lexed %s: %d top-level items", self._filename, len(tree.children))
        return tree

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def _skip_inline_ws(self) -> None:
        while self._pos < len(self._source) and is_inline_ws(self._source[self._pos]):
            self._pos += 1

    def _skip_ws(self) -> None:
        while self._pos < len(self._source) and self._source[self._pos].isspace():
            self._pos += 1

    def _emit(self, token: Token, start: int, adjacency: Adjacency | None = None) -> None:
        leaf = Leaf(token, Span(start, self._pos), adjacency)
        self._frames[-1].children.append(leaf)

    def _at(self, offset: int) -> Position:
        return locate(self._source, offset)

    def _error(self, cls: type[LexError], offset: int, *args: Any, **kwargs: Any) -> LexError:
        return cls(*args, self._at(offset), self._source, filename=self._filename, **kwargs)

    # ------------------------------------------------------------------
    # Frame management
    # ------------------------------------------------------------------

    def _push(self, delimiter: Delimiter, start: int) -> None:
        # The line frame does not count towards the nesting limit
        if len(self._frames) > self._options.max_depth:
            raise self._error(NestingTooDeep, start, self._options.max_depth)
        self._frames.append(_Frame(delimiter, start))

    def _close_frame(self) -> None:
        frame = self._frames.pop()
        tree = Tree(frame.delimiter, tuple(frame.children), Span(frame.start, self._pos))
        self._frames[-1].children.append(tree)

    # ------------------------------------------------------------------
    # Logical lines
    # ------------------------------------------------------------------

    def _lex_line(self, indent: str) -> None:
        start = self._pos
        self._frames = [_Frame(None, start)]

        while True:
            frame = self._frames[-1]
            if frame.delimiter is None:
                self._skip_inline_ws()
                if self._peek() in ("", "\n"):
                    break
                self._lex_token_tree()
            elif frame.delimiter is Delimiter.INTERPOLATION:
                self._lex_string_part(frame)
            else:
                self._lex_group_part(frame)

        line = self._frames.pop()
        end = line.children[-1].span.end
        self._blocks.add_line(indent, line.children, Span(start, end))
        if self._peek() == "\n":
            self._advance()

    # ------------------------------------------------------------------
    # Token trees
    # ------------------------------------------------------------------

    def _lex_token_tree(self) -> None:
        ch = self._peek()
        start = self._pos

        if is_ident_start(ch):
            self._lex_identifier()
            return

        if is_digit(ch):
            self._lex_integer()
            return

        if ch in OPERATORS:
            self._advance()
            self._emit(Operator(OPERATORS[ch]), start)
            return

        if ch == '"':
            self._advance()
            self._push(Delimiter.INTERPOLATION, start)
            return

        if ch == "(":
            self._advance()
            self._push(Delimiter.PARENTHESIS, start)
            return

        if ch == "/" and self._peek(1) in ("/", "*"):
            self._lex_comment()
            return

        raise self._error(
            UnexpectedCharacter, start, ch, expected=_EXPECTED[self._frames[-1].delimiter]
        )

    def _lex_group_part(self, frame: _Frame) -> None:
        """Advance inside a parenthesis or splice; newlines are padding here."""
        self._skip_ws()
        ch = self._peek()

        if ch == _CLOSERS[frame.delimiter]:
            self._advance()
            self._close_frame()
            return

        if ch == "" or ch in ")}":
            raise self._error(UnterminatedGroup, frame.start, frame.delimiter)

        self._lex_token_tree()

    # ------------------------------------------------------------------
    # Bare tokens
    # ------------------------------------------------------------------

    def _adjacency(self) -> Adjacency:
        """Look past inline whitespace for another identifier or integer."""
        idx = self._pos
        while idx < len(self._source) and is_inline_ws(self._source[idx]):
            idx += 1
        if idx < len(self._source) and is_bare_start(self._source[idx]):
            return Adjacency.SEQUENTIAL
        return Adjacency.TERMINAL

    def _lex_identifier(self) -> None:
        start = self._pos
        while self._pos < len(self._source) and is_ident_char(self._peek()):
            self._advance()
        text = self._source[start : self._pos]
        self._emit(Identifier(text), start, self._adjacency())

    def _lex_integer(self) -> None:
        start = self._pos
        while is_digit(self._peek()):
            self._advance()
        digits = self._source[start : self._pos]

        # Bound the length first; int() refuses very long digit strings
        significant = digits.lstrip("0") or "0"
        if len(significant) > _U64_DIGITS or int(significant) > U64_MAX:
            raise self._error(NumericOverflow, start, digits)

        # A suffix only counts when it is the whole identifier that follows
        suffix_end = self._pos
        while suffix_end < len(self._source) and is_ident_char(self._source[suffix_end]):
            suffix_end += 1
        kind = INTEGER_SUFFIXES.get(self._source[self._pos : suffix_end])
        if kind is not None:
            self._pos = suffix_end

        self._emit(Integer(int(significant), kind), start, self._adjacency())

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _lex_comment(self) -> None:
        start = self._pos

        if self._peek(1) == "/":
            # Line comment stops before the newline so the line can end
            while self._peek() not in ("", "\n"):
                self._advance()
        else:
            close = self._source.find("*/", start + 2)
            if close < 0:
                raise self._error(UnterminatedComment, start)
            self._pos = close + 2

        self._emit(Comment(), start)

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    def _lex_string_part(self, frame: _Frame) -> None:
        ch = self._peek()

        if ch == "":
            raise self._error(UnterminatedString, frame.start)

        if ch == '"':
            self._advance()
            self._close_frame()
            return

        if ch == "$" and self._peek(1) == "{":
            start = self._pos
            self._advance()
            self._advance()
            self._push(Delimiter.CURLY, start)
            return

        self._lex_literal(frame)

    def _lex_literal(self, frame: _Frame) -> None:
        """Consume one maximal literal run, decoding escapes as it goes."""
        start = self._pos
        chars = []
        while not ends_literal(self._source, self._pos):
            ch = self._advance()
            if ch != "\\":
                chars.append(ch)
                continue
            escape_start = self._pos - 1
            nxt = self._peek()
            if nxt == "":
                raise self._error(UnterminatedString, frame.start)
            decoded = decode_escape(nxt)
            if decoded is None:
                raise self._error(InvalidEscape, escape_start, nxt)
            self._advance()
            chars.append(decoded)
        self._emit(StringLiteral("".join(chars)), start)


def _decode(data: bytes, filename: str) -> str:
    """Decode UTF-8 source, reporting the first bad byte as a LexError."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        text = data.decode("utf-8", errors="replace")
        offset = len(data[: exc.start].decode("utf-8"))
        raise InvalidEncoding(locate(text, offset), text, filename=filename) from exc


def tokenize(
    source: str | bytes,
    filename: str | None = None,
    options: LexerOptions | None = None,
) -> Tree:
    """Convenience function: lex source text and return the top-level Block."""
    return Lexer(source, filename, options).tokenize()


__all__ = ["LexError", "Lexer", "tokenize"]
