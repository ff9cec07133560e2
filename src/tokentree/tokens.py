"""Token types, spans, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class IntegerKind(Enum):
    """Fixed-width integer suffixes, valued by their source spelling."""

    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    ISZ = "isz"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    USZ = "usz"


class OperatorKind(Enum):
    ADD = auto()  # +
    EQUALS = auto()  # =
    MEMBER_ACCESS = auto()  # .


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open range of source offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span {self.start}..{self.end}")

    def __len__(self) -> int:
        return self.end - self.start

    def text(self, source: str) -> str:
        return source[self.start : self.end]


@dataclass(frozen=True, slots=True)
class Identifier:
    text: str


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """Literal fragment of a string with escapes already decoded."""

    value: str


@dataclass(frozen=True, slots=True)
class Integer:
    value: int
    kind: IntegerKind | None = None


@dataclass(frozen=True, slots=True)
class Operator:
    kind: OperatorKind


@dataclass(frozen=True, slots=True)
class Comment:
    """Line or block comment; content is discarded, the span is kept."""


Token = Identifier | StringLiteral | Integer | Operator | Comment

U64_MAX = 2**64 - 1

OPERATORS: dict[str, OperatorKind] = {
    "+": OperatorKind.ADD,
    "=": OperatorKind.EQUALS,
    ".": OperatorKind.MEMBER_ACCESS,
}

INTEGER_SUFFIXES: dict[str, IntegerKind] = {kind.value: kind for kind in IntegerKind}


def is_ident_start(ch: str) -> bool:
    """Return True if ch may begin an identifier."""
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier."""
    return is_ident_start(ch) or is_digit(ch)


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_inline_ws(ch: str) -> bool:
    """Return True for whitespace that does not end a line."""
    return ch != "\n" and ch != "" and ch.isspace()


def is_bare_start(ch: str) -> bool:
    """Return True if ch begins an identifier or an integer."""
    return is_ident_start(ch) or is_digit(ch)


def locate(source: str, offset: int) -> Position:
    """Convert a source offset into a line/column Position."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start + 1, offset)
