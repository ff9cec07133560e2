"""Error types with formatted source context."""

from __future__ import annotations

from collections.abc import Iterable

from tokentree.tokens import Position
from tokentree.tree import Delimiter

DEFAULT_FILENAME = "input.an"


class LexError(Exception):
    """Raised on the first lexing error, with position and source context."""

    def __init__(
        self,
        message: str,
        position: Position,
        source: str,
        expected: Iterable[str] = (),
        *,
        filename: str = DEFAULT_FILENAME,
    ) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.expected = frozenset(expected)
        self.filename = filename
        super().__init__(self.format())

    def format(self, filename: str | None = None) -> str:
        filename = filename or self.filename
        lines = self.source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        # Build the source line (strip trailing newline for display)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline one char, or two for two-char openers like ${ and /*
        underline_len = max(1, min(2, len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        result = (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )
        if self.expected:
            result += f"\n  expected one of: {', '.join(sorted(self.expected))}"
        return result


class UnexpectedCharacter(LexError):
    def __init__(
        self,
        found: str,
        position: Position,
        source: str,
        expected: Iterable[str],
        *,
        filename: str = DEFAULT_FILENAME,
    ) -> None:
        self.found = found
        what = "end of input" if found == "" else repr(found)
        super().__init__(
            f"unexpected {what}", position, source, expected, filename=filename
        )


class UnterminatedString(LexError):
    def __init__(
        self, position: Position, source: str, *, filename: str = DEFAULT_FILENAME
    ) -> None:
        super().__init__(
            "unterminated string literal", position, source, ['\'"\''], filename=filename
        )


class UnterminatedComment(LexError):
    def __init__(
        self, position: Position, source: str, *, filename: str = DEFAULT_FILENAME
    ) -> None:
        super().__init__(
            "unterminated block comment", position, source, ["'*/'"], filename=filename
        )


_CLOSERS = {Delimiter.PARENTHESIS: "')'", Delimiter.CURLY: "'}'"}


class UnterminatedGroup(LexError):
    def __init__(
        self,
        delimiter: Delimiter,
        position: Position,
        source: str,
        *,
        filename: str = DEFAULT_FILENAME,
    ) -> None:
        self.delimiter = delimiter
        closer = _CLOSERS.get(delimiter, "end of group")
        super().__init__(
            f"unterminated {delimiter.name.lower()} group, missing {closer}",
            position,
            source,
            [closer],
            filename=filename,
        )


class InvalidEscape(LexError):
    def __init__(
        self,
        sequence: str,
        position: Position,
        source: str,
        *,
        filename: str = DEFAULT_FILENAME,
    ) -> None:
        self.sequence = sequence
        super().__init__(
            f"invalid string escape sequence '\\{sequence}'",
            position,
            source,
            ["'\\\\'", "'\\$'", "'\\\"'", "'\\n'", "'\\r'", "'\\t'", "'\\0'"],
            filename=filename,
        )


class NumericOverflow(LexError):
    def __init__(
        self,
        digits: str,
        position: Position,
        source: str,
        *,
        filename: str = DEFAULT_FILENAME,
    ) -> None:
        self.digits = digits
        super().__init__(
            f"integer literal {digits} does not fit in 64 bits",
            position,
            source,
            filename=filename,
        )


class InconsistentIndentation(LexError):
    def __init__(
        self, position: Position, source: str, *, filename: str = DEFAULT_FILENAME
    ) -> None:
        super().__init__(
            "inconsistent indentation: dedent does not match any enclosing level",
            position,
            source,
            filename=filename,
        )


class NestingTooDeep(LexError):
    def __init__(
        self,
        limit: int,
        position: Position,
        source: str,
        *,
        filename: str = DEFAULT_FILENAME,
    ) -> None:
        self.limit = limit
        super().__init__(
            f"nesting exceeds the maximum depth of {limit}",
            position,
            source,
            filename=filename,
        )


class InvalidEncoding(LexError):
    """Source bytes that are not valid UTF-8; ``source`` holds a lossy decode."""

    def __init__(
        self, position: Position, source: str, *, filename: str = DEFAULT_FILENAME
    ) -> None:
        super().__init__(
            "source is not valid UTF-8", position, source, filename=filename
        )
