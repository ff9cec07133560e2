"""Test the package-level entry point and tree helpers."""

import pytest

import tokentree
from tokentree.config import LexerOptions
from tokentree.errors import LexError
from tokentree.lexer import Lexer
from tokentree.tokens import Identifier, Integer, StringLiteral, locate
from tokentree.tree import Delimiter, iter_leaves


class TestLex:
    def test_returns_block(self):
        tree = tokentree.lex("a b")
        assert tree.delimiter == Delimiter.BLOCK
        assert len(tree.children) == 2

    def test_accepts_utf8_bytes(self):
        tree = tokentree.lex('"héllo"'.encode())
        (string,) = tree.children
        assert string.children[0].token == StringLiteral("héllo")

    def test_lexer_class(self):
        tree = Lexer("x", "main.an", LexerOptions(max_depth=4)).tokenize()
        assert [leaf.token for leaf in iter_leaves(tree)] == [Identifier("x")]

    def test_filename_from_options(self):
        with pytest.raises(LexError) as exc_info:
            tokentree.lex("*", options=LexerOptions(filename="opts.an"))
        assert exc_info.value.filename == "opts.an"


class TestIterLeaves:
    def test_source_order(self):
        tree = tokentree.lex('a (b "c${d}")\n  e 1')
        tokens = [leaf.token for leaf in iter_leaves(tree)]
        assert tokens == [
            Identifier("a"),
            Identifier("b"),
            StringLiteral("c"),
            Identifier("d"),
            Identifier("e"),
            Integer(1),
        ]


class TestLocate:
    def test_first_char(self):
        pos = locate("abc", 0)
        assert (pos.line, pos.column, pos.offset) == (1, 1, 0)

    def test_after_newline(self):
        pos = locate("ab\ncd", 4)
        assert (pos.line, pos.column) == (2, 2)

    def test_clamped_to_source(self):
        assert locate("ab", 10).offset == 2
