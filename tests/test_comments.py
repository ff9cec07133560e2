"""Test line and block comments."""

import pytest

from tokentree.errors import UnexpectedCharacter, UnterminatedComment
from tokentree.tokens import Comment, Identifier, Span
from tokentree.tree import Delimiter, Leaf

from .conftest import assert_tree, tokens_of


class TestLineComments:
    def test_alone(self, lex):
        assert lex("// hi") == (Leaf(Comment(), Span(0, 5)),)

    def test_stops_before_newline(self, lex):
        nodes = lex("a // hi\nb")
        assert tokens_of(nodes) == [Identifier("a"), Comment(), Identifier("b")]
        assert nodes[1].span == Span(2, 7)

    def test_empty_comment_at_eof(self, lex):
        assert tokens_of(lex("//")) == [Comment()]

    def test_content_is_ignored(self, lex):
        assert tokens_of(lex('// "unterminated ( \\q')) == [Comment()]


class TestBlockComments:
    def test_inline(self, lex):
        nodes = lex("/* x */ a")
        assert nodes[0] == Leaf(Comment(), Span(0, 7))
        assert tokens_of(nodes[1:]) == [Identifier("a")]

    def test_spans_lines(self, lex):
        nodes = lex("/* multi\nline */ a")
        assert tokens_of(nodes) == [Comment(), Identifier("a")]

    def test_does_not_nest(self, lex):
        # The first */ closes the comment, leaving " c */" behind
        with pytest.raises(UnexpectedCharacter) as exc_info:
            lex("/* a /* b */ c */")
        assert exc_info.value.found == "*"

    def test_unterminated(self, lex):
        with pytest.raises(UnterminatedComment) as exc_info:
            lex("x /* y")
        assert exc_info.value.position.column == 3


class TestCommentsInGroups:
    def test_inside_parens(self, lex):
        (paren,) = lex("(a // c\n b)")
        paren = assert_tree(paren, Delimiter.PARENTHESIS, 3)
        assert tokens_of(paren.children) == [Identifier("a"), Comment(), Identifier("b")]

    def test_single_slash_is_unexpected(self, lex):
        with pytest.raises(UnexpectedCharacter) as exc_info:
            lex("a / b")
        assert exc_info.value.found == "/"
