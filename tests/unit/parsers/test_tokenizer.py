#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the bracket-tag tokenizer."""

import pytest

from bbrender.ast.nodes import Span
from bbrender.parsers.tokenizer import TokenKind, Tokenizer, tokenize


@pytest.mark.unit
class TestTokenizer:
    """Tests for Tokenizer.tokenize."""

    def test_empty_input(self) -> None:
        """Test that empty input yields no tokens."""
        assert tokenize("") == []

    def test_plain_text_is_one_token(self) -> None:
        """Test that text without brackets is a single text token."""
        tokens = tokenize("hello world")

        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.TEXT
        assert tokens[0].content == "hello world"
        assert tokens[0].span == Span(0, 11)

    def test_simple_tag_pair(self) -> None:
        """Test opening tag, text and closing tag with spans."""
        tokens = tokenize("[b]hi[/b]")

        assert [t.kind for t in tokens] == [TokenKind.TAG_OPEN, TokenKind.TEXT, TokenKind.TAG_CLOSE]
        assert [t.span for t in tokens] == [Span(0, 3), Span(3, 5), Span(5, 9)]
        assert tokens[0].name == "b"
        assert tokens[0].value is None
        assert tokens[2].name == "b"

    def test_name_is_lowercased_and_stripped(self) -> None:
        """Test that tag names are normalized."""
        tokens = tokenize("[ B ]x[/B ]")

        assert tokens[0].name == "b"
        assert tokens[2].name == "b"
        assert tokens[0].raw == "[ B ]"

    def test_value_is_stripped(self) -> None:
        """Test attribute value parsing."""
        tokens = tokenize("[url = http://example.com ]site[/url]")

        assert tokens[0].name == "url"
        assert tokens[0].value == "http://example.com"

    def test_empty_value_is_not_none(self) -> None:
        """Test that a trailing '=' gives an empty value rather than None."""
        assert tokenize("[b=]")[0].value == ""

    def test_bracketed_attribute_value(self) -> None:
        """Test that balanced brackets inside a value stay in the value."""
        text = "[img=http://x/a[1].png]"
        tokens = tokenize(text)

        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.TAG_OPEN
        assert tokens[0].name == "img"
        assert tokens[0].value == "http://x/a[1].png"
        assert tokens[0].span == Span(0, len(text))

    def test_nested_brackets_in_value(self) -> None:
        """Test multiple levels of brackets inside a value."""
        tokens = tokenize("[x=[[a]]]rest")

        assert tokens[0].value == "[[a]]"
        assert tokens[1].content == "rest"

    def test_value_stops_at_first_unmatched_bracket(self) -> None:
        """Test that the tag ends at the first ']' at depth zero."""
        tokens = tokenize("[url=a]b]")

        assert tokens[0].value == "a"
        assert tokens[1].content == "b]"

    def test_list_marker(self) -> None:
        """Test that [*] is a self-contained opening token."""
        tokens = tokenize("[*]item")

        assert tokens[0].kind is TokenKind.TAG_OPEN
        assert tokens[0].name == "*"
        assert tokens[0].value is None
        assert tokens[0].span == Span(0, 3)
        assert tokens[1].content == "item"

    def test_unterminated_tag_degrades_to_text(self) -> None:
        """Test that a '[' without a closing ']' becomes literal text."""
        tokens = tokenize("[b hi")

        assert [(t.kind, t.raw) for t in tokens] == [(TokenKind.TEXT, "["), (TokenKind.TEXT, "b hi")]
        assert tokens[0].span == Span(0, 1)
        assert tokens[1].span == Span(1, 5)

    def test_unbalanced_value_degrades_to_text(self) -> None:
        """Test that an unclosed bracket in a value makes the tag fail."""
        tokens = tokenize("[x=[a]")

        assert tokens[0].raw == "["
        assert tokens[1].raw == "x="
        assert tokens[2].kind is TokenKind.TAG_OPEN
        assert tokens[2].name == "a"

    def test_bracket_inside_name_is_a_name_character(self) -> None:
        """Test that '[' while reading a name is kept in the name."""
        tokens = tokenize("[a[b]x[/b]")

        assert [t.raw for t in tokens] == ["[a[b]", "x", "[/b]"]
        assert tokens[0].kind is TokenKind.TAG_OPEN
        assert tokens[0].name == "a[b"
        assert tokens[2].name == "b"

    def test_bracket_inside_name_is_stripped_with_name(self) -> None:
        """Test that surrounding whitespace is still stripped from such names."""
        tokens = tokenize("a [ [b]x")

        assert [t.raw for t in tokens] == ["a ", "[ [b]", "x"]
        assert tokens[1].name == "[b"

    def test_star_prefixed_name_is_not_a_marker(self) -> None:
        """Test that only the exact [*] is a list marker."""
        token = tokenize("[*x]")[0]

        assert token.kind is TokenKind.TAG_OPEN
        assert token.name == "*x"

    def test_closing_tag_with_value(self) -> None:
        """Test that closing tags may carry a value."""
        token = tokenize("[/quote=bob]")[0]

        assert token.kind is TokenKind.TAG_CLOSE
        assert token.name == "quote"
        assert token.value == "bob"

    def test_empty_tag_name(self) -> None:
        """Test that '[]' is a tag with an empty name."""
        token = tokenize("[]")[0]

        assert token.kind is TokenKind.TAG_OPEN
        assert token.name == ""

    def test_raw_text_reproduces_input(self) -> None:
        """Test that joining raw token text gives back the input."""
        text = "x [b]y[/b] [url=a[1]]z[/url] [ [*] [c"
        assert "".join(t.raw for t in Tokenizer().tokenize(text)) == text

    def test_token_to_dict(self) -> None:
        """Test the dictionary form of tokens."""
        open_tag, text, _ = tokenize("[b=1]x[/b]")

        assert open_tag.to_dict() == {
            "kind": "tag-open",
            "raw": "[b=1]",
            "span": {"start": 0, "end": 5},
            "name": "b",
            "value": "1",
        }
        assert text.to_dict() == {"kind": "text", "raw": "x", "span": {"start": 5, "end": 6}}
