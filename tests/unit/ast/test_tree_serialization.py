#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for tree nodes, source reproduction and serialization."""

import json

import pytest

from bbrender.ast import Pointer, Root, Span, Tag, Text, to_source, tree_to_dict, tree_to_json
from bbrender.diagnostics import Diagnostic, DiagnosticKind
from bbrender.parsers.tokenizer import tokenize
from bbrender.parsers.tree_builder import TreeBuilder


@pytest.mark.unit
class TestPointer:
    """Tests for Pointer."""

    @pytest.mark.parametrize("path,depth", [("0", 0), ("3.1", 1), ("0.2.1", 2)])
    def test_depth(self, path, depth) -> None:
        """Test that depth counts path segments."""
        assert Pointer(index=0, path=path).depth == depth

    def test_child(self) -> None:
        """Test deriving a child pointer."""
        assert Pointer(index=2, path="0.2").child(1) == Pointer(index=1, path="0.2.1")

    def test_to_dict(self) -> None:
        """Test the dictionary form including depth."""
        assert Pointer(index=1, path="0.1").to_dict() == {"index": 1, "path": "0.1", "depth": 1}


@pytest.mark.unit
class TestTagMarkup:
    """Tests for Tag markup helpers."""

    def test_opening_markup_with_value(self) -> None:
        """Test [name=value] reproduction."""
        assert Tag(name="url", value="http://x").opening_markup == "[url=http://x]"

    def test_opening_markup_empty_value(self) -> None:
        """Test that an empty value is dropped."""
        assert Tag(name="b", value="").opening_markup == "[b]"

    def test_closing_markup(self) -> None:
        """Test [/name] reproduction."""
        assert Tag(name="b").closing_markup == "[/b]"


@pytest.mark.unit
class TestToSource:
    """Tests for source reproduction."""

    def test_round_trip_of_normalized_markup(self) -> None:
        """Test that well-formed, normalized markup is reproduced."""
        text = "a [b]x [url=y]z[/url][/b] [list][*]one [i]t[/i][*]two[/list]"
        tree = TreeBuilder().build(tokenize(text))

        assert to_source(tree) == text

    def test_unclosed_tag_has_no_closer(self) -> None:
        """Test that only consumed closing tags are written."""
        tree = TreeBuilder().build(tokenize("[b]x"))

        assert to_source(tree) == "[b]x"


@pytest.mark.unit
class TestSerialization:
    """Tests for tree_to_dict and tree_to_json."""

    def test_tree_to_dict(self) -> None:
        """Test the dictionary shape of a small tree."""
        tree = TreeBuilder().build(tokenize("[b=1]x[/b]"))

        assert tree_to_dict(tree) == {
            "node_type": "Root",
            "children": [
                {
                    "node_type": "Tag",
                    "name": "b",
                    "value": "1",
                    "children": [{"node_type": "Text", "content": "x", "span": {"start": 5, "end": 6}}],
                    "span": {"start": 0, "end": 5},
                    "closing_span": {"start": 6, "end": 10},
                }
            ],
        }

    def test_list_marker_children_are_tokens(self) -> None:
        """Test that marker children serialize as tokens."""
        tree = TreeBuilder().build(tokenize("[*]a"))
        marker = tree_to_dict(tree)["children"][0]

        assert marker["name"] == "*"
        assert marker["children"] == [{"kind": "text", "raw": "a", "span": {"start": 3, "end": 4}}]

    def test_tree_to_json(self) -> None:
        """Test that JSON output parses back to the dictionary."""
        tree = Root(children=[Text(content="hi")])

        assert json.loads(tree_to_json(tree)) == tree_to_dict(tree)

    def test_unknown_node_type(self) -> None:
        """Test that foreign objects are rejected."""
        with pytest.raises(TypeError):
            tree_to_dict(object())


@pytest.mark.unit
class TestDiagnostic:
    """Tests for the diagnostic wire form."""

    def test_to_dict_without_message(self) -> None:
        """Test that message is omitted when unset."""
        diagnostic = Diagnostic(
            kind=DiagnosticKind.UNCLOSED_TAG,
            tag_name="b",
            span=Span(0, 3),
            pointer=Pointer(index=0, path="0"),
        )

        assert diagnostic.to_dict() == {
            "kind": "unclosed-tag",
            "tagName": "b",
            "pointer": {"index": 0, "path": "0", "depth": 0},
            "span": {"start": 0, "end": 3},
        }

    def test_to_dict_with_message(self) -> None:
        """Test that forbidden diagnostics carry their message."""
        diagnostic = Diagnostic(kind=DiagnosticKind.FORBIDDEN, tag_name="img", message="No images.")

        assert diagnostic.to_dict() == {
            "kind": "forbidden",
            "tagName": "img",
            "pointer": None,
            "span": None,
            "message": "No images.",
        }

    def test_kind_is_string_valued(self) -> None:
        """Test that kinds compare equal to their wire names."""
        assert DiagnosticKind.UNKNOWN_TAG == "unknown-tag"
