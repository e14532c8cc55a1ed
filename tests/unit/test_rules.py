#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for rule compilation."""

import logging

import pytest

from bbrender.exceptions import RuleTemplateError, ValidationError
from bbrender.rules import (
    CallbackBody,
    RuleDefinition,
    TemplateBody,
    compile_rule,
    compile_rules,
    find_rule,
)


@pytest.mark.unit
class TestCompileRule:
    """Tests for compile_rule."""

    def test_attribute_and_content_names(self) -> None:
        """Test that placeholders are split by template part."""
        rule = compile_rule({"template": "[url=$href]$text[/url]", "render": '<a href="$href">$text</a>'})

        assert rule.name == "url"
        assert rule.attr_names == ["href"]
        assert rule.content_names == ["text"]
        assert rule.full_vars == ["href", "text"]
        assert isinstance(rule.body, TemplateBody)

    def test_full_vars_are_deduplicated(self) -> None:
        """Test that a name used in both parts appears once."""
        rule = compile_rule({"template": "[x=$v]$v $w[/x]", "render": "$v"})

        assert rule.attr_names == ["v"]
        assert rule.content_names == ["v", "w"]
        assert rule.full_vars == ["v", "w"]

    def test_name_is_lowercased(self) -> None:
        """Test that the template tag name is normalized."""
        assert compile_rule({"template": "[QUOTE]$c[/QUOTE]", "render": "$c"}).name == "quote"

    def test_list_marker_template(self) -> None:
        """Test that [*] templates compile."""
        rule = compile_rule({"template": "[*]$item", "render": "<li>$item</li>"})

        assert rule.name == "*"
        assert rule.content_names == ["item"]

    def test_multiline_template(self) -> None:
        """Test that the content part may span lines."""
        rule = compile_rule({"template": "[code]\n$body\n[/code]", "render": "<pre>$body</pre>"})

        assert rule.content_names == ["body"]

    def test_callable_render(self) -> None:
        """Test that a callable render body is kept."""
        callback = lambda api: "x"  # noqa: E731
        rule = compile_rule(RuleDefinition(template="[x]$c[/x]", render=callback))

        assert isinstance(rule.body, CallbackBody)
        assert rule.body.callback is callback

    def test_parse_attributes_flag(self) -> None:
        """Test that the flag is carried from mapping definitions."""
        rule = compile_rule({"template": "[x=$v]$c[/x]", "render": "$v", "parse_attributes": False})

        assert rule.parse_attributes is False

    @pytest.mark.parametrize("template", ["b]$c[/b]", "", "[]$c", "[b", "plain text"])
    def test_malformed_template(self, template) -> None:
        """Test templates that do not start with a tag."""
        with pytest.raises(RuleTemplateError) as exc_info:
            compile_rule({"template": template, "render": "x"})

        assert exc_info.value.template == template

    def test_non_string_template(self) -> None:
        """Test that a non-string template is a template error."""
        with pytest.raises(RuleTemplateError):
            compile_rule({"template": 42, "render": "x"})

    def test_bad_render_type(self) -> None:
        """Test that render must be a string or callable."""
        with pytest.raises(ValidationError) as exc_info:
            compile_rule({"template": "[b]$c[/b]", "render": 3})

        assert exc_info.value.parameter_name == "render"

    def test_missing_keys(self) -> None:
        """Test that mappings need template and render."""
        with pytest.raises(ValidationError):
            compile_rule({"template": "[b]$c[/b]"})

    def test_not_a_mapping(self) -> None:
        """Test that other types are rejected."""
        with pytest.raises(ValidationError):
            compile_rule("[b]$c[/b]")  # type: ignore[arg-type]


@pytest.mark.unit
class TestTemplateBody:
    """Tests for placeholder substitution."""

    def test_substitute(self) -> None:
        """Test simple substitution."""
        body = TemplateBody("<b>$c</b>")

        assert body.substitute(["c"], {"c": "x"}) == "<b>x</b>"

    def test_missing_value_is_empty(self) -> None:
        """Test that a known name without a value becomes ''."""
        assert TemplateBody("[$c]").substitute(["c"], {}) == "[]"

    def test_values_are_not_rescanned(self) -> None:
        """Test that substituted values containing '$' are left as they are."""
        body = TemplateBody("$a $b")

        assert body.substitute(["a", "b"], {"a": "$b", "b": "2"}) == "$b 2"


@pytest.mark.unit
class TestRuleSets:
    """Tests for compile_rules and find_rule."""

    def test_order_is_kept(self) -> None:
        """Test that compiled rules keep registration order."""
        rules = compile_rules(
            [
                {"template": "[b]$c[/b]", "render": "1"},
                {"template": "[i]$c[/i]", "render": "2"},
            ]
        )

        assert [rule.name for rule in rules] == ["b", "i"]

    def test_tuple_is_accepted(self) -> None:
        """Test that tuples are accepted as rule sets."""
        assert compile_rules(()) == []

    @pytest.mark.parametrize("definitions", ["[b]$c[/b]", {"template": "[b]$c[/b]", "render": "x"}, None])
    def test_non_list_rejected(self, definitions) -> None:
        """Test that rule sets must be lists."""
        with pytest.raises(ValidationError):
            compile_rules(definitions)

    def test_duplicate_is_logged(self, caplog) -> None:
        """Test that shadowed rules are kept and logged."""
        with caplog.at_level(logging.DEBUG, logger="bbrender.rules"):
            rules = compile_rules(
                [
                    {"template": "[b]$c[/b]", "render": "1"},
                    {"template": "[b]$c[/b]", "render": "2"},
                ]
            )

        assert len(rules) == 2
        assert "shadowed" in caplog.text
        assert find_rule(rules, "b") is rules[0]

    def test_find_rule_missing(self) -> None:
        """Test lookup of an unknown name."""
        assert find_rule([], "b") is None
