#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/rules.py
"""Compile declarative tag rules.

A rule definition pairs a template describing the markup,
``[tagname attr-part]content-part``, with a render body. The body is either
an output template string that uses the same ``$identifier`` placeholders,
or a callable that receives the full ``RenderApi`` and returns the output.

Examples
--------
    >>> rule = compile_rule({"template": "[url=$href]$text[/url]", "render": '<a href="$href">$text</a>'})
    >>> rule.name, rule.attr_names, rule.content_names
    ('url', ['href'], ['text'])

Rules are looked up by name with a linear first-match search. Registering a
second rule with a name already in use is allowed; the later rule simply
never matches.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Sequence, Union

from bbrender.constants import DEFAULT_PARSE_ATTRIBUTES, PLACEHOLDER_PATTERN, RULE_TEMPLATE_PATTERN
from bbrender.exceptions import RuleTemplateError, ValidationError

if TYPE_CHECKING:
    from bbrender.renderers.base import RenderApi

logger = logging.getLogger(__name__)

_TEMPLATE_RE = re.compile(RULE_TEMPLATE_PATTERN, re.IGNORECASE | re.DOTALL)
_PLACEHOLDER_RE = re.compile(PLACEHOLDER_PATTERN)

RenderCallback = Callable[["RenderApi"], str]


@dataclass(frozen=True)
class RuleDefinition:
    """Declarative rule as supplied by the caller.

    Parameters
    ----------
    template : str
        Markup shape, e.g. ``"[color=$color]$content[/color]"``
    render : str or callable
        Output template or render callback
    name : str, optional
        Tag name the rule applies to. Defaults to the template's tag name,
        lower-cased.
    parse_attributes : bool, default True
        Bind attribute variables to the attribute value run through the
        whole parse pipeline, instead of the raw value

    """

    template: str
    render: Union[str, RenderCallback]
    name: Optional[str] = None
    parse_attributes: bool = DEFAULT_PARSE_ATTRIBUTES


@dataclass(frozen=True)
class TemplateBody:
    """Render body that substitutes ``$name`` placeholders in a string."""

    template: str

    def substitute(self, names: Sequence[str], variables: Mapping[str, str]) -> str:
        """Replace every ``$name`` in ``names`` with its bound value.

        Names missing from ``variables`` are replaced with an empty string.
        Placeholders for names outside ``names`` are left untouched.

        Substitution is a single pass over whole ``$identifier`` matches, so
        ``$a`` never replaces the start of ``$ab`` and a substituted value is
        never scanned again for placeholders.
        """
        known = set(names)

        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in known:
                return match.group(0)
            return variables.get(name, "")

        return _PLACEHOLDER_RE.sub(replace, self.template)


@dataclass(frozen=True)
class CallbackBody:
    """Render body that delegates to a callable."""

    callback: RenderCallback


RuleBody = Union[TemplateBody, CallbackBody]


@dataclass(frozen=True)
class CompiledRule:
    """Resolved rule record used by the renderer.

    Parameters
    ----------
    name : str
        Tag name the rule matches
    attr_names : list of str
        Placeholders found in the template's attribute part, in order
    content_names : list of str
        Placeholders found in the template's content part, in order
    full_vars : list of str
        De-duplicated union of both, in first-occurrence order
    body : TemplateBody or CallbackBody
        What to render
    template : str
        The template the rule was compiled from
    parse_attributes : bool
        Whether attribute values are re-parsed as markup

    """

    name: str
    attr_names: list[str]
    content_names: list[str]
    full_vars: list[str]
    body: RuleBody
    template: str = ""
    parse_attributes: bool = field(default=DEFAULT_PARSE_ATTRIBUTES)


def _coerce_definition(definition: Union[RuleDefinition, Mapping[str, Any]]) -> RuleDefinition:
    if isinstance(definition, RuleDefinition):
        return definition
    if not isinstance(definition, Mapping):
        raise ValidationError(
            f"Each rule must be a mapping or RuleDefinition, got {type(definition).__name__}",
            parameter_name="rule",
            parameter_value=definition,
        )
    if "template" not in definition or "render" not in definition:
        raise ValidationError(
            "Rule mappings need both 'template' and 'render' keys",
            parameter_name="rule",
            parameter_value=definition,
        )
    return RuleDefinition(
        template=definition["template"],
        render=definition["render"],
        name=definition.get("name"),
        parse_attributes=definition.get("parse_attributes", DEFAULT_PARSE_ATTRIBUTES),
    )


def compile_rule(definition: Union[RuleDefinition, Mapping[str, Any]]) -> CompiledRule:
    """Compile a rule definition.

    Parameters
    ----------
    definition : RuleDefinition or mapping
        Rule to compile. Mappings use the keys ``template``, ``render`` and
        optionally ``name`` and ``parse_attributes``.

    Returns
    -------
    CompiledRule
        The compiled rule

    Raises
    ------
    RuleTemplateError
        If the template does not have the ``[tagname ...]...`` shape
    ValidationError
        If the definition is not a mapping, or its render body is neither a
        string nor callable

    """
    rule = _coerce_definition(definition)

    if not isinstance(rule.template, str):
        raise RuleTemplateError(rule.template)
    match = _TEMPLATE_RE.match(rule.template)
    if not match:
        raise RuleTemplateError(rule.template)

    if isinstance(rule.render, str):
        body: RuleBody = TemplateBody(rule.render)
    elif callable(rule.render):
        body = CallbackBody(rule.render)
    else:
        raise ValidationError(
            f"Rule render must be a string or callable, got {type(rule.render).__name__}",
            parameter_name="render",
            parameter_value=rule.render,
        )

    tag_name, attr_part, content_part = match.groups()
    attr_names = _PLACEHOLDER_RE.findall(attr_part)
    content_names = _PLACEHOLDER_RE.findall(content_part)
    full_vars = list(dict.fromkeys(attr_names + content_names))

    compiled = CompiledRule(
        name=rule.name or tag_name.lower(),
        attr_names=attr_names,
        content_names=content_names,
        full_vars=full_vars,
        body=body,
        template=rule.template,
        parse_attributes=rule.parse_attributes,
    )
    logger.debug("Compiled rule [%s] with variables %s", compiled.name, full_vars)
    return compiled


def compile_rules(definitions: Sequence[Union[RuleDefinition, Mapping[str, Any]]]) -> list[CompiledRule]:
    """Compile a whole rule set, keeping its order.

    Raises
    ------
    ValidationError
        If ``definitions`` is not a list or tuple, or any rule is invalid

    """
    if not isinstance(definitions, (list, tuple)):
        raise ValidationError(
            f"Rules must be a list, got {type(definitions).__name__}",
            parameter_name="rules",
            parameter_value=definitions,
        )

    compiled = [compile_rule(definition) for definition in definitions]

    seen: set[str] = set()
    for rule in compiled:
        if rule.name in seen:
            logger.debug("Rule [%s] is shadowed by an earlier rule with the same name", rule.name)
        seen.add(rule.name)

    return compiled


def find_rule(rules: Sequence[CompiledRule], name: str) -> Optional[CompiledRule]:
    """Return the first rule named ``name``, or None."""
    for rule in rules:
        if rule.name == name:
            return rule
    return None
