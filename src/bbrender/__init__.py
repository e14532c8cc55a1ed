"""bbrender - render bracket-tag (BBCode-style) markup with pluggable rules.

bbrender is a small markup-to-markup compiler. Input such as ``[b]hi[/b]``
is tokenized, built into a tree with error recovery, and rendered by a
caller-supplied rule set into HTML or any other text format.

Key Features
------------
- Declarative rules: ``[url=$href]$text[/url]`` -> ``<a href="$href">$text</a>``
- Callback rules receiving the node, its neighbours and its tree position
- Lenient or strict handling of unknown, mismatched and unclosed tags
- Forbidden-tag policies that can veto or replace a tag's output
- Line-break injection and automatic wrapping of loose inline text
- Rich diagnostics instead of exceptions for every markup problem

Examples
--------
Basic usage:

    >>> from bbrender import BBCodeParser
    >>> parser = BBCodeParser([
    ...     {"template": "[b]$content[/b]", "render": "<b>$content</b>"},
    ...     {"template": "[url=$href]$text[/url]", "render": '<a href="$href">$text</a>'},
    ... ])
    >>> result = parser.parse("[b]hi[/b] [foo]x[/foo]")
    >>> result.output
    '<b>hi</b> x'
    >>> [d.kind.value for d in result.diagnostics]
    ['unknown-tag']

One-off parse:

    >>> from bbrender import parse
    >>> parse("[i]x[/i]", rules=[{"template": "[i]$c[/i]", "render": "<i>$c</i>"}]).output
    '<i>x</i>'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "bbrender requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from typing import Any, Mapping, Sequence, Union

from bbrender.ast import Pointer, Root, Span, Tag, Text
from bbrender.diagnostics import Diagnostic, DiagnosticKind
from bbrender.exceptions import BBRenderError, InvalidOptionsError, RuleTemplateError, ValidationError
from bbrender.forbidden import ForbiddenRule, ForbiddenValidator
from bbrender.options import ParseOptions, TextWrapOptions
from bbrender.parsers.bbcode import BBCodeParser, ParseResult
from bbrender.parsers.tokenizer import Token, TokenKind, tokenize
from bbrender.renderers.base import NodeRefs, RenderApi
from bbrender.rules import CompiledRule, RuleDefinition, compile_rule


def parse(
    text: str,
    rules: Sequence[Union[RuleDefinition, Mapping[str, Any]]] = (),
    **options: Any,
) -> ParseResult:
    """Parse ``text`` with a throwaway parser.

    Parameters
    ----------
    text : str
        Markup to render
    rules : list of RuleDefinition or mapping, optional
        Rule set to render with
    **options
        ``ParseOptions`` fields (``wrap_text``, ``strict_unknown_tag``,
        ``strict_closing_tag``)

    Returns
    -------
    ParseResult
        Output, diagnostics, tokens, tree and preprocessed input

    """
    return BBCodeParser(rules).parse(text, **options)


__all__ = [
    "BBCodeParser",
    "BBRenderError",
    "CompiledRule",
    "Diagnostic",
    "DiagnosticKind",
    "ForbiddenRule",
    "ForbiddenValidator",
    "InvalidOptionsError",
    "NodeRefs",
    "ParseOptions",
    "ParseResult",
    "Pointer",
    "RenderApi",
    "Root",
    "RuleDefinition",
    "RuleTemplateError",
    "Span",
    "Tag",
    "Text",
    "TextWrapOptions",
    "Token",
    "TokenKind",
    "ValidationError",
    "__version__",
    "compile_rule",
    "parse",
    "tokenize",
]
