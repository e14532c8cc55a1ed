#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/parsers/bbcode.py
"""BBCode parser facade.

``BBCodeParser`` holds the configuration (rules, forbidden rules, the
line-break callback and the text-wrap tag lists) and runs the pipeline for
each ``parse`` call:

    raw text -> (optional) TextWrapPreprocessor -> Tokenizer -> TreeBuilder
    -> RuleRenderer -> ParseResult

Configuration errors raise immediately when the configuration is set.
Problems in the markup never raise; they are returned as diagnostics.

A parse only reads the configuration, so one configured parser can serve
concurrent parses as long as nobody reconfigures it mid-call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from bbrender.ast.nodes import Node, Pointer, Root, Text
from bbrender.ast.serialization import tree_to_dict
from bbrender.constants import DEFAULT_FORBIDDEN_MESSAGE
from bbrender.diagnostics import Diagnostic
from bbrender.exceptions import InvalidOptionsError, ValidationError
from bbrender.forbidden import ForbiddenHandler, ForbiddenPredicate, ForbiddenRule, ForbiddenValidator
from bbrender.options.bbcode import ParseOptions, TextWrapOptions
from bbrender.parsers.tokenizer import Token, Tokenizer
from bbrender.parsers.tree_builder import TreeBuilder
from bbrender.renderers.rules import LineBreakCallback, RuleRenderer
from bbrender.rules import CompiledRule, RuleDefinition, compile_rule, compile_rules
from bbrender.transforms.text_wrap import TextWrapPreprocessor

logger = logging.getLogger(__name__)

RuleLike = Union[RuleDefinition, Mapping[str, Any]]


@dataclass
class ParseResult:
    """Everything a parse produced.

    Parameters
    ----------
    output : str
        Rendered output
    diagnostics : list of Diagnostic
        Structural and policy findings, in the order they were found
    tokens : list of Token
        Tokens of the (preprocessed) input
    tree : Root
        Tree the output was rendered from
    preprocessed_input : str
        The text that was actually tokenized (the input itself unless
        ``wrap_text`` was on)

    """

    output: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)
    tree: Root = field(default_factory=Root)
    preprocessed_input: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dictionary of the result."""
        return {
            "output": self.output,
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
            "tokens": [token.to_dict() for token in self.tokens],
            "tree": tree_to_dict(self.tree),
            "preprocessedInput": self.preprocessed_input,
        }


class BBCodeParser:
    """Render bracket-tag markup with a configurable rule set.

    Parameters
    ----------
    rules : list of RuleDefinition or mapping, optional
        Initial rule set, in lookup order

    Raises
    ------
    ValidationError
        If ``rules`` is not a list or a rule is malformed
    RuleTemplateError
        If a rule template does not have the ``[tag ...]...`` shape

    Examples
    --------
    Basic rendering:

        >>> parser = BBCodeParser([{"template": "[b]$content[/b]", "render": "<b>$content</b>"}])
        >>> parser.parse("[b]hi[/b]").output
        '<b>hi</b>'

    Line breaks and forbidden rules:

        >>> parser.line_break_template = lambda api: "<br>"
        >>> parser.add_forbidden(lambda api: api.pointer.depth > 2, "Too deeply nested.")

    """

    def __init__(self, rules: Sequence[RuleLike] = ()):
        self._rules: list[CompiledRule] = []
        self._forbidden = ForbiddenValidator()
        self._line_break: Optional[LineBreakCallback] = None
        self._text_wrap_tags = TextWrapOptions()
        self._tokenizer = Tokenizer()
        self.set_rules(rules)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def rules(self) -> tuple[CompiledRule, ...]:
        """Compiled rules in lookup order."""
        return tuple(self._rules)

    def set_rules(self, rules: Sequence[RuleLike]) -> None:
        """Replace the whole rule set.

        Raises
        ------
        ValidationError
            If ``rules`` is not a list or a rule is malformed

        """
        self._rules = compile_rules(rules)  # type: ignore[arg-type]

    def add_rule(self, rule: RuleLike) -> CompiledRule:
        """Compile ``rule`` and append it to the rule set.

        A rule whose name is already taken is appended but never used.
        """
        compiled = compile_rule(rule)
        if any(existing.name == compiled.name for existing in self._rules):
            logger.debug("Rule [%s] is shadowed by an earlier rule with the same name", compiled.name)
        self._rules.append(compiled)
        return compiled

    @property
    def line_break_template(self) -> Optional[LineBreakCallback]:
        return self._line_break

    @line_break_template.setter
    def line_break_template(self, callback: LineBreakCallback) -> None:
        if not callable(callback):
            raise ValidationError(
                "line_break_template must be callable", parameter_name="line_break_template", parameter_value=callback
            )
        self._line_break = callback

    @property
    def text_wrap_tags(self) -> TextWrapOptions:
        return self._text_wrap_tags

    @text_wrap_tags.setter
    def text_wrap_tags(self, value: Union[TextWrapOptions, Mapping[str, Any]]) -> None:
        if isinstance(value, TextWrapOptions):
            self._text_wrap_tags = value
        else:
            self._text_wrap_tags = TextWrapOptions.from_mapping(value)

    @property
    def forbidden_rules(self) -> tuple[ForbiddenRule, ...]:
        return self._forbidden.rules

    def forbidden(self, setup: Callable[..., None]) -> None:
        """Register forbidden rules through a ``setup(check)`` callback.

        Examples
        --------
            >>> def setup(check):
            ...     check(lambda api: api.name == "img", "No images.")
            ...     check(lambda api: api.name == "url", "No links.").then(lambda api: "[link]")
            >>> parser.forbidden(setup)

        """
        self._forbidden.register(setup)

    def add_forbidden(
        self,
        predicate: ForbiddenPredicate,
        message: str = DEFAULT_FORBIDDEN_MESSAGE,
        handler: Optional[ForbiddenHandler] = None,
    ) -> ForbiddenRule:
        """Append one forbidden rule."""
        return self._forbidden.add(predicate, message, handler)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, text: str, options: Optional[ParseOptions] = None, **overrides: Any) -> ParseResult:
        """Parse and render ``text``.

        Parameters
        ----------
        text : str
            Markup to render
        options : ParseOptions, optional
            Parse options. Defaults to ``ParseOptions()``.
        **overrides
            Individual option fields (``wrap_text``, ``strict_unknown_tag``,
            ``strict_closing_tag``) overriding ``options``

        Returns
        -------
        ParseResult
            Output, diagnostics, tokens, tree and preprocessed input

        Raises
        ------
        ValidationError
            If ``text`` is not a string or an override is unknown
        InvalidOptionsError
            If ``options`` is not a ParseOptions

        """
        if not isinstance(text, str):
            raise ValidationError(
                f"parse() expects a string, got {type(text).__name__}", parameter_name="text", parameter_value=text
            )
        if options is not None and not isinstance(options, ParseOptions):
            raise InvalidOptionsError(expected_type=ParseOptions, received_type=type(options))
        options = options or ParseOptions()
        if overrides:
            options = options.create_updated(**overrides)

        source = text
        if options.wrap_text:
            source = TextWrapPreprocessor(self._text_wrap_tags).process(text)

        diagnostics: list[Diagnostic] = []
        tokens = self._tokenizer.tokenize(source)
        tree = self._tree_builder(options).build(tokens, diagnostics)
        output = self._renderer(options).render(tree, diagnostics)

        logger.debug("Parsed %d tokens with %d diagnostics", len(tokens), len(diagnostics))
        return ParseResult(
            output=output,
            diagnostics=diagnostics,
            tokens=tokens,
            tree=tree,
            preprocessed_input=source,
        )

    def _tree_builder(self, options: ParseOptions) -> TreeBuilder:
        def serialize_child(child: Node) -> str:
            # closed children of an unclosed tag render exactly as they would in place
            if isinstance(child, Text):
                return child.content
            return self._renderer(options).render_node(child)

        return TreeBuilder(strict_closing=options.strict_closing_tag, serialize_child=serialize_child)

    def _renderer(self, options: ParseOptions) -> RuleRenderer:
        """Create the renderer for one parse.

        Attribute values of rules with ``parse_attributes`` set are rendered
        by a nested ``parse`` call. That call uses ``options`` with
        ``wrap_text=False`` and ``strict_unknown_tag=False``, so bracket text
        in a value that is not a known tag (``a[1].png``) stays literal
        instead of being stripped. Its diagnostics are not added to the
        outer result.
        """
        attribute_options = options.create_updated(wrap_text=False, strict_unknown_tag=False)
        builder = self._tree_builder(options)

        def parse_attribute(value: str) -> str:
            return self.parse(value, attribute_options).output

        def build_subtree(tokens: Sequence[Token], diagnostics: list[Diagnostic], pointer: Optional[Pointer]) -> Root:
            return builder.build(tokens, diagnostics, base_pointer=pointer)

        return RuleRenderer(
            self._rules,
            forbidden=self._forbidden,
            line_break=self._line_break,
            strict_unknown_tag=options.strict_unknown_tag,
            parse_attribute=parse_attribute,
            build_subtree=build_subtree,
        )
