#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/renderers/rules.py
"""Rule-driven tree renderer.

``RuleRenderer`` walks a tree depth first and produces the output string.
Children are always rendered before their parent, and every node appends
its diagnostics to one list shared across the whole walk, so diagnostics
come out in bottom-up document order. The walk keeps its own stack of
pending nodes instead of recursing, so nesting depth is not bounded by the
interpreter's recursion limit.

For each node:

- Text: passed through, or split on newlines with the line-break callback's
  output appended after every line but the last.
- Tag with no rule: stripped to its rendered content and reported as
  ``unknown-tag`` in strict mode; written back as literal markup otherwise.
- Tag with a rule: forbidden rules are checked first and may replace the
  output. Otherwise the rule's variables are bound and its template is
  filled in, or its callback is called.
- List marker: its raw tokens are built into a subtree on the fly and that
  subtree is rendered as the marker's content.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Union

from bbrender.ast.nodes import Node, Pointer, Root, Tag, Text
from bbrender.ast.visitors import NodeVisitor
from bbrender.diagnostics import Diagnostic, DiagnosticKind
from bbrender.renderers.base import NodeRefs, RenderApi
from bbrender.rules import CallbackBody, CompiledRule, find_rule

if TYPE_CHECKING:
    from bbrender.forbidden import ForbiddenValidator
    from bbrender.parsers.tokenizer import Token

logger = logging.getLogger(__name__)

LineBreakCallback = Callable[[RenderApi], str]
AttributeParser = Callable[[str], str]
SubtreeBuilder = Callable[["Sequence[Token]", list[Diagnostic], Optional[Pointer]], Root]


@dataclass(frozen=True)
class _RenderFrame:
    """Where the node being rendered sits in the tree."""

    index: int = 0
    path: str = "0"
    parent: Optional[Tag] = None
    siblings: Sequence[Any] = ()

    @property
    def pointer(self) -> Pointer:
        return Pointer(index=self.index, path=self.path)


@dataclass
class _Pending:
    """A Root or Tag whose children are still being rendered."""

    node: Union[Root, Tag]
    frame: _RenderFrame
    children: Sequence[Any]
    outputs: list[str] = field(default_factory=list)


class RuleRenderer(NodeVisitor):
    """Render a tree with a set of compiled rules.

    A renderer holds per-walk state and is meant to be used for one tree at a
    time; the parser creates a fresh one for every parse.

    Parameters
    ----------
    rules : sequence of CompiledRule
        Rules in registration order; the first rule with a tag's name wins
    forbidden : ForbiddenValidator, optional
        Policy checks run against every tag that has a rule
    line_break : callable, optional
        ``line_break(api) -> str`` inserted after each line of text
    strict_unknown_tag : bool, default True
        Strip and report tags with no rule instead of writing them back
    parse_attribute : callable, optional
        ``parse_attribute(value) -> str`` used to bind attribute variables of
        rules that re-parse their attribute. Without it the raw value is used.
    build_subtree : callable, optional
        ``build_subtree(tokens, diagnostics, pointer) -> Root`` used to turn a
        list marker's tokens into renderable nodes

    """

    def __init__(
        self,
        rules: Sequence[CompiledRule],
        forbidden: Optional[ForbiddenValidator] = None,
        line_break: Optional[LineBreakCallback] = None,
        strict_unknown_tag: bool = True,
        parse_attribute: Optional[AttributeParser] = None,
        build_subtree: Optional[SubtreeBuilder] = None,
    ):
        self.rules = rules
        self.forbidden = forbidden
        self.line_break = line_break
        self.strict_unknown_tag = strict_unknown_tag
        self.parse_attribute = parse_attribute
        self.build_subtree = build_subtree

        self._diagnostics: list[Diagnostic] = []
        self._root: Optional[Root] = None
        self._frame = _RenderFrame()

    def render(self, root: Root, diagnostics: Optional[list[Diagnostic]] = None) -> str:
        """Render a whole tree.

        Parameters
        ----------
        root : Root
            Tree to render
        diagnostics : list of Diagnostic, optional
            Sink that rendering diagnostics are appended to

        Returns
        -------
        str
            Rendered output

        """
        self._diagnostics = diagnostics if diagnostics is not None else []
        self._root = root
        self._frame = _RenderFrame()
        return root.accept(self)

    def render_node(self, node: Node) -> str:
        """Render a single detached node, discarding its diagnostics."""
        self._diagnostics = []
        self._root = None
        self._frame = _RenderFrame()
        return node.accept(self)

    def visit_root(self, node: Root) -> str:
        return self._walk(node)

    def visit_text(self, node: Text) -> str:
        if self.line_break is None:
            return node.content

        lines = node.content.split("\n")
        if len(lines) > 1 and all(not line.strip() for line in lines):
            # the final empty segment is the tag's own line end
            lines.pop()

        api = self._api(node)
        last = len(lines) - 1
        return "".join(line if i == last else line + self.line_break(api) for i, line in enumerate(lines))

    def visit_tag(self, node: Tag) -> str:
        return self._walk(node)

    def _walk(self, node: Union[Root, Tag]) -> str:
        """Render ``node`` depth first with an explicit stack.

        Each pending entry collects the outputs of its children; once all of
        them are rendered the entry is finished and its output is handed to
        the entry below.
        """
        saved = self._frame
        stack = [self._open(node, saved)]
        output = ""
        try:
            while stack:
                entry = stack[-1]
                if len(entry.outputs) < len(entry.children):
                    index = len(entry.outputs)
                    child = entry.children[index]
                    frame = self._child_frame(entry, index)
                    if isinstance(child, Text):
                        self._frame = frame
                        entry.outputs.append(self.visit_text(child))
                    else:
                        stack.append(self._open(child, frame))
                    continue

                stack.pop()
                self._frame = entry.frame
                if isinstance(entry.node, Tag):
                    output = self._finish_tag(entry.node, "".join(entry.outputs))
                else:
                    output = "".join(entry.outputs)
                if stack:
                    stack[-1].outputs.append(output)
        finally:
            self._frame = saved
        return output

    def _open(self, node: Union[Root, Tag], frame: _RenderFrame) -> _Pending:
        self._frame = frame
        if not (isinstance(node, Tag) and node.is_list_marker):
            return _Pending(node=node, frame=frame, children=node.children)
        if self.build_subtree is None:
            # no builder: the marker's raw token text is its whole content
            return _Pending(node=node, frame=frame, children=(), outputs=["".join(t.raw for t in node.children)])
        subtree = self.build_subtree(node.children, self._diagnostics, frame.pointer)
        return _Pending(node=node, frame=frame, children=subtree.children)

    @staticmethod
    def _child_frame(entry: _Pending, index: int) -> _RenderFrame:
        if isinstance(entry.node, Root):
            return _RenderFrame(index=index, path=str(index), parent=None, siblings=entry.children)
        return _RenderFrame(
            index=index,
            path=f"{entry.frame.path}.{index}",
            parent=entry.node,
            siblings=entry.children,
        )

    def _finish_tag(self, node: Tag, inner: str) -> str:
        rule = find_rule(self.rules, node.name)
        if rule is None:
            return self._render_unknown(node, inner)

        api = self._api(node)

        if self.forbidden is not None and len(self.forbidden):
            result = self.forbidden.evaluate(api)
            if result.matched:
                self._diagnostics.extend(result.diagnostics)
                return result.override if result.override is not None else ""

        variables: dict[str, str] = {}
        if rule.attr_names:
            attribute = self._bind_attribute(rule, node)
            for name in rule.attr_names:
                variables[name] = attribute
        for name in rule.content_names:
            variables[name] = inner.strip()

        if isinstance(rule.body, CallbackBody):
            output = rule.body.callback(replace(api, variables=variables))
            return "" if output is None else str(output)

        return rule.body.substitute(rule.full_vars, variables)

    def _render_unknown(self, node: Tag, inner: str) -> str:
        if self.strict_unknown_tag:
            self._diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.UNKNOWN_TAG,
                    tag_name=node.name,
                    span=node.span,
                    pointer=self._frame.pointer,
                    node=node,
                )
            )
            return inner

        closing = node.closing_markup if node.closing_span is not None else ""
        return f"{node.opening_markup}{inner}{closing}"

    def _bind_attribute(self, rule: CompiledRule, node: Tag) -> str:
        value = node.value or ""
        if rule.parse_attributes and self.parse_attribute is not None and value:
            return self.parse_attribute(value)
        return value

    def _api(self, node: Node) -> RenderApi:
        frame = self._frame
        siblings = frame.siblings
        next_node = siblings[frame.index + 1] if frame.index + 1 < len(siblings) else None
        previous_node = siblings[frame.index - 1] if 0 < frame.index <= len(siblings) else None
        refs = NodeRefs(
            current=node,
            parent=frame.parent,
            root=self._root,
            next=next_node,
            previous=previous_node,
        )
        return RenderApi(node=refs, pointer=frame.pointer)
