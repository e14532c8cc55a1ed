#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/parsers/tree_builder.py
"""Build a node tree from a token list.

The builder keeps an explicit stack of open tag frames with the root at the
bottom. Text tokens go to the top frame, opening tags push a frame, closing
tags pop one according to the configured strategy:

- Lenient (default): close the nearest open tag of the same name, silently
  closing every tag opened after it. A closing tag that matches nothing
  becomes literal text and an ``unexpected-closing`` diagnostic.
- Strict: only the innermost open tag may be closed. Anything else becomes
  literal text and an ``unexpected-closing`` diagnostic.

At the end of input, lenient mode leaves unclosed tags in the tree (they
have no ``closing_span``). Strict mode rewrites each one, innermost first,
into a text node holding its opening markup followed by its serialized
children, and reports ``unclosed-tag`` for it.

List markers (``[*]``) never push a frame. The builder absorbs the raw
tokens that follow, up to the next marker or ``list`` boundary, into the
marker node.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

from bbrender.ast.nodes import Node, Pointer, Root, Tag, Text
from bbrender.ast.visitors import to_source
from bbrender.constants import LIST_MARKER_NAME, LIST_TAG_NAME
from bbrender.diagnostics import Diagnostic, DiagnosticKind
from bbrender.parsers.tokenizer import Token, TokenKind

logger = logging.getLogger(__name__)

ChildSerializer = Callable[[Node], str]


@dataclass
class _Frame:
    node: Union[Root, Tag]
    pointer: Optional[Pointer]

    def next_child_pointer(self) -> Pointer:
        index = len(self.node.children)
        if self.pointer is None:
            return Pointer(index=index, path=str(index))
        return self.pointer.child(index)


def _ends_list_item(token: Token) -> bool:
    return token.is_open(LIST_MARKER_NAME, LIST_TAG_NAME) or token.is_close(LIST_TAG_NAME)


class TreeBuilder:
    """Turn tokens into a ``Root`` tree, recording structural diagnostics.

    Parameters
    ----------
    strict_closing : bool, default False
        Use the strict closing-tag strategy instead of the lenient one
    serialize_child : callable, optional
        Converts a child node to text when strict mode rewrites an unclosed
        tag. Defaults to reproducing the child's source markup.

    """

    def __init__(self, strict_closing: bool = False, serialize_child: Optional[ChildSerializer] = None):
        self.strict_closing = strict_closing
        self.serialize_child: ChildSerializer = serialize_child or to_source

    def build(
        self,
        tokens: Sequence[Token],
        diagnostics: Optional[list[Diagnostic]] = None,
        base_pointer: Optional[Pointer] = None,
    ) -> Root:
        """Build the tree for ``tokens``.

        Parameters
        ----------
        tokens : sequence of Token
            Tokens from the tokenizer
        diagnostics : list of Diagnostic, optional
            Sink that structural diagnostics are appended to
        base_pointer : Pointer, optional
            Pointer of the node the tokens belong to, when building a
            subtree (e.g. a list item body). Child pointers extend it.

        Returns
        -------
        Root
            The root of the new tree

        """
        if diagnostics is None:
            diagnostics = []

        root = Root()
        stack: list[_Frame] = [_Frame(root, base_pointer)]
        i = 0

        while i < len(tokens):
            token = tokens[i]
            frame = stack[-1]

            if token.kind is TokenKind.TEXT:
                frame.node.children.append(Text(content=token.content, span=token.span))
            elif token.is_open(LIST_MARKER_NAME):
                marker = Tag(name=LIST_MARKER_NAME, span=token.span)
                i += 1
                while i < len(tokens) and not _ends_list_item(tokens[i]):
                    marker.children.append(tokens[i])
                    i += 1
                frame.node.children.append(marker)
                continue
            elif token.kind is TokenKind.TAG_OPEN:
                node = Tag(name=token.name or "", value=token.value, span=token.span)
                pointer = frame.next_child_pointer()
                frame.node.children.append(node)
                stack.append(_Frame(node, pointer))
            else:
                self._close(token, stack, diagnostics)
            i += 1

        if self.strict_closing:
            self._rewrite_unclosed(stack, diagnostics)

        return root

    def _close(self, token: Token, stack: list[_Frame], diagnostics: list[Diagnostic]) -> None:
        name = token.name or ""

        if self.strict_closing:
            top = stack[-1]
            if len(stack) > 1 and isinstance(top.node, Tag) and top.node.name == name:
                top.node.closing_span = token.span
                stack.pop()
                return
        else:
            for depth in range(len(stack) - 1, 0, -1):
                node = stack[depth].node
                if isinstance(node, Tag) and node.name == name:
                    node.closing_span = token.span
                    del stack[depth:]
                    return

        frame = stack[-1]
        pointer = frame.next_child_pointer()
        literal = Text(content=f"[/{name}]", span=token.span)
        frame.node.children.append(literal)
        diagnostics.append(
            Diagnostic(
                kind=DiagnosticKind.UNEXPECTED_CLOSING,
                tag_name=name,
                span=token.span,
                pointer=pointer,
                node=literal,
            )
        )

    def _rewrite_unclosed(self, stack: list[_Frame], diagnostics: list[Diagnostic]) -> None:
        for depth in range(len(stack) - 1, 0, -1):
            frame = stack[depth]
            node = frame.node
            assert isinstance(node, Tag)
            parent = stack[depth - 1].node

            for index, child in enumerate(parent.children):
                if child is node:
                    content = node.opening_markup + "".join(self.serialize_child(c) for c in node.children)
                    parent.children[index] = Text(content=content, span=node.span)
                    logger.debug("Rewrote unclosed [%s] tag as text", node.name)
                    break

            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.UNCLOSED_TAG,
                    tag_name=node.name,
                    span=node.span,
                    pointer=frame.pointer,
                    node=node,
                )
            )
