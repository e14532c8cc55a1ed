#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/ast/visitors.py
"""Visitor pattern base class for tree traversal.

Visitors keep the algorithms that walk the tree (rendering, source
reproduction) separate from the node classes themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from bbrender.ast.nodes import Root, Tag, Text


class NodeVisitor(ABC):
    """Abstract base class for tree visitors.

    Examples
    --------
    Visitor that collects tag names:

        >>> class TagNames(NodeVisitor):
        ...     def __init__(self):
        ...         self.names = []
        ...
        ...     def visit_root(self, node):
        ...         for child in node.children:
        ...             child.accept(self)
        ...
        ...     def visit_text(self, node):
        ...         pass
        ...
        ...     def visit_tag(self, node):
        ...         self.names.append(node.name)
        ...         if not node.is_list_marker:
        ...             for child in node.children:
        ...                 child.accept(self)

    """

    @abstractmethod
    def visit_root(self, node: Root) -> Any:
        """Visit the Root node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_tag(self, node: Tag) -> Any:
        """Visit a Tag node (including list markers)."""
        pass


class SourceVisitor(NodeVisitor):
    """Reproduce the bracket markup a subtree was parsed from.

    Tags are written back as ``[name=value]children[/name]``; the closing
    tag only appears when one was actually consumed. List markers write
    back the raw text of the tokens they absorbed.
    """

    def visit_root(self, node: Root) -> str:
        return "".join(child.accept(self) for child in node.children)

    def visit_text(self, node: Text) -> str:
        return node.content

    def visit_tag(self, node: Tag) -> str:
        if node.is_list_marker:
            return node.opening_markup + "".join(token.raw for token in node.children)

        inner = "".join(child.accept(self) for child in node.children)
        closing = node.closing_markup if node.closing_span is not None else ""
        return f"{node.opening_markup}{inner}{closing}"


def to_source(node: Root | Text | Tag) -> str:
    """Return the source markup for ``node`` and its descendants."""
    return node.accept(SourceVisitor())
