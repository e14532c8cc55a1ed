#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/ast/nodes.py
"""Tree node classes for parsed bracket-tag markup.

A parse produces exactly one ``Root`` whose children are ``Text`` and
``Tag`` nodes. Tags hold their own children in document order.

List markers (``[*]``) are the one exception to the tree shape: they are
``Tag`` nodes named ``*`` whose ``children`` are the raw tokens absorbed up
to the next marker or list boundary, not built nodes. Whatever renders a
list item builds those tokens into a subtree when it needs one.

All nodes support the visitor pattern through ``accept``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from bbrender.constants import LIST_MARKER_NAME


@dataclass(frozen=True)
class Span:
    """Half-open ``[start, end)`` character range in the parsed input."""

    start: int
    end: int

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class Pointer:
    """Structural coordinates of a node.

    Parameters
    ----------
    index : int
        Position of the node among its siblings
    path : str
        Dot-joined chain of sibling indices from the root down to the node,
        e.g. ``"0.2.1"``

    """

    index: int
    path: str

    @property
    def depth(self) -> int:
        """Number of path segments minus one; top-level nodes are depth 0."""
        return len(self.path.split(".")) - 1

    def child(self, index: int) -> Pointer:
        """Return the pointer of this node's child at ``index``."""
        return Pointer(index=index, path=f"{self.path}.{index}")

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "path": self.path, "depth": self.depth}


class Node(ABC):
    """Base class for all tree nodes."""

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@dataclass
class Root(Node):
    """Root of a parsed document. Carries no span."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_root(self)


@dataclass
class Text(Node):
    """Literal text run.

    Parameters
    ----------
    content : str
        Text exactly as it should appear before line-break injection
    span : Span or None
        Location of the text in the input

    """

    content: str
    span: Optional[Span] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_text(self)


@dataclass
class Tag(Node):
    """Bracket tag with its children.

    Parameters
    ----------
    name : str
        Lower-cased tag name
    value : str or None
        Attribute value after ``=``, or None if the tag had no ``=``
    children : list
        Child nodes, or raw tokens for a list marker
    span : Span or None
        Location of the opening tag
    closing_span : Span or None
        Location of the matching closing tag, set only when one was consumed

    """

    name: str
    value: Optional[str] = None
    children: list[Any] = field(default_factory=list)
    span: Optional[Span] = None
    closing_span: Optional[Span] = None

    @property
    def is_list_marker(self) -> bool:
        return self.name == LIST_MARKER_NAME

    @property
    def opening_markup(self) -> str:
        """Source-style opening tag, ``[name]`` or ``[name=value]``."""
        attr = f"={self.value}" if self.value else ""
        return f"[{self.name}{attr}]"

    @property
    def closing_markup(self) -> str:
        return f"[/{self.name}]"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_tag(self)
