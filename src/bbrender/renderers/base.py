#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/renderers/base.py
"""Values handed to user callbacks during rendering.

Rule callbacks, line-break callbacks, forbidden-rule predicates and their
handlers all receive a ``RenderApi`` describing the node being rendered and
where it sits in the tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from bbrender.ast.nodes import Pointer, Root


@dataclass(frozen=True)
class NodeRefs:
    """References to the current node and its neighbours.

    Parameters
    ----------
    current : Any
        The node being rendered
    parent : Any
        Its parent tag, or None at the top level
    root : Root
        Root of the tree being rendered
    next : Any
        Following sibling in the parent's child list, or None
    previous : Any
        Preceding sibling in the parent's child list, or None

    """

    current: Any
    parent: Any = None
    root: Optional[Root] = None
    next: Any = None
    previous: Any = None


@dataclass(frozen=True)
class RenderApi:
    """Everything a callback may inspect about the node being rendered.

    Parameters
    ----------
    node : NodeRefs
        The node and its neighbours
    pointer : Pointer
        Structural coordinates of the node
    variables : dict
        Bound template variables. Only populated for rule render callbacks.

    Examples
    --------
    Forbid images nested inside quotes:

        >>> def image_in_quote(api: RenderApi) -> bool:
        ...     parent = api.node.parent
        ...     return api.node.current.name == "img" and parent is not None and parent.name == "quote"

    """

    node: NodeRefs
    pointer: Pointer
    variables: dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> Optional[str]:
        """Tag name of the current node, or None for text."""
        return getattr(self.node.current, "name", None)

    @property
    def value(self) -> Optional[str]:
        """Attribute value of the current node, or None."""
        return getattr(self.node.current, "value", None)
