#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/ast/serialization.py
"""Convert trees to plain dictionaries.

The dictionaries only hold JSON-compatible values, so a parse result can be
shipped to a UI or logged with ``json.dumps``.

Examples
--------
    >>> from bbrender.ast import Root, Text
    >>> tree_to_dict(Root(children=[Text(content="hi")]))
    {'node_type': 'Root', 'children': [{'node_type': 'Text', 'content': 'hi', 'span': None}]}

"""

from __future__ import annotations

import json
from typing import Any

from bbrender.ast.nodes import Node, Root, Span, Tag, Text


def _span_to_dict(span: Span | None) -> dict[str, int] | None:
    return span.to_dict() if span is not None else None


def tree_to_dict(node: Any) -> dict[str, Any]:
    """Serialize a node (and its descendants) to a dictionary.

    List-marker children are tokens and are serialized with
    ``Token.to_dict``.

    Parameters
    ----------
    node : Node
        Node to serialize

    Returns
    -------
    dict
        Serialized node

    Raises
    ------
    TypeError
        If ``node`` is not a known node type

    """
    if isinstance(node, Root):
        return {"node_type": "Root", "children": [tree_to_dict(child) for child in node.children]}

    if isinstance(node, Text):
        return {"node_type": "Text", "content": node.content, "span": _span_to_dict(node.span)}

    if isinstance(node, Tag):
        if node.is_list_marker:
            children = [token.to_dict() for token in node.children]
        else:
            children = [tree_to_dict(child) for child in node.children]
        return {
            "node_type": "Tag",
            "name": node.name,
            "value": node.value,
            "children": children,
            "span": _span_to_dict(node.span),
            "closing_span": _span_to_dict(node.closing_span),
        }

    raise TypeError(f"Cannot serialize {type(node).__name__}")


def tree_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a node to a JSON string."""
    return json.dumps(tree_to_dict(node), indent=indent)
