#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/ast/__init__.py
"""Tree representation of parsed bracket-tag markup.

- nodes: ``Root``, ``Text`` and ``Tag`` node classes plus ``Span``/``Pointer``
- visitors: visitor base class and source-markup reproduction
- serialization: conversion of trees to plain dictionaries / JSON
"""

from bbrender.ast.nodes import Node, Pointer, Root, Span, Tag, Text
from bbrender.ast.serialization import tree_to_dict, tree_to_json
from bbrender.ast.visitors import NodeVisitor, SourceVisitor, to_source

__all__ = [
    "Node",
    "NodeVisitor",
    "Pointer",
    "Root",
    "SourceVisitor",
    "Span",
    "Tag",
    "Text",
    "to_source",
    "tree_to_dict",
    "tree_to_json",
]
