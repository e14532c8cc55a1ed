#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/diagnostics.py
"""Non-fatal findings reported by a parse.

Markup problems never raise. The tree builder and renderer append a
``Diagnostic`` to a shared list instead and carry on with best-effort
output. ``Diagnostic.to_dict`` gives the stable wire shape consumers and
UIs should rely on::

    {"kind": "unknown-tag", "tagName": "foo",
     "pointer": {"index": 0, "path": "0", "depth": 0},
     "span": {"start": 0, "end": 5}}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from bbrender.ast.nodes import Pointer, Span


class DiagnosticKind(str, Enum):
    """Kinds of diagnostic a parse can produce."""

    UNKNOWN_TAG = "unknown-tag"
    UNEXPECTED_CLOSING = "unexpected-closing"
    UNCLOSED_TAG = "unclosed-tag"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class Diagnostic:
    """A structural or policy anomaly found while parsing or rendering.

    Parameters
    ----------
    kind : DiagnosticKind
        What went wrong
    tag_name : str
        Name of the offending tag
    span : Span or None
        Location of the offending tag in the parsed input
    pointer : Pointer or None
        Structural location of the node the diagnostic is about
    message : str or None
        Human-readable message (set for forbidden-rule violations)
    node : Any
        The node the diagnostic refers to. Not part of the wire form.

    """

    kind: DiagnosticKind
    tag_name: str
    span: Optional[Span] = None
    pointer: Optional[Pointer] = None
    message: Optional[str] = None
    node: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready wire representation."""
        result: dict[str, Any] = {
            "kind": self.kind.value,
            "tagName": self.tag_name,
            "pointer": self.pointer.to_dict() if self.pointer is not None else None,
            "span": self.span.to_dict() if self.span is not None else None,
        }
        if self.message is not None:
            result["message"] = self.message
        return result
