#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/bbrender/renderers/__init__.py
"""Renderers that turn parsed trees into output strings.

- base: ``RenderApi`` and ``NodeRefs``, the values passed to user callbacks
- rules: ``RuleRenderer``, the rule-driven tree renderer

Import ``RuleRenderer`` from ``bbrender.renderers.rules``; this package does
not import it eagerly so that ``bbrender.forbidden`` can depend on the
callback types without a cycle.
"""

from bbrender.renderers.base import NodeRefs, RenderApi

__all__ = ["NodeRefs", "RenderApi"]
