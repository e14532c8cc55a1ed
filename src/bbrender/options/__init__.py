#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for bbrender.

Options are frozen dataclasses; derive variants with ``create_updated``.
"""

from bbrender.options.base import BaseOptions, CloneFrozenMixin
from bbrender.options.bbcode import ParseOptions, TextWrapOptions

__all__ = [
    "BaseOptions",
    "CloneFrozenMixin",
    "ParseOptions",
    "TextWrapOptions",
]
