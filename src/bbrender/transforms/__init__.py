#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/transforms/__init__.py
"""Source-level transforms applied before tokenizing."""

from bbrender.transforms.text_wrap import TextWrapPreprocessor, wrap_text

__all__ = ["TextWrapPreprocessor", "wrap_text"]
