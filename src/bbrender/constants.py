#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the bbrender library.

This module centralizes the hardcoded values and default configuration
constants used across bbrender. Constants are organized by category:

1. Type Definitions - Literal types and type aliases
2. Tag Grammar - reserved tag names and template grammar
3. Parse Behavior - defaults for ``ParseOptions``
4. Text Wrapping - defaults for the wrap preprocessor
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

DiagnosticKindName = Literal["unknown-tag", "unexpected-closing", "unclosed-tag", "forbidden"]
TokenKindName = Literal["text", "tag-open", "tag-close"]

# =============================================================================
# Tag Grammar
# =============================================================================

# Reserved name of the list marker token ``[*]``
LIST_MARKER_NAME = "*"

# Tag whose open/close boundaries stop list-marker absorption
LIST_TAG_NAME = "list"

# Rule templates look like ``[tagname attr-part]content-part``
RULE_TEMPLATE_PATTERN = r"^\[([a-z0-9*]+)(.*?)\](.*?)$"

# ``$identifier`` placeholders inside templates and render strings
PLACEHOLDER_PATTERN = r"\$([A-Za-z0-9_]+)"

DEFAULT_FORBIDDEN_MESSAGE = "This is forbidden."

# =============================================================================
# Parse Behavior
# =============================================================================

DEFAULT_WRAP_TEXT = False
DEFAULT_STRICT_UNKNOWN_TAG = True
DEFAULT_STRICT_CLOSING_TAG = False
DEFAULT_PARSE_ATTRIBUTES = True

# =============================================================================
# Text Wrapping
# =============================================================================

# Internal stand-in for newlines while the wrap preprocessor splits lines
NEWLINE_SENTINEL = "<<<NEWLINE>>>"

# Implicit container tag put around loose inline runs
WRAP_TAG_NAME = "text"

DEFAULT_INLINE_TAGS: tuple[str, ...] = ("b", "i", "s", "u", "link", "c", "spoiler", "img", "size", "color")
DEFAULT_RECURSIVE_TAGS: tuple[str, ...] = ("box", "quote", "notice", "centre", "spoilerbox")
