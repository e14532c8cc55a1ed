#  Copyright (c) 2025 Tom Villani, Ph.D.

# bbrender/options/bbcode.py
"""Configuration options for parsing and rendering bracket-tag markup.

This module defines the per-call ``ParseOptions`` and the ``TextWrapOptions``
that configure the auto-wrap preprocessor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from bbrender.constants import (
    DEFAULT_INLINE_TAGS,
    DEFAULT_RECURSIVE_TAGS,
    DEFAULT_STRICT_CLOSING_TAG,
    DEFAULT_STRICT_UNKNOWN_TAG,
    DEFAULT_WRAP_TEXT,
)
from bbrender.exceptions import ValidationError
from bbrender.options.base import BaseOptions


@dataclass(frozen=True)
class ParseOptions(BaseOptions):
    """Options for a single ``BBCodeParser.parse`` call.

    Parameters
    ----------
    wrap_text : bool, default False
        Run the text-wrap preprocessor on the input before tokenizing.
    strict_unknown_tag : bool, default True
        When True, tags with no matching rule are stripped (their content is
        kept) and reported as ``unknown-tag``. When False they are written
        back as literal markup without a diagnostic.
    strict_closing_tag : bool, default False
        When True, only the innermost open tag may be closed and tags still
        open at the end of input are turned back into literal text with an
        ``unclosed-tag`` diagnostic. When False, a closing tag closes the
        nearest open tag of the same name and unclosed tags stay open.

    Examples
    --------
        >>> options = ParseOptions(strict_closing_tag=True)
        >>> options.create_updated(wrap_text=True).wrap_text
        True

    """

    wrap_text: bool = field(
        default=DEFAULT_WRAP_TEXT,
        metadata={"help": "Wrap loose inline lines in an implicit [text] tag before parsing"},
    )
    strict_unknown_tag: bool = field(
        default=DEFAULT_STRICT_UNKNOWN_TAG,
        metadata={"help": "Strip tags that have no rule and report them as unknown-tag"},
    )
    strict_closing_tag: bool = field(
        default=DEFAULT_STRICT_CLOSING_TAG,
        metadata={"help": "Only allow the innermost open tag to be closed; report unclosed tags"},
    )

    def __post_init__(self) -> None:
        """Validate that every flag is a bool.

        Raises
        ------
        ValidationError
            If a flag is not a bool

        """
        super().__post_init__()
        for name in ("wrap_text", "strict_unknown_tag", "strict_closing_tag"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValidationError(f"{name} must be a bool, got {value!r}", parameter_name=name, parameter_value=value)


def _normalize_names(name: str, values: Any) -> tuple[str, ...]:
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        raise ValidationError(f"{name} must be a list of tag names", parameter_name=name, parameter_value=values)
    for value in values:
        if not isinstance(value, str) or not value:
            raise ValidationError(
                f"{name} entries must be non-empty strings, got {value!r}", parameter_name=name, parameter_value=values
            )
    return tuple(value.lower() for value in values)


@dataclass(frozen=True)
class TextWrapOptions(BaseOptions):
    """Tag-name lists used by the text-wrap preprocessor.

    Parameters
    ----------
    inline : tuple of str
        Tags that may appear on a line that still counts as loose inline
        text and gets wrapped.
    recursive : tuple of str
        Container tags whose bodies are preprocessed recursively and whose
        open/close lines are never wrapped.

    """

    inline: tuple[str, ...] = field(
        default=DEFAULT_INLINE_TAGS,
        metadata={"help": "Inline tag names allowed inside wrapped lines"},
    )
    recursive: tuple[str, ...] = field(
        default=DEFAULT_RECURSIVE_TAGS,
        metadata={"help": "Container tag names whose bodies are wrapped recursively"},
    )

    def __post_init__(self) -> None:
        """Normalize both lists to lower-cased tuples.

        Raises
        ------
        ValidationError
            If either list is not a list/tuple of non-empty strings

        """
        super().__post_init__()
        object.__setattr__(self, "inline", _normalize_names("inline", self.inline))
        object.__setattr__(self, "recursive", _normalize_names("recursive", self.recursive))

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any]) -> TextWrapOptions:
        """Build options from a ``{"inline": [...], "recursive": [...]}`` mapping.

        Raises
        ------
        ValidationError
            If either key is missing

        """
        if not isinstance(value, Mapping) or "inline" not in value or "recursive" not in value:
            raise ValidationError(
                "text_wrap_tags must have 'inline' and 'recursive' lists",
                parameter_name="text_wrap_tags",
                parameter_value=value,
            )
        return cls(inline=value["inline"], recursive=value["recursive"])
