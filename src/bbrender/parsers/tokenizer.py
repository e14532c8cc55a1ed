#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/parsers/tokenizer.py
"""Tokenizer for bracket-tag markup.

The tokenizer makes a single left-to-right pass over the input and splits it
into a flat list of text, opening-tag and closing-tag tokens. It never fails:
a ``[`` that does not start a well-formed tag becomes a one-character text
token and scanning resumes right after it.

Tags are read by a small character state machine rather than a regular
expression. While reading an attribute value, ``[`` raises a bracket-depth
counter and a ``]`` seen at positive depth is kept as part of the value, so
``[img=http://x/a[1].png]`` is one tag with value ``http://x/a[1].png``.

A tag name runs up to the first ``=`` or ``]``; any other character, ``[``
included, is part of it, so ``[a[b]`` is one opening tag named ``a[b``.
Only the exact sequence ``[*]`` is a list marker. ``[*x]`` is an ordinary
tag whose name ``*x`` keeps the asterisk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from bbrender.ast.nodes import Span
from bbrender.constants import LIST_MARKER_NAME

logger = logging.getLogger(__name__)


class TokenKind(str, Enum):
    """Kinds of token produced by the tokenizer."""

    TEXT = "text"
    TAG_OPEN = "tag-open"
    TAG_CLOSE = "tag-close"


class _State(Enum):
    IN_NAME = "in-name"
    IN_VALUE = "in-value"


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Parameters
    ----------
    kind : TokenKind
        Token kind
    raw : str
        Exact source text covered by the token
    span : Span
        Half-open location of ``raw`` in the input
    name : str or None
        Lower-cased, stripped tag name (None for text tokens)
    value : str or None
        Stripped attribute value, or None if the tag had no ``=``

    """

    kind: TokenKind
    raw: str
    span: Span
    name: Optional[str] = None
    value: Optional[str] = None

    @property
    def content(self) -> str:
        """Text content of a text token (same as ``raw``)."""
        return self.raw

    @property
    def is_text(self) -> bool:
        return self.kind is TokenKind.TEXT

    def is_open(self, *names: str) -> bool:
        """Return True for an opening tag, optionally restricted to ``names``."""
        return self.kind is TokenKind.TAG_OPEN and (not names or self.name in names)

    def is_close(self, *names: str) -> bool:
        """Return True for a closing tag, optionally restricted to ``names``."""
        return self.kind is TokenKind.TAG_CLOSE and (not names or self.name in names)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"kind": self.kind.value, "raw": self.raw, "span": self.span.to_dict()}
        if self.kind is not TokenKind.TEXT:
            result["name"] = self.name
            result["value"] = self.value
        return result


class Tokenizer:
    """Split bracket-tag markup into tokens.

    Examples
    --------
        >>> [t.kind.value for t in Tokenizer().tokenize("[b]hi[/b]")]
        ['tag-open', 'text', 'tag-close']

    """

    def tokenize(self, text: str) -> list[Token]:
        """Tokenize ``text``.

        Parameters
        ----------
        text : str
            Markup to scan

        Returns
        -------
        list of Token
            Tokens in input order. Joining their ``raw`` text reproduces
            ``text`` exactly.

        """
        tokens: list[Token] = []
        pos = 0
        length = len(text)

        while pos < length:
            if text[pos] == "[":
                tag = self._read_tag(text, pos)
                if tag is not None:
                    tokens.append(tag)
                    pos = tag.span.end
                else:
                    tokens.append(Token(TokenKind.TEXT, "[", Span(pos, pos + 1)))
                    pos += 1
                continue

            next_bracket = text.find("[", pos)
            if next_bracket == -1:
                next_bracket = length
            tokens.append(Token(TokenKind.TEXT, text[pos:next_bracket], Span(pos, next_bracket)))
            pos = next_bracket

        logger.debug("Tokenized %d characters into %d tokens", length, len(tokens))
        return tokens

    @staticmethod
    def _read_tag(text: str, start: int) -> Optional[Token]:
        """Read one tag starting at the ``[`` at ``start``.

        Returns None if no well-formed tag starts there.
        """
        length = len(text)
        i = start + 1
        closing = False

        if i < length and text[i] == "/":
            closing = True
            i += 1
        elif text.startswith(LIST_MARKER_NAME + "]", i):
            end = i + 2
            return Token(TokenKind.TAG_OPEN, text[start:end], Span(start, end), name=LIST_MARKER_NAME)

        name_start = i
        value_start: Optional[int] = None
        state = _State.IN_NAME
        depth = 0

        while i < length:
            char = text[i]
            if state is _State.IN_NAME:
                if char == "]":
                    break
                if char == "=":
                    state = _State.IN_VALUE
                    value_start = i + 1
            else:
                if char == "[":
                    depth += 1
                elif char == "]":
                    if depth == 0:
                        break
                    depth -= 1
            i += 1
        else:
            return None

        end = i + 1
        name_end = value_start - 1 if value_start is not None else i
        name = text[name_start:name_end].strip().lower()
        value = text[value_start:i].strip() if value_start is not None else None
        kind = TokenKind.TAG_CLOSE if closing else TokenKind.TAG_OPEN
        return Token(kind, text[start:end], Span(start, end), name=name, value=value)


def tokenize(text: str) -> list[Token]:
    """Tokenize ``text`` with a default ``Tokenizer``."""
    return Tokenizer().tokenize(text)
