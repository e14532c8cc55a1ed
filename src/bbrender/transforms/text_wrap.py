#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/transforms/text_wrap.py
"""Wrap loose inline text in an implicit ``[text]`` container.

This preprocessor runs on the raw markup before tokenizing. Consecutive
lines made only of text and inline tags are joined and wrapped in
``[text]...[/text]`` so a rule for ``text`` can render them as paragraphs.
Container tags, list-marker lines and blank lines are left alone and end
the current run.

The pass works line by line:

1. Newlines are swapped for a sentinel so whole bodies can be matched and
   re-split safely.
2. Every ``[tag(=attr)?]...[/tag]`` pair of a container tag has its body
   processed recursively first. Pairs are found with one non-greedy pattern
   per sweep, so a container nested in a container of the same name closes
   at the first matching closer.
3. The remaining lines are walked, buffering runs of inline-only lines and
   flushing them wrapped whenever anything else is met.
4. Sentinels are turned back into newlines.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from bbrender.constants import LIST_MARKER_NAME, NEWLINE_SENTINEL, WRAP_TAG_NAME
from bbrender.options.bbcode import TextWrapOptions

logger = logging.getLogger(__name__)

_NEWLINE_RE = re.compile(r"\r?\n")
_TAG_NAME_RE = re.compile(r"\[/?([a-zA-Z0-9*]+)[^\]]*\]")
_LIST_LINE_RE = re.compile(r"^\s*\[" + re.escape(LIST_MARKER_NAME) + r"\]")

_WRAP_OPEN = f"[{WRAP_TAG_NAME}]"
_WRAP_CLOSE = f"[/{WRAP_TAG_NAME}]"


class TextWrapPreprocessor:
    """Auto-wrap loose inline lines of markup.

    Parameters
    ----------
    options : TextWrapOptions, optional
        Inline and container tag names. Defaults to ``TextWrapOptions()``.

    Examples
    --------
        >>> TextWrapPreprocessor().process("Hello [b]world[/b]")
        '[text]Hello [b]world[/b][/text]'

    """

    def __init__(self, options: Optional[TextWrapOptions] = None):
        self.options = options or TextWrapOptions()
        self._inline = frozenset(self.options.inline) | {WRAP_TAG_NAME}

        names = "|".join(re.escape(name) for name in self.options.recursive)
        self._container_re = re.compile(
            rf"\[({names})(=(?:[^\[\]]|\[[^\[\]]*\])*)?\](.*?)\[/\1\]",
            re.IGNORECASE | re.DOTALL,
        )
        self._open_line_re = re.compile(rf"^\[({names})(=.*)?\Z", re.IGNORECASE)
        self._close_line_re = re.compile(rf"^\[/({names})\]\Z", re.IGNORECASE)

    def process(self, text: str) -> str:
        """Return ``text`` with loose inline runs wrapped."""
        text = _NEWLINE_RE.sub(NEWLINE_SENTINEL, text)
        if self.options.recursive:
            text = self._container_re.sub(self._process_container, text)

        wrapped = self._wrap_lines(text.split(NEWLINE_SENTINEL))
        return NEWLINE_SENTINEL.join(wrapped).replace(NEWLINE_SENTINEL, "\n")

    def _process_container(self, match: re.Match[str]) -> str:
        tag, attr, body = match.group(1), match.group(2) or "", match.group(3)
        inner = self.process(body.replace(NEWLINE_SENTINEL, "\n"))
        return f"[{tag}{attr}]{inner}[/{tag}]"

    def is_inline_only(self, line: str) -> bool:
        """Return True if ``line`` is non-blank text using only inline tags."""
        if not line.strip() or _LIST_LINE_RE.match(line):
            return False
        return all(name.lower() in self._inline for name in _TAG_NAME_RE.findall(line))

    def _is_container_open(self, line: str) -> bool:
        return bool(self.options.recursive) and self._open_line_re.match(line) is not None

    def _is_container_close(self, line: str) -> bool:
        return bool(self.options.recursive) and self._close_line_re.match(line) is not None

    def _wrap_lines(self, lines: list[str]) -> list[str]:
        output: list[str] = []
        buffer: list[str] = []
        pending_open: Optional[str] = None
        inside_block = False

        def flush() -> None:
            if not buffer:
                return
            joined = NEWLINE_SENTINEL.join(buffer)
            if inside_block or joined.startswith(_WRAP_OPEN):
                output.append(joined)
            else:
                output.append(f"{_WRAP_OPEN}{joined}{_WRAP_CLOSE}")
            buffer.clear()

        for line in lines:
            trimmed = line.strip()

            if pending_open is not None:
                # multi-line opening tag: keep collecting until its bracket closes
                pending_open += NEWLINE_SENTINEL + line
                if trimmed.endswith("]"):
                    flush()
                    output.append(pending_open)
                    inside_block = True
                    pending_open = None
                continue

            if self._is_container_open(trimmed):
                if trimmed.endswith("]"):
                    flush()
                    output.append(line)
                    inside_block = True
                else:
                    pending_open = line
            elif self._is_container_close(trimmed):
                flush()
                output.append(line)
                inside_block = False
            elif not trimmed:
                flush()
                output.append("")
            elif not inside_block and self.is_inline_only(trimmed):
                buffer.append(line)
            else:
                flush()
                output.append(line)

        flush()
        if pending_open is not None:
            logger.debug("Multi-line container opening never closed its bracket; kept verbatim")
            output.append(pending_open)
        return output


def wrap_text(text: str, options: Optional[TextWrapOptions] = None) -> str:
    """Wrap loose inline runs in ``text`` using ``options``."""
    return TextWrapPreprocessor(options).process(text)
