#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/textify/buffer.py
"""Line buffer with running width bookkeeping.

A :class:`ContentBuffer` holds the rendered lines of one element. Inline
content is stitched onto the current last line, block content is stacked
underneath. While lines are added the buffer keeps two watermarks:

- ``width.max``: length of the longest line
- ``width.min``: length of the longest run of non-whitespace (word)

Both only grow until the buffer is cleared for a new render pass.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Union

from textify.constants import NEWLINE, WORD_BREAKS

Content = Union[str, Sequence[str], None]

_WORD_SPLIT = re.compile(f"[{re.escape(WORD_BREAKS)}]+")
_WHITESPACE = re.compile(r"[ \t\n\r\f\v]+")


def collapse_whitespace(text: str) -> str:
    """Collapse every run of ASCII whitespace into a single space.

    Non-breaking spaces are left alone.
    """
    return _WHITESPACE.sub(" ", text)


def longest_word(line: str) -> int:
    """Return the length of the longest space/tab delimited token in a line."""
    return max((len(word) for word in _WORD_SPLIT.split(line)), default=0)


@dataclass
class Width:
    """Minimum (longest word) and maximum (longest line) content widths."""

    min: int = 0
    max: int = 0

    def update(self, line: str) -> None:
        self.max = max(self.max, len(line))
        self.min = max(self.min, longest_word(line))

    def reset(self) -> None:
        self.min = 0
        self.max = 0


class ContentBuffer:
    """Ordered text lines of a renderer plus their width watermarks.

    Parameters
    ----------
    keep_blank_lines : bool, default False
        When False, empty lines in appended or prepended content are dropped
        before they reach the buffer. When True only absent entries are
        dropped.

    """

    def __init__(self, keep_blank_lines: bool = False) -> None:
        self.lines: list[str] = []
        self.width = Width()
        self.keep_blank_lines = keep_blank_lines

    def measure(self, content: Content) -> list[str]:
        """Split content into lines, raising the width watermarks as it goes.

        Parameters
        ----------
        content : str, sequence of str, or None
            Text to split. Sequences are concatenated first.

        Returns
        -------
        list of str
            The lines, unfiltered

        """
        if content is not None and not isinstance(content, str):
            content = "".join(part for part in content if part is not None)
        if not content:
            return []

        lines = content.split(NEWLINE)
        for line in lines:
            self.width.update(line)
        return lines

    def _filtered(self, content: Content) -> list[str]:
        lines = self.measure(content)
        if self.keep_blank_lines:
            return [line for line in lines if line is not None]
        return [line for line in lines if line]

    def append(self, content: Content, block: bool = False) -> None:
        """Add content after the current lines.

        Inline content has its first line stitched onto the current last line
        with no separator. Block content always starts a new line.
        """
        lines = self._filtered(content)
        if not lines:
            return

        if not block:
            first = lines.pop(0)
            if self.lines:
                self.lines[-1] += first
                self.width.update(self.lines[-1])
            else:
                self.lines.append(first)

        self.lines.extend(lines)

    def stack(self, content: Content) -> None:
        """Add block content underneath, merging a shared boundary line.

        When the first incoming line repeats the current last line (two
        bordered rows meeting on the same rule), it is written only once.
        """
        lines = self._filtered(content)
        if lines and self.lines and self.lines[-1] and lines[0] == self.lines[-1]:
            lines.pop(0)
        self.lines.extend(lines)

    def prepend(self, content: Content) -> None:
        """Add content before the current lines.

        The last new line is stitched onto the front of the current first
        line, which is then right-padded to the running maximum width.
        """
        lines = self._filtered(content)
        if not lines:
            return

        last = lines.pop()
        if self.lines:
            joined = last + self.lines[0]
        else:
            joined = last
        self.width.update(joined)
        joined = joined.ljust(self.width.max)

        self.lines[:1] = [joined]
        self.lines[:0] = lines

    def replace(self, lines: Iterable[str]) -> None:
        """Swap in a new list of lines and re-measure them."""
        self.lines = list(lines)
        self.dimensions()

    def dimensions(self) -> None:
        """Rescan every line so the watermarks cover the current content."""
        for line in self.lines:
            self.width.update(line)

    def clear(self) -> None:
        """Drop all lines and reset the watermarks for a new render pass."""
        self.lines = []
        self.width.reset()

    def join(self) -> str:
        return NEWLINE.join(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __bool__(self) -> bool:
        return bool(self.lines)

    def __repr__(self) -> str:
        return f"ContentBuffer(lines={self.lines!r}, width={self.width!r})"


__all__ = ["Content", "ContentBuffer", "Width", "collapse_whitespace", "longest_word"]
