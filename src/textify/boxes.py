#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/textify/boxes.py
"""Box model compositor.

Block renderers decorate their lines with up to three layers, applied in a
fixed order so that they nest visually:

    margins( borders( padding( content ) ) )

Each layer is sized independently per side and drawn with its own marks.
A layer pads every line to the box width, wraps it with the left and right
marks and then adds whole lines of the top and bottom marks.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from textify.constants import DEFAULT_CORNER_MARK, DEFAULT_MARKS, LEGEND_OFFSET, STRPAD, BoxLayer


@dataclass
class Sides:
    """Per-side repeat counts for one box layer."""

    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    @classmethod
    def uniform(cls, size: int) -> Sides:
        return cls(size, size, size, size)

    @property
    def is_empty(self) -> bool:
        return not (self.top or self.right or self.bottom or self.left)


@dataclass(frozen=True)
class EdgeMarks:
    """Mark strings for the four edges of a layer, plus its corner mark."""

    top: str = ""
    right: str = ""
    bottom: str = ""
    left: str = ""
    corner: str = ""

    @classmethod
    def for_layer(cls, layer: BoxLayer, overrides: Mapping[str, str] | None = None) -> EdgeMarks:
        """Resolve a layer's marks, falling back to the default registry for unset sides."""
        marks = dict(DEFAULT_MARKS.get(layer, {}))
        if layer == "borders":
            marks["corner"] = DEFAULT_CORNER_MARK
        if overrides:
            marks.update({side: mark for side, mark in overrides.items() if mark})
        return cls(**marks)


def stamp_legend(line: str, legend: str, offset: int = LEGEND_OFFSET) -> str:
    """Overwrite part of a border line with a legend label.

    >>> stamp_legend("----------", "td")
    '--td------'
    """
    if not legend:
        return line
    return line[:offset] + legend + line[offset + len(legend) :]


def _edge_line(mark: str, width: int) -> str:
    if not mark:
        return ""
    return (mark * width)[:width]


def _cornered(line: str, marks: EdgeMarks, sizes: Sides) -> str:
    if not marks.corner or len(line) < 2:
        return line
    if sizes.left:
        line = marks.corner + line[1:]
    if sizes.right:
        line = line[:-1] + marks.corner
    return line


def box(
    lines: Iterable[str],
    sizes: Sides,
    marks: EdgeMarks,
    width: int,
    fill: str = STRPAD,
    legend: str = "",
    corners: bool = False,
) -> list[str]:
    """Wrap lines in one box layer.

    Parameters
    ----------
    lines : iterable of str
        Content lines, innermost layers already applied
    sizes : Sides
        Repeat count of each side's mark
    marks : EdgeMarks
        Mark strings for each side
    width : int
        Width every content line is padded to before the side marks are added.
        Lines longer than this are left as they are.
    fill : str, default " "
        Padding character
    legend : str, default ""
        Label stamped into the outermost top line
    corners : bool, default False
        Replace the ends of top and bottom lines with the corner mark

    Returns
    -------
    list of str
        The decorated lines

    """
    left = marks.left * sizes.left
    right = marks.right * sizes.right

    boxed = []
    box_width = width
    for line in lines:
        wrapped = left + line.ljust(width, fill) + right
        box_width = max(box_width, len(wrapped))
        boxed.append(wrapped)

    top = [_edge_line(marks.top, box_width) for _ in range(sizes.top)]
    bottom = [_edge_line(marks.bottom, box_width) for _ in range(sizes.bottom)]

    if corners:
        top = [_cornered(line, marks, sizes) for line in top]
        bottom = [_cornered(line, marks, sizes) for line in bottom]
    if top and legend:
        top[0] = stamp_legend(top[0], legend)

    return top + boxed + bottom


__all__ = ["EdgeMarks", "Sides", "box", "stamp_legend"]
