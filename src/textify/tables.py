#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/textify/tables.py
"""Shared layout state for one table.

A table is rendered in two passes over the same (cached) row and cell
renderers:

1. **measuring**: every cell reports the width of its content into the
   column-width registry, which keeps the maximum per column.
2. **aligning**: the registry is frozen and every cell pads itself to its
   column width, so rows line up.

Row and column indices are handed out in construction order, not derived
from tree position. Cells are therefore assumed to appear in the same
left-to-right column order in every row; colspan and rowspan are ignored.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from textify.constants import NEWLINE

logger = logging.getLogger(__name__)


class TablePhase(Enum):
    """Where a table is in its render cycle."""

    MEASURING = "measuring"
    ALIGNING = "aligning"
    DONE = "done"


@dataclass
class TableState:
    """Row counters and column-width registry for one table.

    Attributes
    ----------
    rows : list of int
        Column count of each row, indexed by row number
    column_widths : dict of int to int
        Maximum reported content width per column
    generation : int
        Render pass counter, bumped by :meth:`begin_pass`
    phase : TablePhase
        Current pass kind

    """

    rows: list[int] = field(default_factory=list)
    column_widths: dict[int, int] = field(default_factory=dict)
    generation: int = 0
    phase: TablePhase = TablePhase.DONE

    @property
    def column_count(self) -> int:
        return max(self.rows, default=0)

    @property
    def measuring(self) -> bool:
        return self.phase is TablePhase.MEASURING

    def add_row(self) -> int:
        """Register a new row and return its index."""
        self.rows.append(0)
        return len(self.rows) - 1

    def add_column(self, row: int | None) -> int | None:
        """Register a new cell in ``row`` and return its column index.

        Returns None when the row is unknown to this table.
        """
        if row is None or not 0 <= row < len(self.rows):
            return None
        column = self.rows[row]
        self.rows[row] += 1
        return column

    def column_width(self, column: int | None, width: int | None = None) -> int:
        """Return the width of a column, raising it to ``width`` first if given.

        Widths only grow, and only while the table is measuring.
        """
        if column is None:
            return 0
        current = self.column_widths.setdefault(column, 0)
        if width is not None and self.measuring:
            current = max(current, width)
            self.column_widths[column] = current
        return current

    def report(self, column: int | None, width: int, generation: int) -> int:
        """Record a cell's measured width unless it already reported this pass.

        Parameters
        ----------
        column : int or None
            Column of the reporting cell
        width : int
            Measured content width
        generation : int
            The pass the cell last reported in

        Returns
        -------
        int
            The generation the cell should remember as its last report

        """
        if generation == self.generation or not self.measuring:
            return generation
        self.column_width(column, width)
        return self.generation

    def begin_pass(self, phase: TablePhase) -> None:
        self.generation += 1
        self.phase = phase
        logger.debug("Table pass %d: %s", self.generation, phase.value)

    def finish(self) -> None:
        self.phase = TablePhase.DONE
        logger.debug(
            "Table laid out: %d rows, column widths %s",
            len(self.rows),
            [self.column_widths.get(column, 0) for column in range(self.column_count)],
        )


def level_cells(cells: list[str], bordered: bool) -> list[str]:
    """Pad rendered cell blocks to the height of the row's tallest cell.

    Filler lines are blank content lines of the cell's width. In a bordered
    cell they repeat the edge glyphs of the first content line and go above
    the bottom border, otherwise they go underneath.

    >>> level_cells(["---\\n|a|\\n|b|\\n---", "---\\n|x|\\n---"], bordered=True)[1]
    '---\\n|x|\\n| |\\n---'
    """
    blocks = [cell.split(NEWLINE) for cell in cells]
    height = max((len(lines) for lines in blocks), default=0)
    leveled: list[str] = []
    for lines in blocks:
        missing = height - len(lines)
        if missing:
            if bordered and len(lines) >= 3:
                edge = lines[1]
                filler = edge[0] + " " * (len(edge) - 2) + edge[-1] if len(edge) >= 2 else edge
                lines = lines[:-1] + [filler] * missing + lines[-1:]
            else:
                lines = lines + [" " * max(len(line) for line in lines)] * missing
        leveled.append(NEWLINE.join(lines))
    return leveled


def join_cells(cells: list[str]) -> str:
    """Lay rendered cell blocks side by side.

    Line *i* of every cell is concatenated onto line *i* of the row. When a
    row line ends with the same glyph the next cell's line starts with, the
    glyph is written once, so neighbouring ``|`` borders are shared.

    >>> join_cells(["|a|\\n---", "|b|\\n---"])
    '|a|b|\\n-----'
    """
    lines: list[str] = []
    for cell in cells:
        for i, segment in enumerate(cell.split(NEWLINE)):
            if i >= len(lines):
                lines.append(segment)
            elif lines[i] and segment and lines[i][-1] == segment[0]:
                lines[i] += segment[1:]
            else:
                lines[i] += segment
    return NEWLINE.join(lines)


__all__ = ["TablePhase", "TableState", "join_cells", "level_cells"]
