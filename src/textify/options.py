#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/textify/options.py
"""Configuration options for Markdown-style text rendering.

This module defines the frozen option dataclass consumed by the layout engine,
the HTML loader and the command-line interface.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from textify.constants import (
    DEFAULT_BORDER_CORNERS,
    DEFAULT_DEBUG,
    DEFAULT_HR_WIDTH,
    DEFAULT_HTML_PARSER,
    DEFAULT_KEEP_BLANK_LINES,
    DEFAULT_TABLE_BORDERS,
    DEFAULT_TRIM_OUTPUT,
    HtmlParser,
)
from textify.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        Raises
        ------
        ValidationError
            If a keyword does not name an option field

        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ValidationError(
                f"Unknown option(s) for {type(self).__name__}: {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=kwargs[unknown[0]],
            )
        return replace(self, **kwargs)


@dataclass(frozen=True)
class TextifyOptions(CloneFrozenMixin):
    """Configuration options for rendering HTML as Markdown-style text.

    Parameters
    ----------
    debug : bool, default False
        Stamp each bordered element's tag name into its top border instead of
        its legend text.
    keep_blank_lines : bool, default False
        Keep empty lines inside appended content. By default empty lines are
        dropped when content is stitched into a parent, which collapses
        deliberate blank separators (e.g. inside ``<pre>``).
    hr_width : int, default 75
        Number of ``-`` marks in a horizontal rule.
    table_borders : bool, default True
        Draw ``-``/``|`` borders around table cells.
    border_corners : bool, default False
        Put a ``+`` corner mark at the ends of horizontal border lines.
    trim_output : bool, default True
        Strip trailing whitespace from every output line, drop leading and
        trailing blank lines and collapse runs of blank lines.
    html_parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        BeautifulSoup tree builder used to load markup.

    Examples
    --------
        >>> from textify import textify
        >>> from textify.options import TextifyOptions
        >>> options = TextifyOptions(hr_width=10)
        >>> textify("<hr>", options=options)
        '----------'

    """

    debug: bool = field(
        default=DEFAULT_DEBUG,
        metadata={"help": "Stamp tag names into border legends"},
    )
    keep_blank_lines: bool = field(
        default=DEFAULT_KEEP_BLANK_LINES,
        metadata={"help": "Keep blank lines inside appended content"},
    )
    hr_width: int = field(
        default=DEFAULT_HR_WIDTH,
        metadata={"help": "Width of horizontal rules", "type": int},
    )
    table_borders: bool = field(
        default=DEFAULT_TABLE_BORDERS,
        metadata={"help": "Draw borders around table cells", "cli_name": "no-table-borders"},
    )
    border_corners: bool = field(
        default=DEFAULT_BORDER_CORNERS,
        metadata={"help": "Mark border corners with '+'"},
    )
    trim_output: bool = field(
        default=DEFAULT_TRIM_OUTPUT,
        metadata={"help": "Trim trailing whitespace and surplus blank lines", "cli_name": "no-trim"},
    )
    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={
            "help": "BeautifulSoup parser to use: 'html.parser' (built-in), 'html5lib' or 'lxml'",
            "choices": ["html.parser", "html5lib", "lxml"],
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and choices.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.hr_width <= 0:
            raise ValueError(f"hr_width must be positive, got {self.hr_width}")
        if self.html_parser not in ("html.parser", "html5lib", "lxml"):
            raise ValueError(f"html_parser must be one of 'html.parser', 'html5lib', 'lxml', got {self.html_parser!r}")


__all__ = ["CloneFrozenMixin", "TextifyOptions"]
