#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the textify library.

This module centralizes the literal marks, padding characters and default
option values used by the layout engine.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Text Layout - line separator, fill character, word breaks
3. Mark Registry - default decoration marks per box layer
4. Option Defaults - defaults for TextifyOptions
5. Dependencies - optional parser backends
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Literal, Mapping

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html.parser", "html5lib", "lxml"]
BoxLayer = Literal["padding", "borders", "margins"]

# =============================================================================
# Text Layout
# =============================================================================

NEWLINE = "\n"
STRPAD = " "
WORD_BREAKS = " \t"

# Characters trimmed from text that sits directly inside a table
TABLE_TEXT_TRIM = "\t\n\r\0\x0b"

# Box layers are always composed in this order, margin outermost
BOX_LAYERS: tuple[BoxLayer, ...] = ("padding", "borders", "margins")

# Column at which a legend is stamped into a top border line
LEGEND_OFFSET = 2

# =============================================================================
# Mark Registry
# =============================================================================

DEFAULT_MARKS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "padding": MappingProxyType({"top": " ", "right": " ", "bottom": " ", "left": " "}),
        "margins": MappingProxyType({"top": " ", "right": " ", "bottom": " ", "left": " "}),
        "borders": MappingProxyType({"top": "-", "right": "|", "bottom": "-", "left": "|"}),
    }
)
DEFAULT_CORNER_MARK = "+"

# =============================================================================
# Option Defaults
# =============================================================================

DEFAULT_DEBUG = False
DEFAULT_KEEP_BLANK_LINES = False
DEFAULT_HR_WIDTH = 75
DEFAULT_TABLE_BORDERS = True
DEFAULT_BORDER_CORNERS = False
DEFAULT_TRIM_OUTPUT = True
DEFAULT_HTML_PARSER: HtmlParser = "html.parser"

ENV_PREFIX = "TEXTIFY_"

# =============================================================================
# Dependencies
# =============================================================================

OPTIONAL_PARSER_PACKAGES: Mapping[str, str] = MappingProxyType({"html5lib": "html5lib", "lxml": "lxml"})
