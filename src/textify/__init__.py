"""textify - Render HTML as Markdown-flavored plain text.

textify walks an HTML element tree and lays it out as readable plain text,
keeping the document's structure visible through literal marks: underlined
and hashed headings, ``**bold**`` and ``_emphasis_``, ``> `` quoted lines,
bulleted and numbered lists, indented code blocks and bordered tables.

The layout engine works on an immutable node tree built with BeautifulSoup.
Each element is rendered by a tag-specific behavior into a line buffer, then
decorated by a padding/border/margin box model. Tables are laid out in two
passes so that every row lines up on shared column widths.

Requirements
------------
- Python 3.10+
- beautifulsoup4 (``html5lib`` or ``lxml`` optional, as alternative parsers)

Examples
--------
Render a fragment:

    >>> from textify import textify
    >>> print(textify("<h1>Title</h1><p>Some <em>text</em>.</p>"))
    Title
    =====
    <BLANKLINE>
    Some _text_.

Render a table without borders:

    >>> text = textify(html, table_borders=False)

Parse once, render with the object API:

    >>> from textify import Textify
    >>> doc = Textify(html)
    >>> text = doc.render()

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "textify requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from textify.api import Textify, render_tree, textify
from textify.exceptions import (
    DependencyError,
    ParsingError,
    RenderingError,
    TextifyError,
    ValidationError,
)
from textify.options import TextifyOptions
from textify.tree import Node, NodeKind, NodeTree, build_tree

__all__ = [
    "__version__",
    "DependencyError",
    "Node",
    "NodeKind",
    "NodeTree",
    "ParsingError",
    "RenderingError",
    "Textify",
    "TextifyError",
    "TextifyOptions",
    "ValidationError",
    "build_tree",
    "render_tree",
    "textify",
]
