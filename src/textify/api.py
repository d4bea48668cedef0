#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/textify/api.py
"""Public entry points for rendering HTML as Markdown-style text."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional, Union

from textify.constants import NEWLINE
from textify.exceptions import RenderingError
from textify.options import TextifyOptions
from textify.renderer import RenderContext
from textify.tree import NodeTree, build_tree

logger = logging.getLogger(__name__)

_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")


def _trim_output(text: str) -> str:
    """Strip trailing spaces and squeeze blank-line runs down to one."""
    text = NEWLINE.join(line.rstrip() for line in text.split(NEWLINE))
    text = _EXCESS_BLANK_LINES.sub("\n\n", text)
    return text.strip(NEWLINE)


def _resolve_options(options: Optional[TextifyOptions], kwargs: dict[str, Any]) -> TextifyOptions:
    if options is None:
        options = TextifyOptions()
    if kwargs:
        options = options.create_updated(**kwargs)
    return options


def render_tree(tree: NodeTree, options: Optional[TextifyOptions] = None) -> str:
    """Render an already loaded node tree.

    Parameters
    ----------
    tree : NodeTree
        Tree produced by :func:`textify.tree.build_tree`
    options : TextifyOptions, optional
        Rendering options

    Returns
    -------
    str
        Rendered text

    Raises
    ------
    RenderingError
        If the tree is nested too deeply to render

    """
    options = options or TextifyOptions()
    context = RenderContext(options)
    try:
        output = context.render(tree.root)
    except RecursionError as e:
        raise RenderingError("Document is nested too deeply to render", rendering_stage="layout", original_error=e) from e

    logger.debug("Rendered %d elements", len(context.cache))
    if options.trim_output:
        output = _trim_output(output)
    return output


def textify(markup: Union[str, bytes], options: Optional[TextifyOptions] = None, **kwargs: Any) -> str:
    """Render HTML markup as Markdown-flavored plain text.

    Parameters
    ----------
    markup : str or bytes
        HTML document or fragment
    options : TextifyOptions, optional
        Rendering options
    kwargs : Any
        Individual option overrides, applied on top of ``options``

    Returns
    -------
    str
        Rendered text

    Raises
    ------
    ValidationError
        If a keyword does not name an option
    DependencyError
        If the selected HTML parser is not installed
    ParsingError
        If the markup cannot be loaded
    RenderingError
        If the document cannot be laid out

    Examples
    --------
    >>> textify("<h1>Title</h1>")
    'Title\\n====='
    >>> textify("<p>Some <b>bold</b> text</p>")
    'Some **bold** text'

    """
    options = _resolve_options(options, kwargs)
    tree = build_tree(markup, options.html_parser)
    return render_tree(tree, options)


class Textify:
    """Loaded document that can be rendered repeatedly.

    The markup is parsed once on construction; every call to :meth:`render`
    lays the tree out afresh.

    Parameters
    ----------
    markup : str or bytes
        HTML document or fragment
    options : TextifyOptions, optional
        Rendering options

    """

    def __init__(self, markup: Union[str, bytes], options: Optional[TextifyOptions] = None, **kwargs: Any) -> None:
        self.options = _resolve_options(options, kwargs)
        self.tree = build_tree(markup, self.options.html_parser)

    def render(self) -> str:
        return render_tree(self.tree, self.options)

    def __str__(self) -> str:
        return self.render()


__all__ = ["Textify", "render_tree", "textify"]
