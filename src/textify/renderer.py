#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/textify/renderer.py
"""Layout engine that turns a node tree into Markdown-style text.

One :class:`TagRenderer` is created per element node and kept in a
:class:`RendererCache` keyed by the node's arena index, so that a second
render pass (tables) reuses the same renderers and their per-element state.
Renderers never reach into their ancestors; everything a child needs from
its surroundings arrives through the :class:`RenderScope` its parent hands
down.

Rendering an element follows a fixed pipeline:

1. render the children, appending their output (inline or block)
2. let the behavior adjust the content (``layout``)
3. stitch the before/after marks onto the first and last lines
4. apply padding, rescan the widths, then apply borders and margins

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

from textify.behaviors import TagBehavior, behavior_for
from textify.boxes import EdgeMarks, box
from textify.buffer import Content, ContentBuffer, Width
from textify.constants import BOX_LAYERS, BoxLayer
from textify.options import TextifyOptions
from textify.tree import Node

if TYPE_CHECKING:
    from textify.behaviors import ListState
    from textify.tables import TableState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderScope:
    """Context an element hands down to its children.

    Parameters
    ----------
    table : TableState, optional
        Layout state of the innermost enclosing table
    row : int, optional
        Index of the enclosing table row
    list : ListState, optional
        Item counter of the innermost enclosing list
    fieldset : TagRenderer, optional
        Innermost enclosing fieldset, target of a ``legend``
    preformatted : bool, default False
        Whitespace is preserved verbatim

    """

    table: Optional[TableState] = None
    row: Optional[int] = None
    list: Optional[ListState] = None
    fieldset: Optional[TagRenderer] = None
    preformatted: bool = False


def parse_styles(style: str) -> dict[str, str]:
    """Parse an inline ``style`` attribute into a property mapping.

    >>> parse_styles("color: red; margin:0")
    {'color': 'red', 'margin': '0'}
    """
    styles = {}
    for declaration in style.split(";"):
        name, sep, value = declaration.partition(":")
        if sep and name.strip():
            styles[name.strip().lower()] = value.strip()
    return styles


class RendererCache:
    """Renderers keyed by the arena index of the node they render."""

    def __init__(self) -> None:
        self._renderers: dict[int, TagRenderer] = {}

    def get(self, node: Node) -> Optional[TagRenderer]:
        return self._renderers.get(node.index)

    def store(self, node: Node, renderer: TagRenderer) -> TagRenderer:
        self._renderers[node.index] = renderer
        return renderer

    def clear(self) -> None:
        self._renderers.clear()

    def __contains__(self, node: object) -> bool:
        return isinstance(node, Node) and node.index in self._renderers

    def __len__(self) -> int:
        return len(self._renderers)

    def __iter__(self) -> Iterator[TagRenderer]:
        return iter(self._renderers.values())


class TagRenderer:
    """Renders one element node through its tag behavior.

    Parameters
    ----------
    node : Node
        The element to render
    behavior : TagBehavior
        Tag-specific hooks
    context : RenderContext
        Owning render context (options and renderer cache)
    scope : RenderScope
        Scope received from the parent renderer
    parent : TagRenderer, optional
        Parent renderer, None for the root

    """

    def __init__(
        self,
        node: Node,
        behavior: TagBehavior,
        context: RenderContext,
        scope: RenderScope,
        parent: Optional[TagRenderer] = None,
    ) -> None:
        self.node = node
        self.tag = node.tag
        self.attrs = {name: value for name, value in node.attrs.items() if name != "style"}
        self.styles = parse_styles(node.attrs.get("style", ""))
        self.behavior = behavior
        self.context = context
        self.options: TextifyOptions = context.options
        self.scope = scope
        self.parent = parent
        self.buffer = ContentBuffer(keep_blank_lines=self.options.keep_blank_lines)
        self.legend = ""
        self.block = behavior.block
        self.sizes = behavior.sizes()
        self.marks_by_layer = {layer: EdgeMarks.for_layer(layer, behavior.marks.get(layer)) for layer in BOX_LAYERS}

        behavior.attach(self)
        self.child_scope = behavior.child_scope(self)

    @property
    def content(self) -> list[str]:
        return self.buffer.lines

    @property
    def width(self) -> Width:
        return self.buffer.width

    def marks(self, repeat: int = 1) -> str:
        """Return the element's inline mark repeated ``repeat`` times."""
        return self.behavior.inline_mark * repeat

    def render(self) -> str:
        return self.behavior.render(self)

    def render_children(self) -> None:
        for child in self.node.children:
            if child.is_text:
                text = self.behavior.text(self, child.text)
                if text:
                    self.append(text)
                continue

            renderer = self.context.renderer_for(child, self)
            self.append(renderer.render(), renderer.block)

    def append(self, content: Content, block: bool = False) -> None:
        self.behavior.append(self, content, block)

    def layout(self) -> str:
        return self.behavior.layout(self)

    def compose(self) -> str:
        """Stitch the inline marks and apply the box layers to the content.

        Returns
        -------
        str
            The finished lines of this element, newline separated

        """
        self.buffer.prepend(self.behavior.before(self))
        self.buffer.append(self.behavior.after(self))
        self.behavior.measure(self)

        self.apply_layer("padding")
        self.buffer.dimensions()
        self.apply_layer("borders")
        self.apply_layer("margins")
        return self.buffer.join()

    def apply_layer(self, layer: BoxLayer) -> None:
        if layer not in self.behavior.layers:
            return
        sizes = self.sizes[layer]
        if sizes.is_empty:
            return

        is_border = layer == "borders"
        self.buffer.lines = box(
            self.buffer.lines,
            sizes,
            self.marks_by_layer[layer],
            self.behavior.width(self),
            legend=self.legend_text() if is_border else "",
            corners=is_border and self.options.border_corners,
        )

    def legend_text(self) -> str:
        """Return the label stamped into this element's top border."""
        if self.options.debug:
            return self.tag
        return self.legend

    def reset(self) -> None:
        """Drop rendered content so the element can be rendered again."""
        self.buffer.clear()

    def __repr__(self) -> str:
        return f"TagRenderer(tag={self.tag!r}, behavior={type(self.behavior).__name__})"


class RenderContext:
    """Options and renderer cache shared by every renderer of one document.

    Parameters
    ----------
    options : TextifyOptions, optional
        Rendering options, defaults used when omitted

    """

    def __init__(self, options: Optional[TextifyOptions] = None) -> None:
        self.options = options or TextifyOptions()
        self.cache = RendererCache()

    def renderer_for(self, node: Node, parent: Optional[TagRenderer] = None) -> TagRenderer:
        """Return the cached renderer for a node, or build and cache a new one.

        A cached renderer has its content cleared, ready for another pass.
        """
        renderer = self.cache.get(node)
        if renderer is not None:
            renderer.reset()
            return renderer

        scope = parent.child_scope if parent is not None else RenderScope()
        renderer = TagRenderer(node, behavior_for(node.tag), self, scope, parent)
        logger.debug("Created %r for node %d", renderer, node.index)
        return self.cache.store(node, renderer)

    def render(self, node: Node) -> str:
        """Render a node and its subtree."""
        return self.renderer_for(node).render()


__all__ = ["RenderContext", "RenderScope", "RendererCache", "TagRenderer", "parse_styles"]
