#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/textify/behaviors.py
"""Per-tag rendering behaviors.

Every :class:`~textify.renderer.TagRenderer` holds one behavior object that
decides how its element turns into text. The set of behaviors is closed and
registered in :data:`BEHAVIORS`; tags without an entry get the generic
:class:`TagBehavior`, an inline pass-through.

Hooks and their defaults
------------------------
attach(r)             one-time setup when the renderer is created
child_scope(r)        scope handed to child renderers (default: own scope)
text(r, text)         format a text node, None to drop it
append(r, content, block)
                      add a child's output to the buffer
render(r)             render children, then layout
layout(r)             adjust content, then compose the box model
before(r) / after(r)  text stitched before the first / after the last line
measure(r)            runs after before/after marks, before padding
width(r)              width the box layers pad lines to

"""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional

from textify.boxes import Sides
from textify.buffer import Content, collapse_whitespace
from textify.constants import BOX_LAYERS, TABLE_TEXT_TRIM, BoxLayer
from textify.tables import TablePhase, TableState, join_cells, level_cells

if TYPE_CHECKING:
    from textify.renderer import RenderScope, TagRenderer

Box = tuple[int, int, int, int]
NO_BOX: Box = (0, 0, 0, 0)


@dataclass
class ListState:
    """Item counter for one list container."""

    ordered: bool = False
    counter: int = 0

    def add_item(self) -> int:
        self.counter += 1
        return self.counter


def _opens_block(r: TagRenderer) -> bool:
    """True while nothing has been written in the enclosing block or document."""
    renderer: Optional[TagRenderer] = r
    while renderer is not None:
        if renderer.content:
            return False
        if renderer.block:
            return True
        renderer = renderer.parent
    return True


class TagBehavior:
    """Generic behavior: inline, undecorated, children passed through."""

    block: bool = False
    layers: tuple[BoxLayer, ...] = ()
    inline_mark: str = ""
    padding: Box = NO_BOX
    borders: Box = NO_BOX
    margins: Box = NO_BOX
    marks: Mapping[str, Mapping[str, str]] = MappingProxyType({})

    def sizes(self) -> dict[str, Sides]:
        return {
            "padding": Sides(*self.padding),
            "borders": Sides(*self.borders),
            "margins": Sides(*self.margins),
        }

    def attach(self, r: TagRenderer) -> None:
        pass

    def child_scope(self, r: TagRenderer) -> RenderScope:
        return r.scope

    def text(self, r: TagRenderer, text: str) -> Optional[str]:
        if r.child_scope.preformatted:
            return text
        text = collapse_whitespace(text)
        if _opens_block(r):
            text = text.lstrip()
        return text or None

    def append(self, r: TagRenderer, content: Content, block: bool = False) -> None:
        r.buffer.append(content, block)

    def render(self, r: TagRenderer) -> str:
        r.render_children()
        return r.layout()

    def layout(self, r: TagRenderer) -> str:
        return r.compose()

    def before(self, r: TagRenderer) -> Optional[str]:
        return None

    def after(self, r: TagRenderer) -> Optional[str]:
        return None

    def measure(self, r: TagRenderer) -> None:
        pass

    def width(self, r: TagRenderer) -> int:
        return r.width.max


class Hidden(TagBehavior):
    """Elements whose content never reaches the output (head, script, ...)."""

    def render(self, r: TagRenderer) -> str:
        return ""


# -----------------------------------------------------------------------------
# Inline elements
# -----------------------------------------------------------------------------


class Inline(TagBehavior):
    """Inline element wrapped in its mark on both sides."""

    def before(self, r: TagRenderer) -> Optional[str]:
        return r.marks()

    def after(self, r: TagRenderer) -> Optional[str]:
        return r.marks()


class Emphasis(Inline):
    inline_mark = "_"


class Strong(Inline):
    inline_mark = "**"


class Strikethrough(Inline):
    inline_mark = "~~"


class Code(Inline):
    """Inline code; unmarked inside preformatted blocks."""

    inline_mark = "`"

    def before(self, r: TagRenderer) -> Optional[str]:
        return None if r.scope.preformatted else r.marks()

    def after(self, r: TagRenderer) -> Optional[str]:
        return None if r.scope.preformatted else r.marks()


class Anchor(Inline):
    """Link text in angle brackets, followed by its target unless it is a fragment."""

    def before(self, r: TagRenderer) -> Optional[str]:
        return "<"

    def after(self, r: TagRenderer) -> Optional[str]:
        href = r.attrs.get("href", "")
        if href and not href.startswith("#"):
            return f": {href}>"
        return ">"


class LineBreak(Inline):
    def layout(self, r: TagRenderer) -> str:
        r.buffer.replace([" ", " "])
        return r.compose()


# -----------------------------------------------------------------------------
# Block elements
# -----------------------------------------------------------------------------


class Block(TagBehavior):
    """Block element decorated by padding, border and margin layers.

    Leading whitespace of the first text is dropped. Containers that set
    ``ignores_whitespace`` drop whitespace-only text altogether.
    """

    block = True
    layers = BOX_LAYERS
    ignores_whitespace = False

    def text(self, r: TagRenderer, text: str) -> Optional[str]:
        if r.child_scope.preformatted:
            return text
        if self.ignores_whitespace and not text.strip():
            return None
        text = collapse_whitespace(text)
        if not r.content:
            text = text.lstrip()
        return text or None


class Paragraph(Block):
    margins = (0, 0, 1, 0)


class Heading(Block):
    """``### Title ###`` heading, the level repeated on both sides."""

    inline_mark = "#"
    margins = (1, 0, 1, 0)

    def attach(self, r: TagRenderer) -> None:
        self.level = int(r.tag[1])

    def layout(self, r: TagRenderer) -> str:
        r.buffer.replace(line.strip() for line in r.content)
        return r.compose()

    def before(self, r: TagRenderer) -> Optional[str]:
        return r.marks(self.level) + " "

    def after(self, r: TagRenderer) -> Optional[str]:
        return " " + r.marks(self.level)


class UnderlinedHeading(Heading):
    """Setext heading: the title underlined with ``=`` (h1) or ``-`` (h2)."""

    def attach(self, r: TagRenderer) -> None:
        super().attach(r)
        self.inline_mark = "=" if self.level == 1 else "-"

    def layout(self, r: TagRenderer) -> str:
        r.buffer.replace(line.strip() for line in r.content)
        if r.content:
            title_width = max(len(line) for line in r.content)
            r.buffer.append(r.marks(title_width), block=True)
        return r.compose()

    def before(self, r: TagRenderer) -> Optional[str]:
        return None

    def after(self, r: TagRenderer) -> Optional[str]:
        return None


class Blockquote(Block):
    def layout(self, r: TagRenderer) -> str:
        r.buffer.replace(f"> {line}" for line in r.content)
        return r.compose()


class HorizontalRule(Block):
    inline_mark = "-"
    margins = (1, 0, 1, 0)

    def layout(self, r: TagRenderer) -> str:
        r.buffer.replace([r.marks(r.options.hr_width)])
        return r.compose()


class Preformatted(Block):
    """Whitespace-preserving block, indented like a Markdown code block."""

    margins = (0, 0, 1, 4)

    def child_scope(self, r: TagRenderer) -> RenderScope:
        return replace(r.scope, preformatted=True)

    def text(self, r: TagRenderer, text: str) -> Optional[str]:
        if not r.content and text.startswith("\n"):
            text = text[1:]
        return text


class ListContainer(Block):
    """``ul`` / ``ol``: indents its items and numbers them."""

    margins = (0, 0, 1, 4)
    ignores_whitespace = True

    def attach(self, r: TagRenderer) -> None:
        self.items = ListState(ordered=r.tag == "ol")

    def child_scope(self, r: TagRenderer) -> RenderScope:
        return replace(r.scope, list=self.items)


class DefinitionList(ListContainer):
    margins = (0, 0, 1, 0)


class DefinitionDescription(Block):
    margins = (0, 0, 0, 4)


class ListItem(Block):
    def attach(self, r: TagRenderer) -> None:
        self.items = r.scope.list
        self.number = self.items.add_item() if self.items is not None else None

    def before(self, r: TagRenderer) -> Optional[str]:
        if self.items is not None and self.items.ordered:
            return f"{self.number}. "
        return "* "


class Fieldset(Block):
    """Bordered group; a child ``legend`` is stamped into its top border."""

    padding = (0, 1, 0, 1)
    borders = (1, 1, 1, 1)

    def child_scope(self, r: TagRenderer) -> RenderScope:
        return replace(r.scope, fieldset=r)

    def append(self, r: TagRenderer, content: Content, block: bool = False) -> None:
        # a stamped legend leaves nothing behind
        if content:
            r.buffer.append(content, block)


class Legend(Block):
    """Label stamped into the enclosing fieldset's top border, else bracketed."""

    def layout(self, r: TagRenderer) -> str:
        label = " ".join(line.strip() for line in r.content if line.strip())
        if not label:
            return ""
        r.legend = label
        fieldset = r.scope.fieldset
        if fieldset is not None and fieldset.sizes["borders"].top:
            fieldset.legend = label
            return ""
        r.buffer.replace([f"[{label}]"])
        return r.compose()


# -----------------------------------------------------------------------------
# Tables
# -----------------------------------------------------------------------------


class Table(Block):
    """Two-pass table layout: measure every cell, then align them."""

    layers = ("padding", "margins")
    margins = (0, 0, 1, 0)
    ignores_whitespace = True

    def attach(self, r: TagRenderer) -> None:
        self.state = TableState()

    def child_scope(self, r: TagRenderer) -> RenderScope:
        return replace(r.scope, table=self.state, row=None)

    def text(self, r: TagRenderer, text: str) -> Optional[str]:
        text = text.strip(TABLE_TEXT_TRIM)
        if not text:
            return None
        return super().text(r, text)

    def append(self, r: TagRenderer, content: Content, block: bool = False) -> None:
        # stacked bordered rows share one horizontal rule
        r.buffer.stack(content)

    def render(self, r: TagRenderer) -> str:
        self.state.begin_pass(TablePhase.MEASURING)
        r.render_children()

        r.buffer.clear()
        self.state.begin_pass(TablePhase.ALIGNING)
        r.render_children()

        output = r.layout()
        self.state.finish()
        return output


class TableSection(Block):
    """``thead`` / ``tbody`` / ``tfoot``: stacks rows like the table does."""

    ignores_whitespace = True

    def append(self, r: TagRenderer, content: Content, block: bool = False) -> None:
        r.buffer.stack(content)


class TableRow(Block):
    """Lays its cells side by side; cells of a row stay unmeasured text blocks."""

    layers = ()

    def attach(self, r: TagRenderer) -> None:
        self.table = r.scope.table
        self.index = self.table.add_row() if self.table is not None else None

    def child_scope(self, r: TagRenderer) -> RenderScope:
        return replace(r.scope, row=self.index)

    def text(self, r: TagRenderer, text: str) -> Optional[str]:
        return None

    def append(self, r: TagRenderer, content: Content, block: bool = False) -> None:
        if content:
            r.buffer.lines.append(content if isinstance(content, str) else "".join(content))

    def layout(self, r: TagRenderer) -> str:
        return join_cells(level_cells(r.content, bordered=r.options.table_borders))


class TableCell(Block):
    """Cell padded to its column's width; reports its own width while measuring."""

    layers = ("padding", "borders")
    padding = (0, 1, 0, 1)

    def attach(self, r: TagRenderer) -> None:
        self.table = r.scope.table
        self.column = self.table.add_column(r.scope.row) if self.table is not None else None
        self.reported = 0
        if r.options.table_borders:
            r.sizes["borders"] = Sides.uniform(1)

    def layout(self, r: TagRenderer) -> str:
        # the column width is taken from the trimmed content
        lines = [line.rstrip() for line in r.content] or [""]
        r.buffer.clear()
        r.buffer.replace(lines)
        return r.compose()

    def measure(self, r: TagRenderer) -> None:
        if self.table is not None and self.column is not None:
            self.reported = self.table.report(self.column, r.width.max, self.reported)

    def width(self, r: TagRenderer) -> int:
        if self.table is not None and self.column is not None:
            return self.table.column_width(self.column)
        return r.width.max


class TableHeader(TableCell):
    def before(self, r: TagRenderer) -> Optional[str]:
        return "["

    def after(self, r: TagRenderer) -> Optional[str]:
        return "]"


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------

_PLAIN_BLOCKS = (
    "address",
    "article",
    "aside",
    "caption",
    "div",
    "dt",
    "figcaption",
    "figure",
    "footer",
    "form",
    "header",
    "main",
    "nav",
    "section",
)

BEHAVIORS: Mapping[str, type[TagBehavior]] = MappingProxyType(
    {
        **{tag: Block for tag in _PLAIN_BLOCKS},
        **{tag: Hidden for tag in ("head", "noscript", "script", "style", "template")},
        "a": Anchor,
        "b": Strong,
        "blockquote": Blockquote,
        "br": LineBreak,
        "code": Code,
        "dd": DefinitionDescription,
        "del": Strikethrough,
        "dl": DefinitionList,
        "em": Emphasis,
        "fieldset": Fieldset,
        "h1": UnderlinedHeading,
        "h2": UnderlinedHeading,
        "h3": Heading,
        "h4": Heading,
        "h5": Heading,
        "h6": Heading,
        "hr": HorizontalRule,
        "i": Emphasis,
        "kbd": Code,
        "legend": Legend,
        "li": ListItem,
        "ol": ListContainer,
        "p": Paragraph,
        "pre": Preformatted,
        "s": Strikethrough,
        "samp": Code,
        "strike": Strikethrough,
        "strong": Strong,
        "table": Table,
        "td": TableCell,
        "th": TableHeader,
        "tbody": TableSection,
        "tfoot": TableSection,
        "thead": TableSection,
        "tr": TableRow,
        "tt": Code,
        "ul": ListContainer,
    }
)


def behavior_for(tag: str) -> TagBehavior:
    """Return a fresh behavior for a tag, falling back to the generic one."""
    return BEHAVIORS.get(tag, TagBehavior)()


__all__ = [
    "BEHAVIORS",
    "ListState",
    "TagBehavior",
    "behavior_for",
]
