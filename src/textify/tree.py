#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/textify/tree.py
"""Immutable node tree consumed by the layout engine.

The renderer never touches BeautifulSoup objects directly. Markup is loaded
once into a flat arena of frozen :class:`Node` records, each carrying a stable
``index`` that the render cache uses as its key. The tree itself is never
mutated while rendering.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from textify.constants import DEFAULT_HTML_PARSER, OPTIONAL_PARSER_PACKAGES, HtmlParser
from textify.exceptions import DependencyError, ParsingError

logger = logging.getLogger(__name__)

DOCUMENT_TAG = "#document"
TEXT_TAG = "#text"
CDATA_TAG = "#cdata"


class NodeKind(Enum):
    """Discriminator for the three node kinds the renderer understands."""

    ELEMENT = "element"
    TEXT = "text"
    CDATA = "cdata"


@dataclass(frozen=True, eq=False)
class Node:
    """A single element or character-data node.

    Parameters
    ----------
    index : int
        Position of the node in its tree's arena (document order)
    kind : NodeKind
        Element, text or CDATA
    tag : str
        Lower-cased tag name, or ``#text`` / ``#cdata`` / ``#document``
    attrs : Mapping[str, str]
        Read-only attribute mapping
    children : tuple of Node
        Ordered child nodes
    text : str
        Character data for text and CDATA nodes

    """

    index: int
    kind: NodeKind
    tag: str
    attrs: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    children: tuple[Node, ...] = ()
    text: str = ""

    @property
    def is_element(self) -> bool:
        return self.kind is NodeKind.ELEMENT

    @property
    def is_text(self) -> bool:
        return self.kind is not NodeKind.ELEMENT

    @property
    def has_children(self) -> bool:
        return bool(self.children)


class NodeTree:
    """Arena of nodes with a single root.

    Nodes are addressed by their ``index``; ``tree[i].index == i`` always holds.
    """

    def __init__(self) -> None:
        self._nodes: list[Node | None] = []
        self._root: Node | None = None

    @property
    def root(self) -> Node:
        if self._root is None:
            raise ParsingError("Node tree has no root", parsing_stage="tree")
        return self._root

    @property
    def nodes(self) -> list[Node]:
        return [node for node in self._nodes if node is not None]

    def reserve(self) -> int:
        """Reserve the next arena slot and return its index."""
        self._nodes.append(None)
        return len(self._nodes) - 1

    def place(self, node: Node) -> Node:
        """Store a node in the slot reserved for its index."""
        self._nodes[node.index] = node
        return node

    def element(
        self,
        tag: str,
        attrs: Mapping[str, str] | None = None,
        children: list[Node] | tuple[Node, ...] = (),
        index: int | None = None,
    ) -> Node:
        """Create and register an element node."""
        if index is None:
            index = self.reserve()
        node = Node(
            index=index,
            kind=NodeKind.ELEMENT,
            tag=tag.lower(),
            attrs=MappingProxyType(dict(attrs or {})),
            children=tuple(children),
        )
        return self.place(node)

    def text(self, text: str, cdata: bool = False) -> Node:
        """Create and register a text or CDATA node."""
        kind = NodeKind.CDATA if cdata else NodeKind.TEXT
        node = Node(index=self.reserve(), kind=kind, tag=CDATA_TAG if cdata else TEXT_TAG, text=text)
        return self.place(node)

    def set_root(self, node: Node) -> None:
        self._root = node

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, index: int) -> Node:
        node = self._nodes[index]
        if node is None:
            raise IndexError(f"Node slot {index} is reserved but not yet built")
        return node

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)


def _attribute_value(value: Any) -> str:
    # BeautifulSoup returns multi-valued attributes such as class as lists
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return str(value)


def _convert(tree: NodeTree, soup_node: Any) -> Node | None:
    from bs4.element import CData, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

    if isinstance(soup_node, CData):
        return tree.text(str(soup_node), cdata=True)
    if isinstance(soup_node, (Comment, Declaration, Doctype, ProcessingInstruction)):
        return None
    if isinstance(soup_node, NavigableString):
        return tree.text(str(soup_node))
    if not isinstance(soup_node, Tag):
        return None

    index = tree.reserve()
    children = []
    for child in soup_node.children:
        converted = _convert(tree, child)
        if converted is not None:
            children.append(converted)

    attrs = {name: _attribute_value(value) for name, value in soup_node.attrs.items()}
    return tree.element(soup_node.name, attrs, children, index=index)


def build_tree(markup: str | bytes, parser: HtmlParser = DEFAULT_HTML_PARSER) -> NodeTree:
    """Load HTML markup into an immutable :class:`NodeTree`.

    Parameters
    ----------
    markup : str or bytes
        HTML document or fragment. Bytes are decoded by BeautifulSoup.
    parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        BeautifulSoup tree builder

    Returns
    -------
    NodeTree
        Tree whose root is a ``#document`` element

    Raises
    ------
    DependencyError
        If the selected parser backend is not installed
    ParsingError
        If BeautifulSoup fails to load the markup

    """
    from bs4 import BeautifulSoup
    from bs4.exceptions import FeatureNotFound

    try:
        soup = BeautifulSoup(markup, parser)
    except FeatureNotFound as e:
        package = OPTIONAL_PARSER_PACKAGES.get(parser)
        raise DependencyError(
            "html",
            missing_packages=[(package, "")] if package else [],
            original_error=e,
        ) from e
    except (TypeError, ValueError, AssertionError) as e:
        raise ParsingError(f"Failed to parse HTML: {e}", parsing_stage="load", original_error=e) from e

    tree = NodeTree()
    index = tree.reserve()
    children = []
    try:
        for child in soup.children:
            converted = _convert(tree, child)
            if converted is not None:
                children.append(converted)
    except RecursionError as e:
        raise ParsingError("HTML document is nested too deeply", parsing_stage="tree", original_error=e) from e

    tree.set_root(tree.element(DOCUMENT_TAG, {}, children, index=index))
    logger.debug("Built node tree with %d nodes using %s", len(tree), parser)
    return tree


__all__ = ["DOCUMENT_TAG", "Node", "NodeKind", "NodeTree", "build_tree"]
