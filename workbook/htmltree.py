"""HTML document trees: parsing, traversal, link and outline extraction."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Union
from xml.dom import Node as _DomNode

import html5lib
import requests


class NodeType(Enum):
    """The kind of a node in an HTML document tree."""

    ERROR = 0
    TEXT = 1
    DOCUMENT = 2
    ELEMENT = 3
    COMMENT = 4
    DOCTYPE = 5


@dataclass(eq=False)
class Node:
    """A node of an HTML document tree.

    For elements, data is the tag name; for text and comments it is the
    content; for a doctype it is the document type name.
    """

    type: NodeType
    data: str = ""
    attr: list = field(default_factory=list)
    children: list = field(default_factory=list, repr=False)

    @property
    def first_child(self) -> Optional[Node]:
        """The first child of this node, or None if it has none."""
        return self.children[0] if self.children else None


Visitor = Optional[Callable[[Node], None]]

_DOM_TYPES = {
    _DomNode.ELEMENT_NODE: NodeType.ELEMENT,
    _DomNode.TEXT_NODE: NodeType.TEXT,
    _DomNode.CDATA_SECTION_NODE: NodeType.TEXT,
    _DomNode.COMMENT_NODE: NodeType.COMMENT,
    _DomNode.DOCUMENT_NODE: NodeType.DOCUMENT,
    _DomNode.DOCUMENT_TYPE_NODE: NodeType.DOCTYPE,
}


def _convert(dom) -> Node:
    kind = _DOM_TYPES.get(dom.nodeType, NodeType.ERROR)
    node = Node(kind)
    if kind is NodeType.ELEMENT:
        node.data = dom.tagName
        node.attr = list(dom.attributes.items())
    elif kind in (NodeType.TEXT, NodeType.COMMENT):
        node.data = dom.data
    elif kind is NodeType.DOCTYPE:
        node.data = dom.name or ""
    node.children = [_convert(child) for child in dom.childNodes]
    return node


def parse_html(source: Union[str, bytes, object]) -> Node:
    """Parse an HTML document from a string, UTF-8 bytes or a readable file."""
    if hasattr(source, "read"):
        source = source.read()
    if isinstance(source, (bytes, bytearray)):
        source = bytes(source).decode("utf-8", "replace")
    if not isinstance(source, str):
        raise TypeError(f"cannot parse HTML from {type(source).__name__}")
    dom = html5lib.parse(source, treebuilder="dom", namespaceHTMLElements=False)
    return _convert(dom)


def for_each_node(n: Node, pre: Visitor = None, post: Visitor = None) -> None:
    """Call pre(x) before and post(x) after the children of every node x under n.

    Both functions are optional.
    """
    if pre is not None:
        pre(n)
    for child in n.children:
        for_each_node(child, pre, post)
    if post is not None:
        post(n)


def _is_element(n: Node, tag: str) -> bool:
    return n.type is NodeType.ELEMENT and n.data == tag


def visit(n: Node) -> list:
    """Return the href of every anchor element under n, in document order."""
    links: list = []

    def collect(node: Node) -> None:
        if _is_element(node, "a"):
            links.extend(value for key, value in node.attr if key == "href")

    for_each_node(n, collect)
    return links


def outline(n: Node) -> list:
    """Return, for each element under n, the stack of tag names leading to it."""
    stacks: list = []
    stack: list = []

    def push(node: Node) -> None:
        if node.type is NodeType.ELEMENT:
            stack.append(node.data)
            stacks.append(list(stack))

    def pop(node: Node) -> None:
        if node.type is NodeType.ELEMENT:
            stack.pop()

    for_each_node(n, push, pop)
    return stacks


def indented_outline(n: Node) -> list:
    """Return start and end tags of the elements under n, indented by depth."""
    lines: list = []
    depth = 0

    def start_element(node: Node) -> None:
        nonlocal depth
        if node.type is NodeType.ELEMENT:
            lines.append(f"{'  ' * depth}<{node.data}>")
            depth += 1

    def end_element(node: Node) -> None:
        nonlocal depth
        if node.type is NodeType.ELEMENT:
            depth -= 1
            lines.append(f"{'  ' * depth}</{node.data}>")

    for_each_node(n, start_element, end_element)
    return lines


def _read_stdin():
    return getattr(sys.stdin, "buffer", sys.stdin).read()


def _fetch_document(url: str) -> Node:
    with requests.get(url) as resp:
        return parse_html(resp.content)


def findlinks_main(argv: Optional[list] = None) -> int:
    """Print the links in an HTML document read from standard input."""
    try:
        doc = parse_html(_read_stdin())
    except (OSError, ValueError) as err:
        print(f"findlinks1: {err}", file=sys.stderr)
        return 1
    for link in visit(doc):
        print(link)
    return 0


def outline_main(argv: Optional[list] = None) -> int:
    """Print document outlines.

    With URLs as arguments, fetch each one and print its indented outline;
    without, print the element stacks of the document on standard input.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        try:
            doc = parse_html(_read_stdin())
        except (OSError, ValueError) as err:
            print(f"outline: {err}", file=sys.stderr)
            return 1
        for stack in outline(doc):
            print("[" + " ".join(stack) + "]")
        return 0
    for url in args:
        try:
            doc = _fetch_document(url)
        except (requests.RequestException, ValueError) as err:
            print(f"outline: {err}", file=sys.stderr)
            continue
        for line in indented_outline(doc):
            print(line)
    return 0