"""Print the title of HTML documents fetched from URLs."""

from __future__ import annotations

import sys
from typing import Optional

import requests

from .htmltree import Node, NodeType, for_each_node, parse_html


class TitleError(Exception):
    """Raised when a document's title cannot be obtained."""


class _Bailout(Exception):
    """Stops a traversal once a second title has been found."""


def _is_title(n: Node) -> bool:
    return (
        n.type is NodeType.ELEMENT
        and n.data == "title"
        and n.first_child is not None
    )


def titles(doc: Node) -> list:
    """Return the text of every non-empty title element in doc."""
    found: list = []

    def visit_node(n: Node) -> None:
        if _is_title(n):
            found.append(n.first_child.data)

    for_each_node(doc, visit_node)
    return found


def sole_title(doc: Node) -> str:
    """Return the text of the one non-empty title element in doc.

    Raises TitleError if there is none or more than one.
    """
    found = ""

    def visit_node(n: Node) -> None:
        nonlocal found
        if _is_title(n):
            if found:
                raise _Bailout
            found = n.first_child.data

    try:
        for_each_node(doc, visit_node)
    except _Bailout:
        raise TitleError("multiple title elements") from None
    if not found:
        raise TitleError("no title element")
    return found


def title(url: str) -> str:
    """Fetch url and return the title of the HTML document it serves."""
    try:
        resp = requests.get(url)
    except requests.RequestException as err:
        raise TitleError(f'Get "{url}": {err}') from err
    with resp:
        ct = resp.headers.get("Content-Type", "")
        if ct != "text/html" and not ct.startswith("text/html;"):
            raise TitleError(f"{url} has type {ct}, not text/html")
        try:
            doc = parse_html(resp.content)
        except ValueError as err:
            raise TitleError(f"parsing {url} as HTML: {err}") from err
    return sole_title(doc)


def main(argv: Optional[list] = None) -> int:
    """Print the title of each URL given as an argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    for url in args:
        try:
            print(title(url))
        except TitleError as err:
            print(f"title: {err}", file=sys.stderr)
    return 0