"""Print the text of selected elements of an XML document."""

from __future__ import annotations

import sys
import xml.sax
from typing import Iterator, Optional, Sequence
from xml.sax.handler import ContentHandler, feature_namespaces

_CHUNK = 64 * 1024


def contains_all(x: Sequence[str], y: Sequence[str]) -> bool:
    """Report whether x contains the elements of y, in order."""
    remaining = iter(x)
    return all(any(item == wanted for item in remaining) for wanted in y)


class _Handler(ContentHandler):
    def __init__(self, names: Sequence[str]) -> None:
        super().__init__()
        self.names = list(names)
        self.stack: list = []
        self.text: list = []
        self.found: list = []

    def _flush(self) -> None:
        if self.text:
            text = "".join(self.text)
            self.text.clear()
            if contains_all(self.stack, self.names):
                self.found.append((list(self.stack), text))

    def startElementNS(self, name, qname, attrs) -> None:
        self._flush()
        self.stack.append(name[1])

    def endElementNS(self, name, qname) -> None:
        self._flush()
        self.stack.pop()

    def characters(self, content: str) -> None:
        self.text.append(content)

    def endDocument(self) -> None:
        self._flush()


def select(stream, names: Sequence[str]) -> Iterator[tuple]:
    """Yield (element stack, text) for each run of character data.

    Only text whose stack of enclosing element names contains names, in
    order, is yielded. Malformed XML raises xml.sax.SAXParseException.
    """
    handler = _Handler(names)
    parser = xml.sax.make_parser()
    parser.setFeature(feature_namespaces, True)
    parser.setContentHandler(handler)
    while chunk := stream.read(_CHUNK):
        parser.feed(chunk)
        yield from handler.found
        handler.found.clear()
    parser.close()
    yield from handler.found
    handler.found.clear()


def main(argv: Optional[list] = None) -> int:
    """Print text from standard input found within the named elements."""
    names = sys.argv[1:] if argv is None else list(argv)
    stream = getattr(sys.stdin, "buffer", sys.stdin)
    try:
        for stack, text in select(stream, names):
            print(f"{' '.join(stack)}: {text}")
    except xml.sax.SAXException as err:
        print(f"xmlselect: {err}", file=sys.stderr)
        return 1
    return 0