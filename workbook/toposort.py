"""Topological ordering of a prerequisite graph."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Optional

PREREQS: dict = {
    "algorithms": ["data structures"],
    "calculus": ["linear algebra"],
    "compilers": [
        "data structures",
        "formal languages",
        "computer organization",
    ],
    "data structures": ["discrete math"],
    "databases": ["data structures"],
    "discrete math": ["intro to programming"],
    "formal languages": ["discrete math"],
    "networks": ["operating systems"],
    "operating systems": ["data structures", "computer organization"],
    "programming languages": ["data structures", "computer organization"],
}


def topo_sort(m: Mapping[str, Iterable[str]]) -> list:
    """Return the nodes of m so that every node follows its prerequisites.

    Keys are visited in sorted order, prerequisites in the order listed.
    """
    order: list = []
    seen: set = set()

    def visit_all(items: Iterable[str]) -> None:
        for item in items:
            if item not in seen:
                seen.add(item)
                visit_all(m.get(item, ()))
                order.append(item)

    visit_all(sorted(m))
    return order


def main(argv: Optional[list] = None) -> int:
    """Print the courses in an order that respects their prerequisites."""
    for position, course in enumerate(topo_sort(PREREQS), start=1):
        print(f"{position}:\t{course}")
    return 0