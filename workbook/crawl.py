"""Web crawlers: sequential breadth-first and bounded-parallel."""

from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Iterable, Optional

from .links import FetchError, extract

logger = logging.getLogger(__name__)

Expander = Callable[[str], Optional[Iterable[str]]]


def breadth_first(f: Expander, worklist: Iterable[str]) -> list:
    """Call f for each item in the worklist, breadth first.

    Items returned by f are added to the worklist. f is called at most
    once for each item. Returns the items in the order they were visited.
    """
    seen: set = set()
    order: list = []
    items = list(worklist)
    while items:
        found: list = []
        for item in items:
            if item not in seen:
                seen.add(item)
                order.append(item)
                found.extend(f(item) or ())
        items = found
    return order


def crawl_concurrently(f: Expander, worklist: Iterable[str], limit: int = 20) -> list:
    """Like breadth_first, but run at most limit calls of f in parallel.

    Returns the visited items in the order they were scheduled.
    """
    seen: set = set()
    order: list = []
    pending: set = set()
    with ThreadPoolExecutor(max_workers=limit) as pool:

        def schedule(items: Iterable[str]) -> None:
            for item in items:
                if item not in seen:
                    seen.add(item)
                    order.append(item)
                    pending.add(pool.submit(f, item))

        schedule(worklist)
        while pending:
            done, _ = wait(pending, return_when=FIRST_COMPLETED)
            pending.difference_update(done)
            future: Future
            for future in done:
                schedule(future.result() or ())
    return order


def crawl(url: str) -> list:
    """Print url and return the links found on that page.

    Errors are logged and yield no links.
    """
    print(url, flush=True)
    try:
        return extract(url)
    except FetchError as err:
        logger.error("%s", err)
        return []


def main(argv: Optional[list] = None) -> int:
    """Crawl the web starting from the URLs given as arguments."""
    parser = argparse.ArgumentParser(prog="crawl", description=main.__doc__)
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=0,
        help="crawl with this many parallel requests (default: sequential)",
    )
    parser.add_argument("urls", nargs="*")
    args = parser.parse_args(argv)
    logging.basicConfig(format="%(asctime)s %(message)s", stream=sys.stderr)
    if args.jobs > 0:
        crawl_concurrently(crawl, args.urls, args.jobs)
    else:
        breadth_first(crawl, args.urls)
    return 0