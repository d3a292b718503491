"""A three-stage concurrent pipeline, and a spinner shown during slow work."""

from __future__ import annotations

import argparse
import itertools
import queue
import sys
import threading
from typing import Iterable, Iterator, Optional, TextIO

_CLOSED = object()


def counter(limit: int = 100) -> Iterator[int]:
    """Yield the natural numbers below limit."""
    yield from range(limit)


def squarer(values: Iterable[int]) -> Iterator[int]:
    """Yield the square of each value."""
    for value in values:
        yield value * value


def _stage(source: Iterable, out: queue.Queue) -> None:
    try:
        for item in source:
            out.put(item)
    finally:
        out.put(_CLOSED)


def _drain(q: queue.Queue) -> Iterator:
    while (item := q.get()) is not _CLOSED:
        yield item


def run_pipeline(limit: int = 100) -> Iterator[int]:
    """Yield the squares of the numbers below limit.

    Counting and squaring each run in their own thread, connected by
    single-slot queues.
    """
    naturals: queue.Queue = queue.Queue(maxsize=1)
    squares: queue.Queue = queue.Queue(maxsize=1)
    stages = [
        threading.Thread(target=_stage, args=(counter(limit), naturals), daemon=True),
        threading.Thread(
            target=_stage, args=(squarer(_drain(naturals)), squares), daemon=True
        ),
    ]
    for stage in stages:
        stage.start()
    yield from _drain(squares)
    for stage in stages:
        stage.join()


def fib(x: int) -> int:
    """Return the x-th Fibonacci number, computed slowly on purpose."""
    if x < 2:
        return x
    return fib(x - 1) + fib(x - 2)


def spinner(
    delay: float = 0.1,
    stop: Optional[threading.Event] = None,
    out: Optional[TextIO] = None,
) -> None:
    """Draw a spinning bar on out every delay seconds until stop is set."""
    stop = threading.Event() if stop is None else stop
    out = sys.stdout if out is None else out
    for frame in itertools.cycle("-\\|/"):
        if stop.is_set():
            return
        out.write(f"\r{frame}")
        out.flush()
        stop.wait(delay)


def main(argv: Optional[list] = None) -> int:
    """Print the squares of 0..99, or compute a Fibonacci number with a spinner."""
    parser = argparse.ArgumentParser(prog="pipeline", description=main.__doc__)
    parser.add_argument(
        "--fib", type=int, nargs="?", const=45, metavar="N",
        help="compute the Nth Fibonacci number (default 45) while spinning",
    )
    args = parser.parse_args(argv)
    if args.fib is None:
        for square in run_pipeline(100):
            print(square)
        return 0
    stop = threading.Event()
    spin = threading.Thread(target=spinner, args=(0.1, stop, sys.stdout), daemon=True)
    spin.start()
    result = fib(args.fib)
    stop.set()
    spin.join()
    print(f"\rFibonacci({args.fib}) = {result}")
    return 0