"""Disk usage of the files under one or more directories."""

from __future__ import annotations

import argparse
import os
import sys
import threading
import time
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from typing import Callable, Iterable, Iterator, Optional

Cancelled = Optional[Callable[[], bool]]

DEFAULT_WORKERS = 20
_TICK = 0.5


def _report(err: Exception) -> None:
    print(f"du: {err}", file=sys.stderr)


def _is_cancelled(cancelled: Cancelled) -> bool:
    return cancelled is not None and bool(cancelled())


def dirents(path) -> list:
    """Return the entries of directory path, sorted by name.

    Errors are reported on standard error and yield no entries.
    """
    try:
        with os.scandir(path) as entries:
            return sorted(entries, key=lambda entry: entry.name)
    except OSError as err:
        _report(err)
        return []


def _split(path) -> tuple:
    """Return the sizes of the files in path and the paths of its subdirectories."""
    sizes: list = []
    subdirs: list = []
    for entry in dirents(path):
        try:
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(entry.path)
            else:
                sizes.append(entry.stat(follow_symlinks=False).st_size)
        except OSError as err:
            _report(err)
    return sizes, subdirs


def walk_dir(path, cancelled: Cancelled = None) -> Iterator[int]:
    """Yield the size of every file in the tree rooted at path.

    The walk stops descending once cancelled() returns true.
    """
    if _is_cancelled(cancelled):
        return
    for entry in dirents(path):
        try:
            if entry.is_dir(follow_symlinks=False):
                yield from walk_dir(entry.path, cancelled)
            else:
                yield entry.stat(follow_symlinks=False).st_size
        except OSError as err:
            _report(err)


def _file_sizes(
    roots: Iterable, workers: int, cancelled: Cancelled
) -> Iterator[int]:
    """Yield file sizes, reading at most workers directories in parallel."""
    if workers < 1:
        raise ValueError(f"need at least one worker, got {workers}")
    roots = list(roots) or ["."]

    def scan(path) -> tuple:
        if _is_cancelled(cancelled):
            return [], []
        return _split(path)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        pending = {pool.submit(scan, root) for root in roots}
        try:
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    sizes, subdirs = future.result()
                    yield from sizes
                    if _is_cancelled(cancelled):
                        return
                    pending |= {pool.submit(scan, sub) for sub in subdirs}
        finally:
            for future in pending:
                future.cancel()


def disk_usage(
    roots: Iterable = (),
    workers: int = DEFAULT_WORKERS,
    cancelled: Cancelled = None,
) -> tuple:
    """Return (number of files, total bytes) under roots, default ".".

    Directories are read in parallel by up to workers threads. Once
    cancelled() returns true the traversal stops and the totals so far
    are returned.
    """
    nfiles = nbytes = 0
    for size in _file_sizes(roots, workers, cancelled):
        nfiles += 1
        nbytes += size
    return nfiles, nbytes


def format_usage(nfiles: int, nbytes: int) -> str:
    """Format totals as "N files  X.Y GB"."""
    return f"{nfiles} files  {nbytes / 1e9:.1f} GB"


def _cancel_on_input(done: threading.Event) -> None:
    try:
        sys.stdin.read(1)
    except (OSError, ValueError):
        pass
    done.set()


def main(argv: Optional[list] = None) -> int:
    """Compute the disk usage of the files in the given directories."""
    parser = argparse.ArgumentParser(prog="du", description=main.__doc__)
    parser.add_argument(
        "-v", dest="verbose", action="store_true",
        help="show verbose progress messages",
    )
    parser.add_argument(
        "-c", "--cancel-on-input", action="store_true",
        help="stop as soon as input arrives on standard input",
    )
    parser.add_argument(
        "-j", "--jobs", type=int, default=DEFAULT_WORKERS,
        help="directories read in parallel",
    )
    parser.add_argument("roots", nargs="*")
    args = parser.parse_args(argv)
    if args.jobs < 1:
        parser.error(f"need at least one job, got {args.jobs}")

    done = threading.Event()
    if args.cancel_on_input:
        threading.Thread(target=_cancel_on_input, args=(done,), daemon=True).start()

    nfiles = nbytes = 0
    last = time.monotonic()
    for size in _file_sizes(args.roots, args.jobs, done.is_set):
        nfiles += 1
        nbytes += size
        if args.verbose and time.monotonic() - last >= _TICK:
            print(format_usage(nfiles, nbytes), flush=True)
            last = time.monotonic()
    if done.is_set():
        return 0
    print(format_usage(nfiles, nbytes))
    return 0