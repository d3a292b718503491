"""The countdown for a rocket launch, optionally aborted from the keyboard."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from typing import Optional, TextIO


def launch(out: Optional[TextIO] = None) -> None:
    """Announce the launch."""
    out = sys.stdout if out is None else out
    out.write("Lift off!\n")
    out.flush()


def countdown(
    start: int = 10,
    tick: float = 1.0,
    abort: Optional[threading.Event] = None,
    out: Optional[TextIO] = None,
) -> bool:
    """Count down from start, one number per tick seconds, then launch.

    Returns True on launch, False if abort was set during the countdown.
    """
    out = sys.stdout if out is None else out
    for remaining in range(start, 0, -1):
        out.write(f"{remaining}\n")
        out.flush()
        if abort is None:
            time.sleep(tick)
        elif abort.wait(tick):
            out.write("Launch aborted!\n")
            out.flush()
            return False
    launch(out)
    return True


def _abort_on_input(abort: threading.Event) -> None:
    try:
        sys.stdin.read(1)
    except (OSError, ValueError):
        pass
    abort.set()


def main(argv: Optional[list] = None) -> int:
    """Count down to a rocket launch."""
    parser = argparse.ArgumentParser(prog="countdown", description=main.__doc__)
    parser.add_argument("-n", "--count", type=int, default=10, help="seconds to count")
    parser.add_argument("-t", "--tick", type=float, default=1.0, help="length of a count")
    parser.add_argument(
        "-a", "--abortable", action="store_true",
        help="abort the launch when return is pressed",
    )
    parser.add_argument(
        "-s", "--silent", action="store_true",
        help="wait out the countdown without printing the numbers",
    )
    args = parser.parse_args(argv)

    abort: Optional[threading.Event] = None
    if args.abortable:
        abort = threading.Event()
        threading.Thread(target=_abort_on_input, args=(abort,), daemon=True).start()
        print("Commencing countdown.  Press return to abort.", flush=True)
    else:
        print("Commencing countdown.", flush=True)

    if not args.silent:
        countdown(args.count, args.tick, abort, sys.stdout)
        return 0
    total = max(args.count, 0) * args.tick
    if abort is None:
        time.sleep(total)
    elif abort.wait(total):
        print("Launch aborted!")
        return 0
    launch(sys.stdout)
    return 0