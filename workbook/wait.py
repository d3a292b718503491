"""Wait for an HTTP server to start responding."""

from __future__ import annotations

import logging
import sys
import time
from typing import Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


class ServerDownError(Exception):
    """Raised when a server does not respond before the deadline."""


def _format_duration(seconds: float) -> str:
    if seconds == 0:
        return "0s"
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    text = f"{secs:g}s"
    if hours:
        return f"{int(hours)}h{int(minutes)}m{text}"
    if minutes:
        return f"{int(minutes)}m{text}"
    return text


def wait_for_server(url: str, timeout: float = DEFAULT_TIMEOUT) -> int:
    """Try to contact the server of url, backing off exponentially.

    Returns the number of attempts made; raises ServerDownError if all
    attempts within timeout seconds fail.
    """
    deadline = time.monotonic() + timeout
    tries = 0
    while time.monotonic() < deadline:
        try:
            requests.head(url)
        except requests.RequestException as err:
            logger.warning("server not responding (%s); retrying...", err)
            time.sleep(1 << tries)
            tries += 1
        else:
            return tries + 1
    raise ServerDownError(
        f"server {url} failed to respond after {_format_duration(timeout)}"
    )


def main(argv: Optional[list] = None) -> int:
    """Wait for the server at the URL given as the only argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: wait url", file=sys.stderr)
        return 1
    logging.basicConfig(format="%(asctime)s %(message)s", stream=sys.stderr)
    try:
        wait_for_server(args[0])
    except ServerDownError as err:
        print(f"Site is down: {err}", file=sys.stderr)
        return 1
    return 0