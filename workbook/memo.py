"""Concurrency-safe memoization of a function of a string key."""

from __future__ import annotations

import logging
import queue
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, Optional

import requests

from .sorting import format_duration

logger = logging.getLogger(__name__)

Func = Callable[[str], Any]

_STOP = object()


class _Entry:
    """The result of one call, available once ready is set."""

    __slots__ = ("ready", "value", "error")

    def __init__(self) -> None:
        self.ready = threading.Event()
        self.value: Any = None
        self.error: Optional[BaseException] = None

    def fill(self, f: Func, key: str) -> None:
        try:
            self.value = f(key)
        except BaseException as err:
            self.error = err
            if not isinstance(err, Exception):
                raise
        finally:
            self.ready.set()

    def result(self) -> Any:
        self.ready.wait()
        if self.error is not None:
            raise self.error
        return self.value


class Memo:
    """Caches the results, errors included, of calling f.

    Requests for different keys proceed in parallel; concurrent requests
    for the same key wait for the first to finish.
    """

    def __init__(self, f: Func) -> None:
        self._f = f
        self._lock = threading.Lock()
        self._cache: dict = {}

    def get(self, key: str) -> Any:
        """Return f(key), calling f only the first time; re-raise its error."""
        with self._lock:
            entry = self._cache.get(key)
            first = entry is None
            if first:
                entry = self._cache[key] = _Entry()
        if first:
            entry.fill(self._f, key)
        return entry.result()


class MonitorMemo:
    """Like Memo, but the cache is confined to a monitor thread.

    Call close when done, or use it as a context manager.
    """

    def __init__(self, f: Func) -> None:
        self._requests: queue.Queue = queue.Queue()
        self._guard = threading.Lock()
        self._closed = False
        self._server = threading.Thread(target=self._serve, args=(f,), daemon=True)
        self._server.start()

    def _serve(self, f: Func) -> None:
        cache: dict = {}
        while (request := self._requests.get()) is not _STOP:
            key, response = request
            entry = cache.get(key)
            if entry is None:
                entry = cache[key] = _Entry()
                threading.Thread(target=entry.fill, args=(f, key), daemon=True).start()
            response.put(entry)

    def get(self, key: str) -> Any:
        """Return f(key), calling f only the first time; re-raise its error."""
        response: queue.Queue = queue.Queue(maxsize=1)
        with self._guard:
            if self._closed:
                raise RuntimeError("memo is closed")
            self._requests.put((key, response))
        return response.get().result()

    def close(self) -> None:
        """Stop the monitor; later calls to get raise RuntimeError."""
        with self._guard:
            if self._closed:
                return
            self._closed = True
            self._requests.put(_STOP)
        self._server.join()

    def __enter__(self) -> MonitorMemo:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def http_get_body(url: str) -> bytes:
    """Fetch url and return the body of the response."""
    with requests.get(url) as resp:
        return resp.content


def _timed_get(m, url: str) -> Optional[tuple]:
    start = time.perf_counter()
    try:
        value = m.get(url)
    except Exception as err:
        logger.error("%s", err)
        return None
    elapsed = time.perf_counter() - start
    print(f"{url}, {format_duration(elapsed)}, {len(value)} bytes", flush=True)
    return url, elapsed, len(value)


def sequential(m, urls: Iterable[str]) -> list:
    """Get each URL through m in turn, printing the time taken and size.

    Returns (url, seconds, size) for each successful request; failures
    are logged and skipped.
    """
    return [result for url in urls if (result := _timed_get(m, url)) is not None]


def concurrent(m, urls: Iterable[str]) -> list:
    """Get all URLs through m at once, printing the time taken and size.

    Returns (url, seconds, size) for each successful request, in the order
    of urls; failures are logged and skipped.
    """
    urls = list(urls)
    if not urls:
        return []
    with ThreadPoolExecutor(max_workers=len(urls)) as pool:
        outcomes = list(pool.map(lambda url: _timed_get(m, url), urls))
    return [result for result in outcomes if result is not None]