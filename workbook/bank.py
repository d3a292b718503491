"""Concurrency-safe banks with a single account."""

from __future__ import annotations

import queue
import threading
from typing import Optional

_STOP = object()


class TellerBank:
    """A bank whose balance is confined to a teller thread.

    Deposits and balance enquiries are messages to the teller. Call close
    when done, or use the bank as a context manager.
    """

    def __init__(self) -> None:
        self._requests: queue.Queue = queue.Queue()
        self._guard = threading.Lock()
        self._closed = False
        self._teller = threading.Thread(target=self._serve, name="teller", daemon=True)
        self._teller.start()

    def _serve(self) -> None:
        balance = 0
        while (request := self._requests.get()) is not _STOP:
            amount, reply = request
            if reply is None:
                balance += amount
            else:
                reply.put(balance)

    def _send(self, request: tuple) -> None:
        with self._guard:
            if self._closed:
                raise RuntimeError("bank is closed")
            self._requests.put(request)

    def deposit(self, amount: int) -> None:
        """Deposit amount into the account."""
        self._send((amount, None))

    def balance(self) -> int:
        """Return the account balance."""
        reply: queue.Queue = queue.Queue(maxsize=1)
        self._send((0, reply))
        return reply.get()

    def close(self) -> None:
        """Stop the teller; later deposits and enquiries raise RuntimeError."""
        with self._guard:
            if self._closed:
                return
            self._closed = True
            self._requests.put(_STOP)
        self._teller.join()

    def __enter__(self) -> TellerBank:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class LockedBank:
    """A bank whose balance is guarded by a lock.

    Any lock-like object will do, e.g. a binary threading.Semaphore.
    """

    def __init__(self, lock: Optional[object] = None) -> None:
        self._lock = threading.Lock() if lock is None else lock
        self._balance = 0

    def deposit(self, amount: int) -> None:
        """Deposit amount into the account."""
        with self._lock:
            self._balance = self._balance + amount

    def balance(self) -> int:
        """Return the account balance."""
        with self._lock:
            return self._balance