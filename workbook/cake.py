"""Simulation of a concurrent cake shop with many tunable parameters."""

from __future__ import annotations

import queue
import random
import threading
import time
from dataclasses import dataclass
from typing import Iterator

_CLOSED = object()


class _Channel:
    """A queue whose sends wait for a receiver when it has no buffer."""

    def __init__(self, size: int) -> None:
        self._unbuffered = size <= 0
        self._queue: queue.Queue = queue.Queue(maxsize=1 if self._unbuffered else size)

    def send(self, item) -> None:
        self._queue.put(item)
        if self._unbuffered:
            self._queue.join()

    def close(self, receivers: int) -> None:
        for _ in range(receivers):
            self._queue.put(_CLOSED)

    def receive(self):
        item = self._queue.get()
        self._queue.task_done()
        return item

    def __iter__(self) -> Iterator:
        while (item := self.receive()) is not _CLOSED:
            yield item


def _work(duration: float, stddev: float) -> None:
    """Block for a time normally distributed around duration."""
    delay = duration + random.gauss(0.0, 1.0) * stddev
    if delay > 0:
        time.sleep(delay)


@dataclass
class Shop:
    """A cake shop: one baker, several icers and one inscriber.

    Times are in seconds; the *_buf fields are the buffer slots between
    stages (0 means each hand-over waits for the next cook).
    """

    verbose: bool = False
    cakes: int = 0
    bake_time: float = 0.0
    bake_stddev: float = 0.0
    bake_buf: int = 0
    num_icers: int = 0
    ice_time: float = 0.0
    ice_stddev: float = 0.0
    ice_buf: int = 0
    inscribe_time: float = 0.0
    inscribe_stddev: float = 0.0

    def _say(self, action: str, cake: int) -> None:
        if self.verbose:
            print(action, cake, flush=True)

    def _baker(self, baked: _Channel) -> None:
        for cake in range(self.cakes):
            self._say("baking", cake)
            _work(self.bake_time, self.bake_stddev)
            baked.send(cake)
        baked.close(self.num_icers)

    def _icer(self, iced: _Channel, baked: _Channel) -> None:
        for cake in baked:
            self._say("icing", cake)
            _work(self.ice_time, self.ice_stddev)
            iced.send(cake)

    def _inscriber(self, iced: _Channel) -> list:
        finished = []
        for _ in range(self.cakes):
            cake = iced.receive()
            self._say("inscribing", cake)
            _work(self.inscribe_time, self.inscribe_stddev)
            self._say("finished", cake)
            finished.append(cake)
        return finished

    def _run(self) -> list:
        if self.cakes > 0 and self.num_icers < 1:
            raise ValueError("a shop that bakes cakes needs at least one icer")
        baked = _Channel(self.bake_buf)
        iced = _Channel(self.ice_buf)
        cooks = [threading.Thread(target=self._baker, args=(baked,), daemon=True)]
        cooks.extend(
            threading.Thread(target=self._icer, args=(iced, baked), daemon=True)
            for _ in range(self.num_icers)
        )
        for cook in cooks:
            cook.start()
        finished = self._inscriber(iced)
        for cook in cooks:
            cook.join()
        return finished

    def work(self, runs: int = 1) -> list:
        """Run the simulation runs times.

        Returns the cakes in the order they were finished, over all runs.
        """
        finished: list = []
        for _ in range(runs):
            finished.extend(self._run())
        return finished