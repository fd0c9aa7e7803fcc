"""Single-threaded timer queue used to pace a battle.

Callbacks never run concurrently: they fire one at a time from ``advance`` /
``run_until_idle`` (virtual clock) or ``run_realtime`` (wall clock, sleeping
until the next due timer).
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional
import heapq
import itertools
import time


@dataclass(order=True)
class TimerHandle:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    label: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self):
        self.cancelled = True


class TimerQueue:
    def __init__(self, *, realtime: bool = False):
        self.realtime = realtime
        self._now = time.monotonic() if realtime else 0.0
        self._heap: List[TimerHandle] = []
        self._seq = itertools.count()

    def now(self) -> float:
        if self.realtime:
            return time.monotonic()
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None], label: str = "") -> TimerHandle:
        handle = TimerHandle(self.now() + max(0.0, float(delay)), next(self._seq), callback, label)
        heapq.heappush(self._heap, handle)
        return handle

    def cancel_all(self):
        for h in self._heap:
            h.cancel()
        self._heap.clear()

    def pending(self) -> int:
        return sum(1 for h in self._heap if not h.cancelled)

    def next_due(self) -> Optional[float]:
        self._drop_cancelled()
        return self._heap[0].due if self._heap else None

    def _drop_cancelled(self):
        while self._heap and self._heap[0].cancelled:
            heapq.heappop(self._heap)

    def _fire_next(self) -> bool:
        self._drop_cancelled()
        if not self._heap:
            return False
        handle = heapq.heappop(self._heap)
        if not self.realtime:
            self._now = max(self._now, handle.due)
        handle.callback()
        return True

    def advance(self, seconds: float) -> int:
        """Move the virtual clock forward, firing every timer due on the way."""
        target = self._now + seconds
        fired = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            self._fire_next()
            fired += 1
        self._now = target
        return fired

    def run_until_idle(self, max_callbacks: int = 10_000) -> int:
        fired = 0
        while fired < max_callbacks and self._fire_next():
            fired += 1
        return fired

    def run_realtime(self, until: Callable[[], bool], poll: float = 0.05):
        """Sleep/fire loop for interactive use; returns when ``until()`` holds or no timers remain."""
        while not until():
            due = self.next_due()
            if due is None:
                return
            wait = due - self.now()
            if wait > 0:
                time.sleep(min(wait, poll))
                continue
            self._fire_next()


__all__ = ["TimerQueue", "TimerHandle"]
