"""Delayed-callback scheduling for the opponent's presentation delay.

Any object with an asyncio-style ``call_later(delay, callback)`` returning a
cancellable handle can drive the controller; ``asyncio`` event loops work
as-is. ``ManualScheduler`` keeps a virtual clock for synchronous hosts,
headless runs and tests.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, Protocol

__all__ = ["Cancellable", "Scheduler", "ScheduledTask", "ManualScheduler"]


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


@dataclass(slots=True)
class ScheduledTask:
    """Handle for a callback queued on a ``ManualScheduler``."""

    due: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(slots=True)
class ManualScheduler:
    """Scheduler whose clock only moves when told to."""

    now: float = 0.0
    _queue: list[tuple[float, int, ScheduledTask]] = field(default_factory=list, init=False, repr=False)
    _counter: itertools.count = field(default_factory=itertools.count, init=False, repr=False)

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        task = ScheduledTask(due=self.now + delay, callback=callback)
        heapq.heappush(self._queue, (task.due, next(self._counter), task))
        return task

    @property
    def pending(self) -> int:
        """Number of queued callbacks that have not been cancelled."""

        return sum(1 for _, _, task in self._queue if not task.cancelled)

    def next_due(self) -> float | None:
        for due, _, task in sorted(self._queue):
            if not task.cancelled:
                return due
        return None

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire every callback now due.

        Callbacks scheduled while firing run too when they fall inside the
        window. Returns the number of callbacks fired.
        """

        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        deadline = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, task = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            if task.cancelled:
                continue
            task.callback()
            fired += 1
        self.now = deadline
        return fired

    def run_pending(self) -> int:
        """Fire callbacks in due order until the queue is empty."""

        fired = 0
        while self._queue:
            due, _, task = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            if task.cancelled:
                continue
            task.callback()
            fired += 1
        return fired
