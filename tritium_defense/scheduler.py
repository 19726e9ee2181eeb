from __future__ import annotations

"""Deferred, cancellable actions keyed to the simulation clock (ms)."""

import heapq
import itertools
from typing import Any, Callable


class ScheduledAction:
    """Handle to a pending callback; ``cancel()`` prevents it from ever firing."""

    __slots__ = ("due_ms", "callback", "args", "cancelled", "fired")

    def __init__(self, due_ms: int, callback: Callable[..., Any], args: tuple) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not self.cancelled and not self.fired


class Scheduler:
    """
    Runs callbacks once the simulation clock reaches their due time.

    Due actions run in due-time order, ties in scheduling order. Actions
    scheduled from inside a callback with no delay run in the same update.
    """

    def __init__(self, now_ms: int = 0) -> None:
        self.now_ms = now_ms
        self._queue: list[tuple[int, int, ScheduledAction]] = []
        self._counter = itertools.count()

    def schedule(self, delay_ms: int, callback: Callable[..., Any], *args: Any) -> ScheduledAction:
        action = ScheduledAction(self.now_ms + max(0, delay_ms), callback, args)
        heapq.heappush(self._queue, (action.due_ms, next(self._counter), action))
        return action

    def update(self, now_ms: int) -> int:
        """Advance the clock to ``now_ms`` and fire due actions; returns how many fired."""
        self.now_ms = max(self.now_ms, now_ms)
        fired = 0
        while self._queue and self._queue[0][0] <= self.now_ms:
            _, _, action = heapq.heappop(self._queue)
            if action.cancelled:
                continue
            action.fired = True
            action.callback(*action.args)
            fired += 1
        return fired

    def cancel_all(self) -> None:
        for _, _, action in self._queue:
            action.cancel()
        self._queue.clear()

    @property
    def pending(self) -> int:
        return sum(1 for _, _, action in self._queue if action.pending)
