"""Timer facilities that drive IntervalTimer callbacks.

``AsyncioScheduler`` runs callbacks on an asyncio event loop and is what the
application uses. ``ManualScheduler`` keeps a virtual clock that only moves
when ``advance()`` is called, which makes whole phase cycles reproducible
without waiting in real time.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, Optional, Protocol

Callback = Callable[[], None]


class ScheduledCall(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Clock plus one-shot and repeating callback scheduling."""

    def time(self) -> float:
        ...

    def call_at(self, when: float, callback: Callback) -> ScheduledCall:
        ...

    def call_later(self, delay: float, callback: Callback) -> ScheduledCall:
        ...

    def call_repeating(self, period: float, callback: Callback) -> ScheduledCall:
        ...


class RepeatingCall:
    """Fires *callback* every *period* seconds until cancelled.

    Each firing is anchored to the previous target time rather than to the
    moment the callback ran, so late callbacks do not accumulate drift. The
    next firing is armed before the callback runs, which lets the callback
    cancel its own repetition.
    """

    def __init__(self, scheduler: Scheduler, period: float, callback: Callback):
        if period <= 0:
            raise ValueError("period must be greater than zero")
        self._scheduler = scheduler
        self._period = float(period)
        self._callback = callback
        self._cancelled = False
        self._next_at = scheduler.time() + self._period
        self._handle: ScheduledCall = scheduler.call_at(self._next_at, self._run)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()

    def _run(self) -> None:
        if self._cancelled:
            return
        now = self._scheduler.time()
        self._next_at += self._period
        if self._next_at <= now:
            # The loop stalled for more than one period; skip missed firings.
            self._next_at = now + self._period
        self._handle = self._scheduler.call_at(self._next_at, self._run)
        self._callback()


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop's monotonic clock."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def time(self) -> float:
        return self.loop.time()

    def call_at(self, when: float, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_at(when, callback)

    def call_later(self, delay: float, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, delay), callback)

    def call_repeating(self, period: float, callback: Callback) -> RepeatingCall:
        return RepeatingCall(self, period, callback)


class ManualCall:
    def __init__(self, when: float, callback: Callback):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler with a virtual clock."""

    def __init__(self, start: float = 0.0):
        self._now = float(start)
        self._queue: list[tuple[float, int, ManualCall]] = []
        self._sequence = itertools.count()

    def time(self) -> float:
        return self._now

    def call_at(self, when: float, callback: Callback) -> ManualCall:
        call = ManualCall(float(when), callback)
        heapq.heappush(self._queue, (call.when, next(self._sequence), call))
        return call

    def call_later(self, delay: float, callback: Callback) -> ManualCall:
        return self.call_at(self._now + max(0.0, delay), callback)

    def call_repeating(self, period: float, callback: Callback) -> RepeatingCall:
        return RepeatingCall(self, period, callback)

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due callbacks in time order.

        Callbacks scheduled while advancing are honoured if they fall inside
        the window. Returns the number of callbacks fired.
        """
        if seconds < 0:
            raise ValueError("cannot advance a clock backwards")
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self._now = when
            call.cancelled = True
            call.callback()
            fired += 1
        self._now = target
        return fired
