"""Single-interval countdown timer driven by scheduled callbacks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import (
    EVENT_CHANGE,
    EVENT_EXPIRE,
    EVENT_PAUSE,
    EVENT_RESUME,
    EVENT_START,
    EVENT_STOP,
    EVENT_TICK,
    TIMER_OBSERVER_CALLBACKS,
)
from .events import EventEmitter, bind_observer
from .scheduler import ScheduledCall, Scheduler


class TimerState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable view of an IntervalTimer exposed to publishers."""
    state: TimerState
    duration_seconds: float
    elapsed_seconds: float
    remaining_seconds: float

    @property
    def is_active(self) -> bool:
        return self.state != TimerState.STOPPED


class IntervalTimer(EventEmitter):
    """Countdown over a fixed duration with start/stop/pause/resume.

    While running, two callbacks are armed on the scheduler: a one-shot
    expiry after the remaining time and a repeating tick every
    ``tick_seconds``. Both are cancelled whenever the timer leaves the
    running state. ``remaining`` is committed only on pause; ticks report a
    projected value computed from ``period_start_time``.
    """

    def __init__(
        self,
        duration: float,
        tick_seconds: float,
        *,
        scheduler: Scheduler,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__()
        if duration <= 0:
            raise ValueError("duration must be greater than zero")
        if tick_seconds <= 0:
            raise ValueError("tick_seconds must be greater than zero")

        self._duration = duration
        self._tick_seconds = tick_seconds
        self._scheduler = scheduler
        self._logger = logger or logging.getLogger("pomodoro.timer")

        self._state = TimerState.STOPPED
        self._remaining: Optional[float] = None
        self._period_start_time: Optional[float] = None
        self._expire_call: Optional[ScheduledCall] = None
        self._tick_call: Optional[ScheduledCall] = None

    def observe(self, observer: object) -> None:
        bind_observer(self, observer, TIMER_OBSERVER_CALLBACKS)

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def tick_seconds(self) -> float:
        return self._tick_seconds

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def remaining(self) -> Optional[float]:
        return self._remaining

    @property
    def period_start_time(self) -> Optional[float]:
        return self._period_start_time

    @property
    def is_stopped(self) -> bool:
        return self._state == TimerState.STOPPED

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._state == TimerState.PAUSED

    def snapshot(self) -> TimerSnapshot:
        if self._state == TimerState.STOPPED:
            remaining = self._duration
        elif self._state == TimerState.RUNNING:
            remaining = self._projected_remaining()
        else:
            remaining = self._remaining
        return TimerSnapshot(
            state=self._state,
            duration_seconds=self._duration,
            elapsed_seconds=self._duration - remaining,
            remaining_seconds=remaining,
        )

    def start(self) -> None:
        if not self.is_stopped:
            return

        self._arm(self._duration)
        self._remaining = self._duration
        self._state = TimerState.RUNNING
        self._period_start_time = self._scheduler.time()
        self._logger.info("Timer started: duration=%ss", self._duration)
        self.emit(EVENT_START, 0, self._remaining)
        self.emit(EVENT_CHANGE)

    def stop(self) -> None:
        if self.is_stopped:
            return

        self._disarm()
        self._period_start_time = None
        self._remaining = None
        self._state = TimerState.STOPPED
        self._logger.info("Timer stopped")
        self.emit(EVENT_STOP)
        self.emit(EVENT_CHANGE)

    def pause(self) -> None:
        if not self.is_running:
            return

        self._disarm()
        self._remaining = self._projected_remaining()
        self._state = TimerState.PAUSED
        self._period_start_time = None

        elapsed = self._duration - self._remaining
        self._logger.info("Timer paused: remaining=%.1fs", self._remaining)
        self.emit(EVENT_PAUSE, elapsed, self._remaining)
        self.emit(EVENT_CHANGE)

    def resume(self) -> None:
        if not self.is_paused:
            return

        self._arm(self._remaining)
        self._state = TimerState.RUNNING
        self._period_start_time = self._scheduler.time()

        elapsed = self._duration - self._remaining
        self._logger.info("Timer resumed: remaining=%.1fs", self._remaining)
        self.emit(EVENT_RESUME, elapsed, self._remaining)
        self.emit(EVENT_CHANGE)

    def reset(self) -> None:
        self.stop()
        self.start()

    def dispose(self) -> None:
        """Stop the timer and drop every subscriber."""
        self.stop()
        self.remove_all_listeners()

    def _projected_remaining(self) -> float:
        period_length = self._scheduler.time() - self._period_start_time
        return self._remaining - period_length

    def _arm(self, seconds: float) -> None:
        self._expire_call = self._scheduler.call_later(seconds, self._on_expire)
        self._tick_call = self._scheduler.call_repeating(self._tick_seconds, self._on_tick)

    def _disarm(self) -> None:
        if self._tick_call is not None:
            self._tick_call.cancel()
        if self._expire_call is not None:
            self._expire_call.cancel()
        self._tick_call = None
        self._expire_call = None

    def _on_tick(self) -> None:
        remaining = self._projected_remaining()
        elapsed = self._duration - remaining
        self._logger.debug("Timer tick: elapsed=%.1fs remaining=%.1fs", elapsed, remaining)
        self.emit(EVENT_TICK, elapsed, remaining)

    def _on_expire(self) -> None:
        self._disarm()
        self._period_start_time = None
        self._remaining = None
        self._state = TimerState.STOPPED
        self._logger.info("Timer expired: duration=%ss", self._duration)
        self.emit(EVENT_EXPIRE, self._duration, 0)
        self.emit(EVENT_CHANGE)
