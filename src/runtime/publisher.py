"""Observer that mirrors sequencer events onto the websocket event stream."""

from __future__ import annotations

import math
from typing import Any, Optional

from contracts.ui_protocol import (
    CYCLE_ACTION_RESET,
    EVENT_CYCLE,
    EVENT_SETTINGS,
    EVENT_TIMER,
)
from pomodoro import Phase, PhaseSettings, SequencerSnapshot
from pomodoro.constants import (
    EVENT_EXPIRE,
    EVENT_PAUSE,
    EVENT_RESUME,
    EVENT_START,
    EVENT_STOP,
    EVENT_TICK,
)

from .contracts import EventServerLike
from .messages import status_message, timer_event_message


def snapshot_payload(snapshot: SequencerSnapshot) -> dict[str, Any]:
    """Serialize a sequencer snapshot into JSON-friendly fields."""
    timer = snapshot.timer
    return {
        "phase": snapshot.phase.value,
        "next_phase": snapshot.next_phase.value,
        "has_long_break": snapshot.has_long_break,
        "state": timer.state.value,
        "duration_seconds": int(timer.duration_seconds),
        "elapsed_seconds": int(timer.elapsed_seconds),
        "remaining_seconds": int(math.ceil(timer.remaining_seconds)),
        "message": status_message(snapshot),
    }


class TimerEventPublisher:
    """Publishes ``timer`` and ``cycle`` events for every sequencer notification.

    ``timer:change`` carries no payload and is not published.
    """

    def __init__(self, server: Optional[EventServerLike]):
        self._server = server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._server:
            self._server.publish(event_type, **payload)

    def publish_settings(self, settings: PhaseSettings) -> None:
        self.publish(EVENT_SETTINGS, **settings.to_mapping())

    def on_timer_start(self, phase: Phase, next_phase: Phase, elapsed: float, remaining: float) -> None:
        self._publish_progress(EVENT_START, phase, next_phase, elapsed, remaining)

    def on_timer_pause(self, phase: Phase, next_phase: Phase, elapsed: float, remaining: float) -> None:
        self._publish_progress(EVENT_PAUSE, phase, next_phase, elapsed, remaining)

    def on_timer_resume(self, phase: Phase, next_phase: Phase, elapsed: float, remaining: float) -> None:
        self._publish_progress(EVENT_RESUME, phase, next_phase, elapsed, remaining)

    def on_timer_tick(self, phase: Phase, next_phase: Phase, elapsed: float, remaining: float) -> None:
        self._publish_progress(EVENT_TICK, phase, next_phase, elapsed, remaining)

    def on_timer_expire(self, phase: Phase, next_phase: Phase, elapsed: float, remaining: float) -> None:
        self._publish_progress(EVENT_EXPIRE, phase, next_phase, elapsed, remaining)

    def on_timer_stop(self, phase: Phase, next_phase: Phase) -> None:
        self.publish(
            EVENT_TIMER,
            action=EVENT_STOP,
            phase=phase.value,
            next_phase=next_phase.value,
            message=timer_event_message(EVENT_STOP, phase, next_phase),
        )

    def on_cycle_reset(self, phase: Phase) -> None:
        self.publish(EVENT_CYCLE, action=CYCLE_ACTION_RESET, phase=phase.value)

    def _publish_progress(
        self,
        action: str,
        phase: Phase,
        next_phase: Phase,
        elapsed: float,
        remaining: float,
    ) -> None:
        self.publish(
            EVENT_TIMER,
            action=action,
            phase=phase.value,
            next_phase=next_phase.value,
            elapsed_seconds=int(elapsed),
            remaining_seconds=int(math.ceil(remaining)),
            message=timer_event_message(action, phase, next_phase, remaining),
        )
