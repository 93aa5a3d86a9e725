"""Status and event text builders for phase timer flows."""

from __future__ import annotations

import math

from pomodoro import Phase, SequencerSnapshot, TimerState
from pomodoro.constants import (
    EVENT_EXPIRE,
    EVENT_PAUSE,
    EVENT_RESUME,
    EVENT_START,
    EVENT_STOP,
    EVENT_TICK,
)

PHASE_LABELS: dict[Phase, str] = {
    Phase.FOCUS: "Focus",
    Phase.SHORT_BREAK: "Short break",
    Phase.LONG_BREAK: "Long break",
}


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as `MM:SS`, rounding partial seconds up."""
    minutes, remainder = divmod(max(0, int(math.ceil(seconds))), 60)
    return f"{minutes:02d}:{remainder:02d}"


def phase_label(phase: Phase) -> str:
    return PHASE_LABELS[Phase(phase)]


def status_message(snapshot: SequencerSnapshot) -> str:
    """Build status text for the current sequencer snapshot."""
    label = phase_label(snapshot.phase)
    remaining = format_duration(snapshot.timer.remaining_seconds)
    if snapshot.state == TimerState.RUNNING:
        return f"{label} running ({remaining} remaining)"
    if snapshot.state == TimerState.PAUSED:
        return f"{label} paused ({remaining} remaining)"
    return f"{label} ready ({remaining})"


def timer_event_message(
    action: str,
    phase: Phase,
    next_phase: Phase,
    remaining_seconds: float = 0.0,
) -> str:
    """Build the text attached to a `timer` websocket event."""
    label = phase_label(phase)
    if action == EVENT_START:
        return f"{label} started ({format_duration(remaining_seconds)})"
    if action == EVENT_PAUSE:
        return f"{label} paused ({format_duration(remaining_seconds)} remaining)"
    if action == EVENT_RESUME:
        return f"{label} resumed ({format_duration(remaining_seconds)} remaining)"
    if action == EVENT_TICK:
        return f"{label}: {format_duration(remaining_seconds)} remaining"
    if action == EVENT_EXPIRE:
        return f"{label} complete, {phase_label(next_phase).lower()} is next"
    if action == EVENT_STOP:
        return f"{label} stopped"
    return label
