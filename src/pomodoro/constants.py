"""Event names, defaults, and observer callback tables used by the timer core."""

from __future__ import annotations

DEFAULT_TICK_SECONDS = 60

DEFAULT_FOCUS_MINUTES = 25
DEFAULT_SHORT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15
DEFAULT_LONG_BREAK_INTERVAL = 4

# IntervalTimer events
EVENT_START = "start"
EVENT_STOP = "stop"
EVENT_PAUSE = "pause"
EVENT_RESUME = "resume"
EVENT_TICK = "tick"
EVENT_EXPIRE = "expire"
EVENT_CHANGE = "change"

TIMER_EVENTS: tuple[str, ...] = (
    EVENT_START,
    EVENT_STOP,
    EVENT_PAUSE,
    EVENT_RESUME,
    EVENT_TICK,
    EVENT_EXPIRE,
    EVENT_CHANGE,
)

# Sequencer events
TIMER_EVENT_PREFIX = "timer:"
EVENT_TIMER_START = TIMER_EVENT_PREFIX + EVENT_START
EVENT_TIMER_STOP = TIMER_EVENT_PREFIX + EVENT_STOP
EVENT_TIMER_PAUSE = TIMER_EVENT_PREFIX + EVENT_PAUSE
EVENT_TIMER_RESUME = TIMER_EVENT_PREFIX + EVENT_RESUME
EVENT_TIMER_TICK = TIMER_EVENT_PREFIX + EVENT_TICK
EVENT_TIMER_EXPIRE = TIMER_EVENT_PREFIX + EVENT_EXPIRE
EVENT_TIMER_CHANGE = TIMER_EVENT_PREFIX + EVENT_CHANGE
EVENT_CYCLE_RESET = "cycle:reset"

SEQUENCER_EVENTS: tuple[str, ...] = tuple(
    TIMER_EVENT_PREFIX + name for name in TIMER_EVENTS
) + (EVENT_CYCLE_RESET,)

# Settings provider events
EVENT_SETTINGS_CHANGE = "change"

# Observer method name -> event name
TIMER_OBSERVER_CALLBACKS: dict[str, str] = {
    "on_start": EVENT_START,
    "on_stop": EVENT_STOP,
    "on_pause": EVENT_PAUSE,
    "on_resume": EVENT_RESUME,
    "on_tick": EVENT_TICK,
    "on_expire": EVENT_EXPIRE,
    "on_change": EVENT_CHANGE,
}

SEQUENCER_OBSERVER_CALLBACKS: dict[str, str] = {
    "on_timer_start": EVENT_TIMER_START,
    "on_timer_stop": EVENT_TIMER_STOP,
    "on_timer_pause": EVENT_TIMER_PAUSE,
    "on_timer_resume": EVENT_TIMER_RESUME,
    "on_timer_tick": EVENT_TIMER_TICK,
    "on_timer_expire": EVENT_TIMER_EXPIRE,
    "on_timer_change": EVENT_TIMER_CHANGE,
    "on_cycle_reset": EVENT_CYCLE_RESET,
}
