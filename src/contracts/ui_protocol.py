"""Websocket event types exchanged with event-stream clients."""

from __future__ import annotations

# Websocket event types
EVENT_HELLO = "hello"
EVENT_TIMER = "timer"
EVENT_CYCLE = "cycle"
EVENT_SETTINGS = "settings"
EVENT_COMMAND_RESULT = "command_result"
EVENT_ERROR = "error"

# `cycle` event actions
CYCLE_ACTION_RESET = "reset"

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_TIMER,
        EVENT_CYCLE,
        EVENT_SETTINGS,
    }
)

# Replay order for newly connected clients: configuration first, then the
# cycle position, then the latest timer progress.
STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_SETTINGS,
    EVENT_CYCLE,
    EVENT_TIMER,
)
