"""Canonical control command names accepted from event-stream clients."""

from __future__ import annotations

COMMAND_START = "start"
COMMAND_STOP = "stop"
COMMAND_PAUSE = "pause"
COMMAND_RESUME = "resume"
COMMAND_RESET = "reset"
COMMAND_START_CYCLE = "start_cycle"
COMMAND_START_FOCUS = "start_focus"
COMMAND_START_SHORT_BREAK = "start_short_break"
COMMAND_START_LONG_BREAK = "start_long_break"
COMMAND_STATUS = "status"
COMMAND_UPDATE_SETTINGS = "update_settings"

COMMAND_NAME_ORDER: tuple[str, ...] = (
    COMMAND_START,
    COMMAND_STOP,
    COMMAND_PAUSE,
    COMMAND_RESUME,
    COMMAND_RESET,
    COMMAND_START_CYCLE,
    COMMAND_START_FOCUS,
    COMMAND_START_SHORT_BREAK,
    COMMAND_START_LONG_BREAK,
    COMMAND_STATUS,
    COMMAND_UPDATE_SETTINGS,
)

COMMAND_NAMES: frozenset[str] = frozenset(COMMAND_NAME_ORDER)

# Commands that map one-to-one onto a timer operation of the same name.
TIMER_OPERATION_COMMANDS: frozenset[str] = frozenset(
    {
        COMMAND_START,
        COMMAND_STOP,
        COMMAND_PAUSE,
        COMMAND_RESUME,
        COMMAND_RESET,
        COMMAND_START_CYCLE,
        COMMAND_START_FOCUS,
        COMMAND_START_SHORT_BREAK,
        COMMAND_START_LONG_BREAK,
    }
)

REASON_OK = "ok"
REASON_UNKNOWN_COMMAND = "unknown_command"
REASON_INVALID_CONFIGURATION = "invalid_configuration"
REASON_INVALID_SETTINGS = "invalid_settings"
