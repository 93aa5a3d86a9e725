"""Runtime glue between the phase timer, settings, and the event stream."""

from .commands import CommandDispatcher, CommandResult
from .messages import format_duration, status_message
from .publisher import TimerEventPublisher, snapshot_payload

__all__ = [
    "CommandDispatcher",
    "CommandResult",
    "TimerEventPublisher",
    "format_duration",
    "snapshot_payload",
    "status_message",
]
