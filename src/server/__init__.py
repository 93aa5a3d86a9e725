"""Websocket event stream for phase timer clients."""

from .config import EventServerConfig, ServerConfigurationError
from .service import EventStreamServer

__all__ = [
    "EventServerConfig",
    "EventStreamServer",
    "ServerConfigurationError",
]
