"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CONFIG_FILE = "config.toml"
DEFAULT_SETTINGS_FILE = "settings.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class LoggingSettings:
    """Log verbosity from `[logging]`."""
    level: str = "INFO"


@dataclass(frozen=True)
class TimerSettings:
    """Phase timer wiring from `[timer]`."""
    settings_file: str = ""
    tick_seconds: float = 60.0
    watch_interval_seconds: float = 2.0


@dataclass(frozen=True)
class UIServerSettings:
    """Websocket event-stream settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    logging: LoggingSettings
    timer: TimerSettings
    ui_server: UIServerSettings
    source_file: str
