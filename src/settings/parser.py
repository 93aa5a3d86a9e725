"""Typed parser for the phase settings TOML file."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli as tomllib  # type: ignore

from pomodoro.constants import (
    DEFAULT_FOCUS_MINUTES,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
)
from pomodoro.phases import PhaseSettings


class SettingsError(Exception):
    """Raised when phase settings cannot be loaded or are invalid."""


def load_settings_file(path: Path) -> PhaseSettings:
    if not path.is_file():
        raise SettingsError(f"Settings path is not a file: {path}")
    try:
        with open(path, "rb") as fh:
            raw = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as error:
        raise SettingsError(f"Failed to parse settings TOML: {error}") from error
    return parse_settings(raw)


def parse_settings(raw: Mapping[str, Any]) -> PhaseSettings:
    """Validate ``[focus]``, ``[short_break]`` and ``[long_break]`` tables.

    Durations are minutes and must be positive. A missing or zero
    ``long_break.interval`` disables the long break. The camelCase table
    names ``shortBreak`` and ``longBreak`` are accepted as aliases.
    """
    focus = _section(raw, "focus")
    short_break = _section(raw, "short_break", "shortBreak")
    long_break = _section(raw, "long_break", "longBreak")

    return PhaseSettings(
        focus_minutes=_as_duration(
            focus.get("duration", DEFAULT_FOCUS_MINUTES),
            "focus.duration",
        ),
        short_break_minutes=_as_duration(
            short_break.get("duration", DEFAULT_SHORT_BREAK_MINUTES),
            "short_break.duration",
        ),
        long_break_minutes=_as_duration(
            long_break.get("duration", DEFAULT_LONG_BREAK_MINUTES),
            "long_break.duration",
        ),
        long_break_interval=_as_interval(
            long_break.get("interval", 0),
            "long_break.interval",
        ),
    )


def _section(root: Mapping[str, Any], name: str, alias: str = "") -> Mapping[str, Any]:
    raw = root.get(name)
    if raw is None and alias:
        raw = root.get(alias)
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise SettingsError(f"[{name}] must be a table.")
    return raw


def _as_duration(value: Any, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SettingsError(f"{field} must be a number of minutes.")
    try:
        minutes = float(value)
    except OverflowError as error:
        raise SettingsError(f"{field} is out of range.") from error
    seconds = minutes * 60
    if not math.isfinite(seconds):
        raise SettingsError(f"{field} must be a finite number of minutes, got: {value}")
    # Durations are truncated to whole seconds; anything below one second
    # would produce an empty phase.
    if int(seconds) <= 0:
        raise SettingsError(f"{field} must be at least one second, got: {value}")
    return minutes


def _as_interval(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SettingsError(f"{field} must be an integer.")
    if value < 0:
        raise SettingsError(f"{field} must not be negative, got: {value}")
    return value
