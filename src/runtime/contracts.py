"""Protocols describing runtime-facing timer and settings capabilities."""

from __future__ import annotations

from typing import Any, Protocol

from pomodoro import Phase, PhaseSettings, SequencerSnapshot


class PhaseTimerLike(Protocol):
    """Control surface of the configuration-bound sequencer."""
    @property
    def settings(self) -> PhaseSettings:
        ...

    def snapshot(self) -> SequencerSnapshot:
        ...

    def set_phase(self, target: Phase) -> None:
        ...

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...

    def pause(self) -> None:
        ...

    def resume(self) -> None:
        ...

    def reset(self) -> None:
        ...

    def start_cycle(self) -> None:
        ...

    def start_focus(self) -> None:
        ...

    def start_short_break(self) -> None:
        ...

    def start_long_break(self) -> None:
        ...


class SettingsUpdaterLike(Protocol):
    """Settings provider capability used by the `update_settings` command."""
    def update(self, settings: PhaseSettings) -> bool:
        ...


class EventServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...

