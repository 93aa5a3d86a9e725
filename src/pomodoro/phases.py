"""Phase enumeration, cycle settings, and the pure phase step function."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional

from .constants import (
    DEFAULT_FOCUS_MINUTES,
    DEFAULT_LONG_BREAK_INTERVAL,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
)


class Phase(str, Enum):
    FOCUS = "focus"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


def _minutes_to_seconds(minutes: float) -> int:
    return int(minutes * 60)


@dataclass(frozen=True)
class PhaseSettings:
    """Durations (minutes) for each phase and the long-break interval.

    A ``long_break_interval`` of 0 disables the long break entirely: the
    cycle then alternates focus and short breaks forever.
    """
    focus_minutes: float = DEFAULT_FOCUS_MINUTES
    short_break_minutes: float = DEFAULT_SHORT_BREAK_MINUTES
    long_break_minutes: float = DEFAULT_LONG_BREAK_MINUTES
    long_break_interval: int = DEFAULT_LONG_BREAK_INTERVAL

    def __post_init__(self) -> None:
        for name in ("focus_minutes", "short_break_minutes", "long_break_minutes"):
            minutes = getattr(self, name)
            if not math.isfinite(minutes * 60) or _minutes_to_seconds(minutes) <= 0:
                raise ValueError(f"{name} must be at least one second, got: {minutes}")
        if self.long_break_interval < 0:
            raise ValueError(
                f"long_break_interval must not be negative, got: {self.long_break_interval}"
            )

    @property
    def has_long_break(self) -> bool:
        return self.long_break_interval > 0

    @property
    def focus_seconds(self) -> int:
        return _minutes_to_seconds(self.focus_minutes)

    @property
    def short_break_seconds(self) -> int:
        return _minutes_to_seconds(self.short_break_minutes)

    @property
    def long_break_seconds(self) -> int:
        return _minutes_to_seconds(self.long_break_minutes)

    def duration_seconds(self, phase: Phase) -> int:
        if phase == Phase.FOCUS:
            return self.focus_seconds
        if phase == Phase.SHORT_BREAK:
            return self.short_break_seconds
        return self.long_break_seconds

    def to_mapping(self) -> dict[str, Any]:
        return {
            "focus": {"duration": self.focus_minutes},
            "short_break": {"duration": self.short_break_minutes},
            "long_break": {
                "duration": self.long_break_minutes,
                "interval": self.long_break_interval,
            },
        }


@dataclass(frozen=True)
class PhaseSlot:
    """One generated entry of the cycle."""
    duration_seconds: int
    phase: Phase
    next_phase: Phase


@dataclass(frozen=True)
class CycleCursor:
    """Position of the most recently generated slot.

    ``phase`` is ``None`` before the first step. ``repetition`` counts
    completed focus/short-break pairs since the last long break.
    """
    repetition: int = 0
    phase: Optional[Phase] = None


def next_slot(settings: PhaseSettings, cursor: CycleCursor) -> tuple[PhaseSlot, CycleCursor]:
    """Return the slot following *cursor* and the advanced cursor."""
    interval = settings.long_break_interval
    last_repetition = settings.has_long_break and cursor.repetition == interval - 1

    if cursor.phase == Phase.FOCUS:
        next_phase = Phase.LONG_BREAK if last_repetition else Phase.FOCUS
        return (
            PhaseSlot(settings.short_break_seconds, Phase.SHORT_BREAK, next_phase),
            CycleCursor(cursor.repetition, Phase.SHORT_BREAK),
        )

    if cursor.phase == Phase.SHORT_BREAK and last_repetition:
        return (
            PhaseSlot(settings.long_break_seconds, Phase.LONG_BREAK, Phase.FOCUS),
            CycleCursor(cursor.repetition, Phase.LONG_BREAK),
        )

    if cursor.phase == Phase.SHORT_BREAK and settings.has_long_break:
        repetition = cursor.repetition + 1
    else:
        # Start of the cycle, after a long break, or endless cycling.
        repetition = 0
    return (
        PhaseSlot(settings.focus_seconds, Phase.FOCUS, Phase.SHORT_BREAK),
        CycleCursor(repetition, Phase.FOCUS),
    )


def iter_slots(settings: PhaseSettings, cursor: CycleCursor = CycleCursor()) -> Iterator[PhaseSlot]:
    """Yield the unbounded slot sequence starting after *cursor*."""
    while True:
        slot, cursor = next_slot(settings, cursor)
        yield slot

