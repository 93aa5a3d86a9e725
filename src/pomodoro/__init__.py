from .constants import DEFAULT_TICK_SECONDS
from .errors import InvalidConfigurationError, PomodoroError
from .events import EventEmitter, bind_observer
from .phases import (
    CycleCursor,
    Phase,
    PhaseSettings,
    PhaseSlot,
    iter_slots,
    next_slot,
)
from .scheduler import AsyncioScheduler, ManualScheduler, Scheduler
from .sequencer import PhaseSequencer, SequencerSnapshot
from .service import ConfigurationBoundPhaseSequencer
from .timer import IntervalTimer, TimerSnapshot, TimerState

__all__ = [
    "AsyncioScheduler",
    "ConfigurationBoundPhaseSequencer",
    "CycleCursor",
    "DEFAULT_TICK_SECONDS",
    "EventEmitter",
    "IntervalTimer",
    "InvalidConfigurationError",
    "ManualScheduler",
    "Phase",
    "PhaseSequencer",
    "PhaseSettings",
    "PhaseSlot",
    "PomodoroError",
    "Scheduler",
    "SequencerSnapshot",
    "TimerSnapshot",
    "TimerState",
    "bind_observer",
    "iter_slots",
    "next_slot",
]
