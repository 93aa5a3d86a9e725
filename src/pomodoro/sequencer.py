"""Phase sequencer: walks the focus/break cycle and owns the active timer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .constants import (
    DEFAULT_TICK_SECONDS,
    EVENT_CYCLE_RESET,
    SEQUENCER_OBSERVER_CALLBACKS,
    TIMER_EVENT_PREFIX,
    TIMER_EVENTS,
)
from .errors import InvalidConfigurationError
from .events import EventEmitter, bind_observer
from .phases import CycleCursor, Phase, PhaseSettings, PhaseSlot, next_slot
from .scheduler import Scheduler
from .timer import IntervalTimer, TimerSnapshot, TimerState


@dataclass(frozen=True)
class SequencerSnapshot:
    """Phase position plus the active timer's progress."""
    phase: Phase
    next_phase: Phase
    has_long_break: bool
    timer: TimerSnapshot

    @property
    def state(self) -> TimerState:
        return self.timer.state


class PhaseSequencer(EventEmitter):
    """Lazily advances through focus, short-break and long-break phases.

    Exactly one IntervalTimer is owned at a time. Its events are re-emitted
    as ``timer:<name>`` with ``(phase, next_phase, *args)`` so observers can
    tell which phase produced them across timer replacements.
    """

    def __init__(
        self,
        settings: PhaseSettings,
        initial_phase: Phase = Phase.FOCUS,
        *,
        scheduler: Scheduler,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__()
        self._settings = settings
        self._scheduler = scheduler
        self._tick_seconds = tick_seconds
        self._logger = logger or logging.getLogger("pomodoro.sequencer")

        self._cursor = CycleCursor()
        self._phase: Optional[Phase] = None
        self._next_phase: Optional[Phase] = None
        self._start_of_cycle = False
        self._timer: Optional[IntervalTimer] = None

        self.set_phase(initial_phase)

    def observe(self, observer: object) -> None:
        bind_observer(self, observer, SEQUENCER_OBSERVER_CALLBACKS)

    @property
    def settings(self) -> PhaseSettings:
        return self._settings

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def next_phase(self) -> Phase:
        return self._next_phase

    @property
    def has_long_break(self) -> bool:
        return self._settings.has_long_break

    @property
    def timer(self) -> IntervalTimer:
        return self._timer

    @property
    def state(self) -> TimerState:
        return self._timer.state

    @property
    def is_running(self) -> bool:
        return self._timer.is_running

    @property
    def is_stopped(self) -> bool:
        return self._timer.is_stopped

    @property
    def is_paused(self) -> bool:
        return self._timer.is_paused

    def snapshot(self) -> SequencerSnapshot:
        return SequencerSnapshot(
            phase=self._phase,
            next_phase=self._next_phase,
            has_long_break=self.has_long_break,
            timer=self._timer.snapshot(),
        )

    def set_phase(self, target: Phase) -> None:
        """Rewind the cycle and fast-forward it to the first *target* slot.

        No timer is created for the skipped slots; a single stopped timer
        is installed for *target* and the next ``start()`` uses it as-is.
        """
        target = Phase(target)
        if target == Phase.LONG_BREAK and not self.has_long_break:
            raise InvalidConfigurationError("No long break interval defined.")

        cursor = CycleCursor()
        while True:
            slot, cursor = next_slot(self._settings, cursor)
            if slot.phase == target:
                break

        self._cursor = cursor
        self._install(slot)
        self._start_of_cycle = True
        self._logger.info("Cycle reset: phase=%s", target.value)
        self.emit(EVENT_CYCLE_RESET, target)

    def start_cycle(self) -> None:
        self.set_phase(Phase.FOCUS)
        self.start()

    def start_focus(self) -> None:
        self.start_cycle()

    def start_short_break(self) -> None:
        self.set_phase(Phase.SHORT_BREAK)
        self.start()

    def start_long_break(self) -> None:
        self.set_phase(Phase.LONG_BREAK)
        self.start()

    def start(self) -> None:
        if self._start_of_cycle:
            self._start_of_cycle = False
        else:
            slot, self._cursor = next_slot(self._settings, self._cursor)
            self._install(slot)
        self._timer.start()

    def pause(self) -> None:
        self._timer.pause()

    def stop(self) -> None:
        self._timer.stop()

    def resume(self) -> None:
        self._timer.resume()

    def reset(self) -> None:
        self._timer.reset()

    def dispose(self) -> None:
        """Stop and detach the current timer; the sequencer is unusable afterwards."""
        self._release_timer()

    def _install(self, slot: PhaseSlot) -> None:
        self._release_timer()

        self._phase = slot.phase
        self._next_phase = slot.next_phase
        timer = IntervalTimer(
            slot.duration_seconds,
            self._tick_seconds,
            scheduler=self._scheduler,
            logger=self._logger.getChild("timer"),
        )
        for event in TIMER_EVENTS:
            timer.on(event, self._make_forwarder(event))
        self._timer = timer
        self._logger.info(
            "Phase ready: phase=%s next=%s duration=%ss",
            slot.phase.value,
            slot.next_phase.value,
            slot.duration_seconds,
        )

    def _release_timer(self) -> None:
        timer = self._timer
        if timer is None:
            return
        # Stop while still attached so the final stop event is forwarded
        # with the phase that owned this timer.
        timer.dispose()
        self._timer = None

    def _make_forwarder(self, event: str) -> Callable[..., None]:
        name = TIMER_EVENT_PREFIX + event

        def forward(*args: Any) -> None:
            self.emit(name, self._phase, self._next_phase, *args)

        return forward
