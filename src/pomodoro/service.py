"""Phase sequencer bound to a settings provider."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .constants import (
    DEFAULT_TICK_SECONDS,
    EVENT_SETTINGS_CHANGE,
    SEQUENCER_EVENTS,
    SEQUENCER_OBSERVER_CALLBACKS,
)
from .contracts import SettingsProviderLike
from .events import EventEmitter, bind_observer
from .phases import Phase, PhaseSettings
from .scheduler import Scheduler
from .sequencer import PhaseSequencer, SequencerSnapshot
from .timer import TimerState


class ConfigurationBoundPhaseSequencer(EventEmitter):
    """Keeps one PhaseSequencer in sync with the settings provider.

    Every settings change disposes the current sequencer and builds a fresh
    one at the focus phase. Observers subscribe to this object once and keep
    receiving events across rebuilds.
    """

    def __init__(
        self,
        settings: PhaseSettings,
        provider: SettingsProviderLike,
        *,
        scheduler: Scheduler,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__()
        self._provider = provider
        self._scheduler = scheduler
        self._tick_seconds = tick_seconds
        self._logger = logger or logging.getLogger("pomodoro")
        self._sequencer: Optional[PhaseSequencer] = None

        self._replace_sequencer(settings)
        self._provider.on(EVENT_SETTINGS_CHANGE, self.on_settings_change)

    @classmethod
    async def create(
        cls,
        provider: SettingsProviderLike,
        *,
        scheduler: Scheduler,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> "ConfigurationBoundPhaseSequencer":
        settings = await provider.get()
        return cls(
            settings,
            provider,
            scheduler=scheduler,
            tick_seconds=tick_seconds,
            logger=logger,
        )

    def observe(self, observer: object) -> None:
        bind_observer(self, observer, SEQUENCER_OBSERVER_CALLBACKS)

    def on_settings_change(self, settings: PhaseSettings) -> None:
        self._logger.info(
            "Settings changed: focus=%smin short_break=%smin long_break=%smin interval=%s",
            settings.focus_minutes,
            settings.short_break_minutes,
            settings.long_break_minutes,
            settings.long_break_interval,
        )
        self._replace_sequencer(settings)

    def close(self) -> None:
        """Stop listening for settings and dispose the current sequencer."""
        self._provider.off(EVENT_SETTINGS_CHANGE, self.on_settings_change)
        if self._sequencer is not None:
            self._sequencer.dispose()
            self._sequencer.remove_all_listeners()

    @property
    def sequencer(self) -> PhaseSequencer:
        return self._sequencer

    @property
    def settings(self) -> PhaseSettings:
        return self._sequencer.settings

    @property
    def phase(self) -> Phase:
        return self._sequencer.phase

    @property
    def next_phase(self) -> Phase:
        return self._sequencer.next_phase

    @property
    def has_long_break(self) -> bool:
        return self._sequencer.has_long_break

    @property
    def state(self) -> TimerState:
        return self._sequencer.state

    @property
    def is_running(self) -> bool:
        return self._sequencer.is_running

    @property
    def is_stopped(self) -> bool:
        return self._sequencer.is_stopped

    @property
    def is_paused(self) -> bool:
        return self._sequencer.is_paused

    def snapshot(self) -> SequencerSnapshot:
        return self._sequencer.snapshot()

    def set_phase(self, target: Phase) -> None:
        self._sequencer.set_phase(target)

    def start_cycle(self) -> None:
        self._sequencer.start_cycle()

    def start_focus(self) -> None:
        self._sequencer.start_focus()

    def start_short_break(self) -> None:
        self._sequencer.start_short_break()

    def start_long_break(self) -> None:
        self._sequencer.start_long_break()

    def start(self) -> None:
        self._sequencer.start()

    def pause(self) -> None:
        self._sequencer.pause()

    def stop(self) -> None:
        self._sequencer.stop()

    def resume(self) -> None:
        self._sequencer.resume()

    def reset(self) -> None:
        self._sequencer.reset()

    def _replace_sequencer(self, settings: PhaseSettings) -> None:
        # A failed build leaves the current sequencer in place; building
        # starts no timer.
        sequencer = PhaseSequencer(
            settings,
            Phase.FOCUS,
            scheduler=self._scheduler,
            tick_seconds=self._tick_seconds,
            logger=self._logger.getChild("sequencer"),
        )

        old = self._sequencer
        if old is not None:
            # The in-flight timer's stop event still reaches observers
            # through the old forwarding.
            old.dispose()
            old.remove_all_listeners()

        for event in SEQUENCER_EVENTS:
            sequencer.on(event, self._make_forwarder(event))
        self._sequencer = sequencer

    def _make_forwarder(self, event: str) -> Callable[..., None]:
        def forward(*args: Any) -> None:
            self.emit(event, *args)

        return forward
