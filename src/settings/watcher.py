"""Polls the settings file and reloads the store when it changes on disk."""

from __future__ import annotations

import logging
from typing import Optional

from pomodoro.scheduler import ScheduledCall, Scheduler

from .parser import SettingsError
from .store import SettingsStore


class SettingsFileWatcher:
    def __init__(
        self,
        store: SettingsStore,
        *,
        scheduler: Scheduler,
        interval_seconds: float = 2.0,
        logger: Optional[logging.Logger] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")
        self._store = store
        self._scheduler = scheduler
        self._interval_seconds = interval_seconds
        self._logger = logger or logging.getLogger("settings.watcher")
        self._last_mtime: Optional[int] = None
        self._call: Optional[ScheduledCall] = None

    @property
    def is_running(self) -> bool:
        return self._call is not None

    def start(self) -> None:
        if self._call is not None:
            return
        self._last_mtime = self._mtime()
        self._call = self._scheduler.call_repeating(self._interval_seconds, self.check)
        self._logger.debug(
            "Watching %s every %.1fs",
            self._store.path,
            self._interval_seconds,
        )

    def stop(self) -> None:
        if self._call is None:
            return
        self._call.cancel()
        self._call = None

    def check(self) -> bool:
        """Reload the store if the file's modification time moved.

        An unreadable or invalid file keeps the previous settings in place.
        """
        mtime = self._mtime()
        if mtime == self._last_mtime:
            return False
        self._last_mtime = mtime
        try:
            return self._store.reload()
        except SettingsError as error:
            self._logger.warning("Ignoring invalid settings file: %s", error)
            return False

    def _mtime(self) -> Optional[int]:
        try:
            return self._store.path.stat().st_mtime_ns
        except FileNotFoundError:
            return None
