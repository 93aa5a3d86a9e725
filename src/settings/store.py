"""File-backed settings provider that announces changes to subscribers."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from pomodoro.constants import EVENT_SETTINGS_CHANGE
from pomodoro.events import EventEmitter
from pomodoro.phases import PhaseSettings

from .parser import load_settings_file


class SettingsStore(EventEmitter):
    """Holds the current PhaseSettings read from a TOML file.

    A missing file yields the default settings. ``change`` is emitted with
    the new settings only when a reload or update actually differs from the
    cached value.
    """

    def __init__(self, path: Path, logger: Optional[logging.Logger] = None):
        super().__init__()
        self._path = Path(path)
        self._logger = logger or logging.getLogger("settings")
        self._settings: Optional[PhaseSettings] = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def current(self) -> Optional[PhaseSettings]:
        return self._settings

    async def get(self) -> PhaseSettings:
        if self._settings is None:
            self._settings = await asyncio.to_thread(self._read)
        return self._settings

    def reload(self) -> bool:
        """Re-read the file synchronously and apply it through ``update``.

        The watcher calls this from a loop callback, so the read blocks the
        loop for the duration of one small TOML parse. ``get`` does its
        first read in a worker thread.
        """
        return self.update(self._read())

    def update(self, settings: PhaseSettings) -> bool:
        if settings == self._settings:
            return False
        self._settings = settings
        self._logger.info("Settings updated from %s", self._path)
        self.emit(EVENT_SETTINGS_CHANGE, settings)
        return True

    def _read(self) -> PhaseSettings:
        if not self._path.exists():
            self._logger.info("Settings file not found, using defaults: %s", self._path)
            return PhaseSettings()
        return load_settings_file(self._path)
