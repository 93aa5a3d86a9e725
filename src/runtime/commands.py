"""Dispatcher that executes client control commands against the phase timer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from contracts.command_contract import (
    COMMAND_STATUS,
    COMMAND_UPDATE_SETTINGS,
    REASON_INVALID_CONFIGURATION,
    REASON_INVALID_SETTINGS,
    REASON_OK,
    REASON_UNKNOWN_COMMAND,
    TIMER_OPERATION_COMMANDS,
)
from pomodoro import InvalidConfigurationError
from settings import SettingsError, parse_settings

from .contracts import PhaseTimerLike, SettingsUpdaterLike
from .publisher import snapshot_payload


@dataclass(frozen=True)
class CommandResult:
    """Result envelope returned after applying a client command."""
    command: str
    accepted: bool
    reason: str
    status: dict[str, Any] = field(default_factory=dict)
    message: str = ""

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "command": self.command,
            "accepted": self.accepted,
            "reason": self.reason,
            "status": self.status,
        }
        if self.message:
            payload["message"] = self.message
        return payload


class CommandDispatcher:
    """Routes ``{"command": ...}`` messages to sequencer operations."""

    def __init__(
        self,
        *,
        timer: PhaseTimerLike,
        settings_updater: Optional[SettingsUpdaterLike] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._timer = timer
        self._settings_updater = settings_updater
        self._logger = logger or logging.getLogger("runtime.commands")

    def status(self) -> dict[str, Any]:
        return snapshot_payload(self._timer.snapshot())

    def handle(self, message: Mapping[str, Any]) -> CommandResult:
        raw_name = message.get("command")
        if not isinstance(raw_name, str) or not raw_name.strip():
            self._logger.warning("Command message without a name: %s", message)
            return self._result("", False, REASON_UNKNOWN_COMMAND)
        name = raw_name.strip()

        if name == COMMAND_STATUS:
            return self._result(name, True, REASON_OK)
        if name == COMMAND_UPDATE_SETTINGS:
            return self._handle_update_settings(name, message.get("settings"))
        if name not in TIMER_OPERATION_COMMANDS:
            self._logger.warning("Unsupported command: %s", name)
            return self._result(name, False, REASON_UNKNOWN_COMMAND)

        operation = getattr(self._timer, name)
        try:
            operation()
        except InvalidConfigurationError as error:
            self._logger.info("Command rejected: %s (%s)", name, error)
            return self._result(name, False, REASON_INVALID_CONFIGURATION, str(error))
        self._logger.info("Command applied: %s", name)
        return self._result(name, True, REASON_OK)

    def _handle_update_settings(self, name: str, raw_settings: Any) -> CommandResult:
        if self._settings_updater is None:
            return self._result(name, False, REASON_UNKNOWN_COMMAND)
        if not isinstance(raw_settings, Mapping):
            return self._result(
                name,
                False,
                REASON_INVALID_SETTINGS,
                "settings must be an object.",
            )
        try:
            settings = parse_settings(raw_settings)
        except SettingsError as error:
            return self._result(name, False, REASON_INVALID_SETTINGS, str(error))
        self._settings_updater.update(settings)
        return self._result(name, True, REASON_OK)

    def _result(
        self,
        command: str,
        accepted: bool,
        reason: str,
        message: str = "",
    ) -> CommandResult:
        return CommandResult(
            command=command,
            accepted=accepted,
            reason=reason,
            status=self.status(),
            message=message,
        )
