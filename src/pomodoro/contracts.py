"""Protocols for collaborators the timer core depends on."""

from __future__ import annotations

from typing import Any, Callable, Protocol

from .phases import PhaseSettings


class SettingsProviderLike(Protocol):
    """Source of phase settings that announces updates on ``change``."""
    async def get(self) -> PhaseSettings:
        ...

    def on(self, event: str, listener: Callable[..., Any]) -> Any:
        ...

    def off(self, event: str, listener: Callable[..., Any]) -> None:
        ...
