"""Named-channel publish/subscribe registry shared by every timer layer."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

Listener = Callable[..., Any]


class EventEmitter:
    """Synchronous, ordered, same-thread event delivery keyed by channel name."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: str, listener: Listener) -> Listener:
        self._listeners.setdefault(event, []).append(listener)
        return listener

    def off(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(event)
        if not listeners:
            return
        try:
            listeners.remove(listener)
        except ValueError:
            return
        if not listeners:
            del self._listeners[event]

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of *event* in subscription order.

        Returns ``True`` when at least one listener was registered. The
        listener list is copied first so handlers may unsubscribe while the
        event is being delivered.
        """
        listeners = self._listeners.get(event)
        if not listeners:
            return False
        for listener in tuple(listeners):
            listener(*args)
        return True

    def remove_all_listeners(self, event: Optional[str] = None) -> None:
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))


def bind_observer(
    emitter: EventEmitter,
    observer: object,
    callbacks: Mapping[str, str],
) -> list[tuple[str, Listener]]:
    """Subscribe the callbacks *observer* actually defines.

    *callbacks* maps observer method names to event names. Returns the
    ``(event, listener)`` pairs that were registered so callers can detach
    them again.
    """
    bound: list[tuple[str, Listener]] = []
    for method_name, event in callbacks.items():
        handler = getattr(observer, method_name, None)
        if not callable(handler):
            continue
        emitter.on(event, handler)
        bound.append((event, handler))
    return bound
