"""In-process event bus used to tell presentation code the ledger changed."""

from typing import Any, Callable

from future_ledger.logging import get_logger

logger = get_logger(__name__)

DATA_CHANGED = "data-changed"

Listener = Callable[..., Any]


class EventBus:
    """Minimal publish/subscribe registry keyed by event name."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: str, listener: Listener) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def off(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(event)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of ``event``; return whether any was registered."""
        listeners = list(self._listeners.get(event, []))
        if not listeners:
            return False
        logger.debug("Emitting %s to %d listeners", event, len(listeners))
        for listener in listeners:
            listener(*args)
        return True

    def clear(self) -> None:
        self._listeners.clear()


event_bus = EventBus()
