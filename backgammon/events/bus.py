"""
Backgammon Engine - Event Bus

Synchronous publish/subscribe channel owned by one game context. Listeners
are kept in explicit per-event lists and invoked in subscription order on
the publisher's call stack.
"""

from __future__ import annotations

import logging
from typing import Callable

from backgammon.events.events import EventPayload, GameEvent

logger = logging.getLogger(__name__)

Listener = Callable[[EventPayload], None]


class EventBus:
    """Dispatches event payloads to listeners registered per GameEvent.

    A failing listener is logged and skipped; it never aborts the
    publisher or the remaining listeners.
    """

    def __init__(self) -> None:
        self._listeners: dict[GameEvent, list[Listener]] = {}
        self._history: list[EventPayload] = []
        self._record = False

    def subscribe(self, event: GameEvent, listener: Listener) -> None:
        """Register listener for event. Duplicate registrations are ignored."""
        listeners = self._listeners.setdefault(event, [])
        if listener in listeners:
            logger.warning("Listener already subscribed to %s", event.name)
            return
        listeners.append(listener)

    def unsubscribe(self, event: GameEvent, listener: Listener) -> None:
        """Remove listener from event, if present."""
        listeners = self._listeners.get(event)
        if not listeners or listener not in listeners:
            return
        listeners.remove(listener)
        if not listeners:
            del self._listeners[event]

    def publish(self, payload: EventPayload) -> None:
        """Deliver payload to every listener of its event."""
        if self._record:
            self._history.append(payload)

        # Copy so listeners may (un)subscribe while being notified
        for listener in list(self._listeners.get(payload.event, ())):
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener failed while handling %s", payload.event.name)

    def listener_count(self, event: GameEvent) -> int:
        return len(self._listeners.get(event, ()))

    def clear(self) -> None:
        """Drop all listeners."""
        self._listeners.clear()

    # -- recording (debugging and replay inspection) --------------------------

    def start_recording(self) -> None:
        self._history.clear()
        self._record = True

    def stop_recording(self) -> list[EventPayload]:
        self._record = False
        recorded = list(self._history)
        self._history.clear()
        return recorded

    @property
    def recorded(self) -> list[EventPayload]:
        return list(self._history)
