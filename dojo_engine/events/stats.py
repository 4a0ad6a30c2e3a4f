"""Stats event bus - decouples game sessions from progress storage."""

import logging
from typing import Any

from dojo_engine.events.listeners import Listener, ListenerList, Unsubscribe
from dojo_engine.learning_engine.constants import ContentType, StatEventType
from dojo_engine.learning_engine.contracts import StatEvent

logger = logging.getLogger(__name__)


class StatsEventBus:
    """
    Publish/subscribe bus keyed by stat event type.

    ``emit`` runs synchronously on the caller's thread and calls the listeners
    registered for the event's type in registration order. Nothing is queued
    or replayed.
    """

    def __init__(self):
        self._listeners: dict[StatEventType, ListenerList[StatEvent]] = {
            event_type: ListenerList(f"stats:{event_type.value}") for event_type in StatEventType
        }

    def subscribe(self, event_type: StatEventType | str, listener: Listener[StatEvent]) -> Unsubscribe:
        """Register a listener for one event type. Returns an idempotent unsubscribe."""
        return self._listeners[StatEventType(event_type)].add(listener)

    def subscribe_all(self, listener: Listener[StatEvent]) -> Unsubscribe:
        """Register a listener for every event type."""
        handles = [self.subscribe(event_type, listener) for event_type in StatEventType]

        def unsubscribe() -> None:
            for handle in handles:
                handle()

        return unsubscribe

    def emit(self, event: StatEvent) -> None:
        failures = self._listeners[event.type].dispatch(event)
        if failures:
            logger.warning(
                "Stats event delivered with listener failures",
                extra={"event_type": event.type.value, "failures": failures},
            )

    def listener_count(self, event_type: StatEventType | str) -> int:
        return len(self._listeners[StatEventType(event_type)])

    def clear(self) -> None:
        for listeners in self._listeners.values():
            listeners.clear()


class StatsApi:
    """Producer facade that stamps and emits stat events on a bus."""

    def __init__(self, bus: StatsEventBus):
        self.bus = bus

    def record_correct(
        self,
        content_type: ContentType | str,
        character: str,
        correct_answer: str | None = None,
        user_answer: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> StatEvent:
        event = StatEvent(
            type=StatEventType.CORRECT,
            content_type=ContentType(content_type),
            character=character,
            user_answer=user_answer,
            correct_answer=correct_answer,
            metadata=metadata,
        )
        self.bus.emit(event)
        return event

    def record_incorrect(
        self,
        content_type: ContentType | str,
        character: str,
        user_answer: str,
        correct_answer: str,
        metadata: dict[str, Any] | None = None,
    ) -> StatEvent:
        event = StatEvent(
            type=StatEventType.INCORRECT,
            content_type=ContentType(content_type),
            character=character,
            user_answer=user_answer,
            correct_answer=correct_answer,
            metadata=metadata,
        )
        self.bus.emit(event)
        return event

    def record_session_complete(
        self,
        content_type: ContentType | str,
        metadata: dict[str, Any] | None = None,
    ) -> StatEvent:
        event = StatEvent(
            type=StatEventType.SESSION_COMPLETE,
            content_type=ContentType(content_type),
            character="",
            metadata=metadata,
        )
        self.bus.emit(event)
        return event
