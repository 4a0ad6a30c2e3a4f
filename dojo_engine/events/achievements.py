"""Achievement event bus."""

from dojo_engine.events.listeners import Listener, ListenerList, Unsubscribe
from dojo_engine.learning_engine.constants import AchievementEventType
from dojo_engine.learning_engine.contracts import AchievementEvent


class AchievementEventBus:
    """Single-list bus: every listener receives both check and unlock events."""

    def __init__(self):
        self._listeners: ListenerList[AchievementEvent] = ListenerList("achievements")

    def subscribe(self, listener: Listener[AchievementEvent]) -> Unsubscribe:
        return self._listeners.add(listener)

    def emit(self, event: AchievementEvent) -> None:
        self._listeners.dispatch(event)

    def listener_count(self) -> int:
        return len(self._listeners)

    def clear(self) -> None:
        self._listeners.clear()


class AchievementApi:
    """Producer facade for achievement events."""

    def __init__(self, bus: AchievementEventBus):
        self.bus = bus

    def trigger_check(self) -> AchievementEvent:
        event = AchievementEvent(type=AchievementEventType.CHECK)
        self.bus.emit(event)
        return event

    def record_unlock(self, achievement_id: str) -> AchievementEvent:
        event = AchievementEvent(type=AchievementEventType.UNLOCK, achievement_id=achievement_id)
        self.bus.emit(event)
        return event
