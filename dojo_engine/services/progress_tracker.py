"""In-memory progress tracker fed by the stats bus.

Reference consumer of the outbound event interface. It aggregates what a
progress store would persist and fires an achievement check after every
event; durable storage is left to the host application.
"""

from dataclasses import dataclass, field

from dojo_engine.events.achievements import AchievementApi
from dojo_engine.events.listeners import Unsubscribe
from dojo_engine.events.stats import StatsEventBus
from dojo_engine.learning_engine.constants import ContentType, StatEventType
from dojo_engine.learning_engine.contracts import StatEvent


@dataclass
class CharacterScore:
    correct: int = 0
    wrong: int = 0


@dataclass
class ContentTally:
    """Counters for one content domain."""

    content_type: ContentType
    correct: int = 0
    wrong: int = 0
    current_streak: int = 0
    best_streak: int = 0
    sessions_completed: int = 0
    answer_times: list[float] = field(default_factory=list)
    character_scores: dict[str, CharacterScore] = field(default_factory=dict)

    @property
    def accuracy_pct(self) -> float:
        answered = self.correct + self.wrong
        if answered == 0:
            return 0.0
        return round(self.correct / answered * 100, 1)

    def apply(self, event: StatEvent) -> None:
        if event.type is StatEventType.SESSION_COMPLETE:
            self.sessions_completed += 1
            return

        score = self.character_scores.setdefault(event.character, CharacterScore())
        if event.type is StatEventType.CORRECT:
            self.correct += 1
            self.current_streak += 1
            self.best_streak = max(self.best_streak, self.current_streak)
            score.correct += 1
            time_taken = (event.metadata or {}).get("time_taken")
            if time_taken is not None:
                self.answer_times.append(float(time_taken))
        else:
            self.wrong += 1
            self.current_streak = 0
            score.wrong += 1


class ProgressTracker:
    """
    Aggregates stat events into per-domain tallies.

    One ``ContentTally`` exists per content type from construction on, so an
    event is routed by its enum tag alone.
    """

    def __init__(self, stats_bus: StatsEventBus, achievements: AchievementApi | None = None):
        self.stats_bus = stats_bus
        self.achievements = achievements
        self._tallies: dict[ContentType, ContentTally] = {
            content_type: ContentTally(content_type) for content_type in ContentType
        }
        self._unsubscribe: Unsubscribe | None = None

    def attach(self) -> Unsubscribe:
        """Start listening. Attaching twice keeps a single subscription."""
        if self._unsubscribe is None:
            self._unsubscribe = self.stats_bus.subscribe_all(self.handle)
        return self.detach

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def tally(self, content_type: ContentType | str) -> ContentTally:
        return self._tallies[ContentType(content_type)]

    def handle(self, event: StatEvent) -> None:
        self._tallies[event.content_type].apply(event)
        if self.achievements is not None:
            self.achievements.trigger_check()
