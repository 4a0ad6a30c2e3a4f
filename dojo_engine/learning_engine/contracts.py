"""Typed contracts for training engine inputs/outputs."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from dojo_engine.learning_engine.constants import (
    AchievementEventType,
    ContentType,
    StatEventType,
)

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


def utc_now() -> datetime:
    return datetime.now(UTC)


# ============================================================================
# Content Adapter
# ============================================================================


class ContentAdapter(Protocol[T_contra]):
    """
    Capability contract that makes a content domain drillable.

    Implementations hold no session state; every call is a pure function of
    its arguments (plus the caller-supplied RNG for distractor sampling).
    """

    def build_prompt(self, item: T_contra) -> str:
        """Text shown to the learner for this item."""
        ...

    def correct_answer(self, item: T_contra) -> str:
        """Canonical answer text for the item."""
        ...

    def distractors(
        self,
        item: T_contra,
        pool: Sequence[T_contra],
        count: int,
        rng: Any = None,
    ) -> list[str]:
        """
        Draw up to ``count`` wrong answers from ``pool``.

        Never returns the correct answer, never repeats a value, and returns
        fewer than ``count`` strings when the pool runs out.
        """
        ...

    def is_correct(self, user_answer: str, item: T_contra) -> bool:
        """Judge a learner response for the item."""
        ...


# ============================================================================
# Questions
# ============================================================================


@dataclass(frozen=True)
class Question(Generic[T]):
    """One round step. Built by the engine from the adapter, discarded after evaluation."""

    item: T
    prompt_text: str
    correct_answer: str
    choices: tuple[str, ...] = ()

    @property
    def correct_index(self) -> int | None:
        """Position of the correct answer among the choices (pick mode only)."""
        try:
            return self.choices.index(self.correct_answer)
        except ValueError:
            return None


@dataclass(frozen=True)
class AnswerResult(Generic[T]):
    """Outcome of evaluating one learner response."""

    question: Question[T]
    user_answer: str
    is_correct: bool
    session_complete: bool = False
    time_taken: float | None = None


@dataclass(frozen=True)
class SessionSummary:
    """Scratch counters of a session, for the results screen."""

    total: int
    answered: int
    correct_count: int
    wrong_count: int
    best_streak: int
    option_count: int | None = None
    is_complete: bool = False

    @property
    def accuracy_pct(self) -> float:
        if self.answered == 0:
            return 0.0
        return round(self.correct_count / self.answered * 100, 1)


# ============================================================================
# Events
# ============================================================================


class StatEvent(BaseModel):
    """Outcome report published on the stats bus."""

    model_config = ConfigDict(frozen=True)

    type: StatEventType
    content_type: ContentType
    character: str = ""
    user_answer: str | None = None
    correct_answer: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)
    metadata: dict[str, Any] | None = None


class AchievementEvent(BaseModel):
    """Request to evaluate achievements, or notice that one was unlocked."""

    model_config = ConfigDict(frozen=True)

    type: AchievementEventType
    achievement_id: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)
