"""Session engine: runs one drill round over a fixed queue of content items."""

import logging
import random
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from dojo_engine.core.app_exceptions import InvalidStateError
from dojo_engine.events.stats import StatsEventBus
from dojo_engine.learning_engine.constants import (
    ContentType,
    GameMode,
    SessionStatus,
    StatEventType,
)
from dojo_engine.learning_engine.contracts import (
    AnswerResult,
    ContentAdapter,
    Question,
    SessionSummary,
    StatEvent,
)
from dojo_engine.learning_engine.difficulty import DifficultyController

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SessionState(Generic[T]):
    """Scratch counters of a round. Snapshots only; the engine owns the live values."""

    queue: tuple[T, ...]
    current_index: int = 0
    correct_count: int = 0
    wrong_count: int = 0
    streak: int = 0
    is_complete: bool = False


class SessionEngine(Generic[T]):
    """
    Drill round controller: Idle -> Active -> Complete.

    The engine draws items in queue order, builds each question through the
    content adapter, judges responses, and publishes exactly one stat event
    per answer plus a final ``session_complete``. It holds no reference to
    progress storage; the stats bus is its only outbound dependency.

    In pick mode the difficulty controller decides how many choices the next
    question shows. In input mode there are no choices and the adapter's
    ``is_correct`` is the sole judge.

    An empty queue is a valid round with nothing to practice: the engine is
    Complete as soon as it is constructed.
    """

    def __init__(
        self,
        items: Sequence[T],
        content_type: ContentType | str,
        mode: GameMode | str,
        adapter: ContentAdapter[T],
        stats_bus: StatsEventBus,
        difficulty: DifficultyController | None = None,
        *,
        distractor_pool: Sequence[T] | None = None,
        rng: random.Random | None = None,
        shuffle: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize a round.

        Args:
            items: Ordered items to drill (copied; the caller's sequence is not touched)
            content_type: Domain tag reported on every event
            mode: ``pick`` or ``input``; fixed for the whole round
            adapter: Content adapter for the domain
            stats_bus: Bus receiving correct/incorrect/session_complete events
            difficulty: Controller for pick mode (a fresh one is created if omitted)
            distractor_pool: Items to draw wrong choices from (defaults to ``items``)
            rng: Random source for queue shuffling and choice order
            shuffle: Shuffle the queue once before the round starts
            clock: Monotonic clock used for time-taken metadata
        """
        self.content_type = ContentType(content_type)
        self.mode = GameMode(mode)
        self.adapter = adapter
        self.stats_bus = stats_bus
        self._rng = rng or random.Random()
        self._clock = clock

        queue = list(items)
        if shuffle:
            self._rng.shuffle(queue)
        self._queue: tuple[T, ...] = tuple(queue)
        self._pool: tuple[T, ...] = tuple(distractor_pool) if distractor_pool is not None else self._queue

        if self.mode is GameMode.PICK:
            self.difficulty: DifficultyController | None = difficulty or DifficultyController()
        else:
            self.difficulty = None

        self._status = SessionStatus.IDLE
        self._current_index = 0
        self._correct_count = 0
        self._wrong_count = 0
        self._streak = 0
        self._best_streak = 0
        self._question: Question[T] | None = None
        self._shown_at: float | None = None

        if not self._queue:
            self._complete()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_complete(self) -> bool:
        return self._status is SessionStatus.COMPLETE

    @property
    def is_empty(self) -> bool:
        return not self._queue

    @property
    def current_question(self) -> Question[T] | None:
        return self._question

    @property
    def state(self) -> SessionState[T]:
        return SessionState(
            queue=self._queue,
            current_index=self._current_index,
            correct_count=self._correct_count,
            wrong_count=self._wrong_count,
            streak=self._streak,
            is_complete=self.is_complete,
        )

    def summary(self) -> SessionSummary:
        return SessionSummary(
            total=len(self._queue),
            answered=self._correct_count + self._wrong_count,
            correct_count=self._correct_count,
            wrong_count=self._wrong_count,
            best_streak=self._best_streak,
            option_count=self.difficulty.option_count if self.difficulty else None,
            is_complete=self.is_complete,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def start(self) -> Question[T] | None:
        """
        Move from Idle to Active and present the first question.

        Raises:
            InvalidStateError: If the round already started or is complete
        """
        if self._status is not SessionStatus.IDLE:
            raise InvalidStateError("start", self._status.value)

        self._status = SessionStatus.ACTIVE
        logger.info(
            "Session started",
            extra={"content_type": self.content_type.value, "mode": self.mode.value, "items": len(self._queue)},
        )
        self._present(self._queue[self._current_index])
        return self._question

    def submit_answer(self, user_answer: str) -> AnswerResult[T]:
        """
        Judge a response to the current question.

        Counters and the difficulty controller are updated and the outcome
        event is published before this returns. The next question (if any)
        is ready in ``current_question`` afterwards.

        Raises:
            InvalidStateError: If no question is active (Idle or Complete)
        """
        if self._status is not SessionStatus.ACTIVE or self._question is None:
            raise InvalidStateError("submit an answer", self._status.value)

        question = self._question
        is_correct = self.adapter.is_correct(user_answer, question.item)
        time_taken = self._clock() - self._shown_at if self._shown_at is not None else None
        option_count = len(question.choices) if question.choices else None

        if is_correct:
            self._correct_count += 1
            self._streak += 1
            self._best_streak = max(self._best_streak, self._streak)
            if self.difficulty is not None:
                self.difficulty.record_correct()
        else:
            self._wrong_count += 1
            self._streak = 0
            if self.difficulty is not None:
                self.difficulty.record_wrong()

        self.stats_bus.emit(
            StatEvent(
                type=StatEventType.CORRECT if is_correct else StatEventType.INCORRECT,
                content_type=self.content_type,
                character=question.prompt_text,
                user_answer=user_answer,
                correct_answer=question.correct_answer,
                metadata=self._event_metadata(option_count, time_taken),
            )
        )

        self._current_index += 1
        if self._current_index >= len(self._queue):
            self._complete()
        else:
            self._present(self._queue[self._current_index])

        return AnswerResult(
            question=question,
            user_answer=user_answer,
            is_correct=is_correct,
            session_complete=self.is_complete,
            time_taken=time_taken,
        )

    def select_choice(self, index: int) -> AnswerResult[T]:
        """
        Answer by choice position (pick mode), e.g. from ``PICK_KEY_BINDINGS``.

        Raises:
            InvalidStateError: If not in pick mode or no question is active
            IndexError: If ``index`` is outside the presented choices
        """
        if self.mode is not GameMode.PICK:
            raise InvalidStateError("select a choice", f"{self._status.value} in {self.mode.value} mode")
        if self._status is not SessionStatus.ACTIVE or self._question is None:
            raise InvalidStateError("select a choice", self._status.value)
        if not 0 <= index < len(self._question.choices):
            raise IndexError(f"Choice {index} out of range (0-{len(self._question.choices) - 1})")
        return self.submit_answer(self._question.choices[index])

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _present(self, item: T) -> None:
        correct = self.adapter.correct_answer(item)
        choices: tuple[str, ...] = ()
        if self.difficulty is not None:
            wrong = self.adapter.distractors(item, self._pool, self.difficulty.option_count - 1, self._rng)
            options = [*wrong, correct]
            self._rng.shuffle(options)
            choices = tuple(options)

        self._question = Question(
            item=item,
            prompt_text=self.adapter.build_prompt(item),
            correct_answer=correct,
            choices=choices,
        )
        self._shown_at = self._clock()

    def _complete(self) -> None:
        self._status = SessionStatus.COMPLETE
        self._question = None
        self._shown_at = None
        logger.info(
            "Session complete",
            extra={
                "content_type": self.content_type.value,
                "correct": self._correct_count,
                "wrong": self._wrong_count,
            },
        )
        self.stats_bus.emit(
            StatEvent(
                type=StatEventType.SESSION_COMPLETE,
                content_type=self.content_type,
                character="",
                metadata={
                    "game_mode": self.mode.value,
                    "correct": self._correct_count,
                    "wrong": self._wrong_count,
                },
            )
        )

    def _event_metadata(self, option_count: int | None, time_taken: float | None) -> dict[str, Any]:
        metadata: dict[str, Any] = {"game_mode": self.mode.value}
        if option_count is not None:
            metadata["difficulty"] = option_count
        if time_taken is not None:
            metadata["time_taken"] = round(time_taken, 3)
        return metadata
