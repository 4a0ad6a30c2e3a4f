"""Stateful difficulty controller owned by one session."""

import logging

from dojo_engine.learning_engine.difficulty.core import (
    DifficultyParams,
    DifficultyState,
    apply_correct,
    apply_wrong,
    initial_state,
    level_progress,
)

logger = logging.getLogger(__name__)


class DifficultyController:
    """
    Progressive difficulty for pick games.

    Starts at ``min_options`` choices, adds one after every ``streak_per_level``
    consecutive correct answers (up to ``max_options``) and removes one after
    ``wrongs_to_decrease`` wrong answers, applied on the next correct answer.

    Example:
        controller = DifficultyController()
        for _ in range(3):
            controller.record_correct()
        controller.option_count  # 4
    """

    def __init__(self, params: DifficultyParams | None = None):
        self.params = params or DifficultyParams.from_settings()
        self._state = initial_state(self.params)

    @property
    def state(self) -> DifficultyState:
        return self._state

    @property
    def option_count(self) -> int:
        return self._state.option_count

    @property
    def difficulty_level(self) -> int:
        return self._state.difficulty_level

    @property
    def level_streak(self) -> int:
        return self._state.level_streak

    @property
    def level_progress(self) -> int:
        return level_progress(self._state, self.params)

    def record_correct(self) -> DifficultyState:
        previous = self._state
        self._state = apply_correct(previous, self.params)
        if self._state.difficulty_level != previous.difficulty_level:
            logger.debug(
                "Difficulty level %s -> %s (%s options)",
                previous.difficulty_level,
                self._state.difficulty_level,
                self._state.option_count,
            )
        return self._state

    def record_wrong(self) -> DifficultyState:
        self._state = apply_wrong(self._state)
        return self._state

    def reset(self) -> DifficultyState:
        self._state = initial_state(self.params)
        return self._state
