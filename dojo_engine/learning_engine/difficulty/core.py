"""
Core transitions for progressive difficulty.

Pure functions over an immutable state:
- Wrong answers are recorded as pending and only take effect on the next correct answer
- A correct answer pays down pending wrongs (one level down) before any progress counts
- A full streak of correct answers adds one answer option

The option count is clamped to [min_options, max_options] at every transition.
"""

import math
from dataclasses import dataclass, replace

from dojo_engine.core.config import settings


@dataclass(frozen=True)
class DifficultyParams:
    """Tuning knobs for the controller."""

    min_options: int = 3
    max_options: int = 6
    streak_per_level: int = 3  # Consecutive correct answers to advance one level
    wrongs_to_decrease: int = 2  # Pending wrong answers to regress one level

    def __post_init__(self):
        if self.min_options < 1:
            raise ValueError(f"min_options must be positive. Got: {self.min_options}")
        if self.min_options > self.max_options:
            raise ValueError(
                f"min_options ({self.min_options}) must not exceed max_options ({self.max_options})"
            )
        if self.streak_per_level < 1:
            raise ValueError(f"streak_per_level must be at least 1. Got: {self.streak_per_level}")
        if self.wrongs_to_decrease < 1:
            raise ValueError(f"wrongs_to_decrease must be at least 1. Got: {self.wrongs_to_decrease}")

    @property
    def max_level(self) -> int:
        return self.max_options - self.min_options

    @classmethod
    def from_settings(cls) -> "DifficultyParams":
        return cls(
            min_options=settings.DIFFICULTY_MIN_OPTIONS,
            max_options=settings.DIFFICULTY_MAX_OPTIONS,
            streak_per_level=settings.DIFFICULTY_STREAK_PER_LEVEL,
            wrongs_to_decrease=settings.DIFFICULTY_WRONGS_TO_DECREASE,
        )


@dataclass(frozen=True)
class DifficultyState:
    """Snapshot of the controller. option_count == min_options + difficulty_level."""

    option_count: int
    difficulty_level: int = 0
    level_streak: int = 0
    wrong_streak: int = 0
    pending_wrongs: int = 0


def clamp_options(option_count: int, params: DifficultyParams) -> int:
    return max(params.min_options, min(params.max_options, option_count))


def initial_state(params: DifficultyParams) -> DifficultyState:
    """State of a fresh controller, and the state after reset."""
    return DifficultyState(option_count=params.min_options)


def apply_wrong(state: DifficultyState) -> DifficultyState:
    """
    Record a wrong answer.

    The option count does not change here, so the question the learner just
    missed keeps its choices. The effect lands on the next correct answer.
    """
    return replace(
        state,
        level_streak=0,
        wrong_streak=state.wrong_streak + 1,
        pending_wrongs=state.pending_wrongs + 1,
    )


def apply_correct(state: DifficultyState, params: DifficultyParams) -> DifficultyState:
    """
    Record a correct answer.

    Order of precedence:
    1. Enough pending wrongs and above level 0: regress one level, clear all counters.
       All pending credit is consumed even if it exceeds wrongs_to_decrease.
    2. Streak complete and below max level: advance one level, clear all counters.
    3. Otherwise keep the incremented streak; wrong and pending counters clear.
    """
    if state.pending_wrongs >= params.wrongs_to_decrease and state.difficulty_level > 0:
        return DifficultyState(
            option_count=clamp_options(state.option_count - 1, params),
            difficulty_level=state.difficulty_level - 1,
        )

    level_streak = state.level_streak + 1

    if level_streak >= params.streak_per_level and state.difficulty_level < params.max_level:
        return DifficultyState(
            option_count=clamp_options(state.option_count + 1, params),
            difficulty_level=state.difficulty_level + 1,
        )

    return replace(state, level_streak=level_streak, wrong_streak=0, pending_wrongs=0)


def level_progress(state: DifficultyState, params: DifficultyParams) -> int:
    """Progress toward the next level in percent (0-100), for progress bars. Full at max level."""
    return min(100, math.floor(state.level_streak / params.streak_per_level * 100 + 0.5))
