"""
Progressive difficulty for pick games.

Maps a stream of correct/wrong signals to the number of answer choices shown.
"""

from dojo_engine.learning_engine.difficulty.controller import DifficultyController
from dojo_engine.learning_engine.difficulty.core import DifficultyParams, DifficultyState

__all__ = ["DifficultyController", "DifficultyParams", "DifficultyState"]
