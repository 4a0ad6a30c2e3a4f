"""Constants for the training engine."""

from enum import Enum


class ContentType(str, Enum):
    """Content domain a session drills."""

    KANA = "kana"
    KANJI = "kanji"
    VOCABULARY = "vocabulary"


class GameMode(str, Enum):
    """Question generation strategy, fixed for the lifetime of a session."""

    PICK = "pick"
    INPUT = "input"


class SessionStatus(str, Enum):
    """Session engine lifecycle state."""

    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"


class StatEventType(str, Enum):
    """Stats bus event types."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    SESSION_COMPLETE = "session_complete"


class AchievementEventType(str, Enum):
    """Achievement bus event discriminant."""

    CHECK = "check"
    UNLOCK = "unlock"


class JlptLevel(str, Enum):
    """Proficiency tiers used to partition kanji and vocabulary data."""

    N5 = "n5"
    N4 = "n4"
    N3 = "n3"
    N2 = "n2"
    N1 = "n1"


# Keyboard shortcuts for picking an answer choice (top row and numpad)
PICK_KEY_BINDINGS: dict[str, int] = {
    "Digit1": 0,
    "Numpad1": 0,
    "Digit2": 1,
    "Numpad2": 1,
    "Digit3": 2,
    "Numpad3": 2,
    "Digit4": 3,
    "Numpad4": 3,
    "Digit5": 4,
    "Numpad5": 4,
    "Digit6": 5,
    "Numpad6": 5,
}


def choice_index_for_key(key_code: str) -> int | None:
    """Map a keyboard code to a pick-mode choice index, or None if unbound."""
    return PICK_KEY_BINDINGS.get(key_code)
