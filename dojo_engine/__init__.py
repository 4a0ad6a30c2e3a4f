"""Adaptive training engine for kana, kanji and vocabulary drills."""

__version__ = "0.1.0"
