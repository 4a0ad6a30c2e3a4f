"""Transforms from raw level records to content items."""

import re
from typing import Any

from dojo_engine.models.content import Kanji, Word

_DEFINITION_SEPARATORS = re.compile(r"[;,]")


def parse_kanji(record: dict[str, Any]) -> Kanji:
    """Raw kanji entries already carry the item shape (``kanjiChar`` alias included)."""
    return Kanji.model_validate(record)


def parse_word(record: dict[str, Any]) -> Word:
    """
    Build a word from a JMdict-derived record.

    Expected keys: ``jmdict_seq``, ``kana``, ``kanji``, ``waller_definition``.
    The kanji spelling wins when present; meanings are the definition split on
    ``;`` and ``,``.
    """
    kana = str(record["kana"]).strip()
    kanji = str(record.get("kanji") or "").strip()
    definition = str(record.get("waller_definition") or "")
    meanings = tuple(piece.strip() for piece in _DEFINITION_SEPARATORS.split(definition) if piece.strip())
    return Word(word=kanji or kana, reading=kana, meanings=meanings)
