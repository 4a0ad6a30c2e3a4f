"""Immutable content items for the three drill domains."""

from pydantic import BaseModel, ConfigDict, Field


class KanaCharacter(BaseModel):
    """One hiragana or katakana character with its romanization."""

    model_config = ConfigDict(frozen=True)

    kana: str
    romanji: str
    group: str = ""


class Kanji(BaseModel):
    """Kanji entry as shipped in the per-level data files."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    kanji_char: str = Field(alias="kanjiChar")
    onyomi: tuple[str, ...] = ()
    kunyomi: tuple[str, ...] = ()
    meanings: tuple[str, ...] = ()


class Word(BaseModel):
    """Vocabulary word with reading and English meanings."""

    model_config = ConfigDict(frozen=True)

    word: str
    reading: str
    meanings: tuple[str, ...] = ()
