"""
Content adapters, one per drill domain.

The engine only talks to the ``ContentAdapter`` contract; these are the
concrete implementations for kana, kanji and vocabulary.
"""

from typing import Any

from dojo_engine.learning_engine.adapters.kana import KanaAdapter
from dojo_engine.learning_engine.adapters.kanji import KanjiAdapter
from dojo_engine.learning_engine.adapters.vocabulary import VocabularyAdapter
from dojo_engine.learning_engine.constants import ContentType
from dojo_engine.learning_engine.contracts import ContentAdapter

_ADAPTERS: dict[ContentType, Any] = {
    ContentType.KANA: KanaAdapter,
    ContentType.KANJI: KanjiAdapter,
    ContentType.VOCABULARY: VocabularyAdapter,
}


def get_adapter(content_type: ContentType | str) -> ContentAdapter[Any]:
    """Return a fresh adapter for the content domain."""
    return _ADAPTERS[ContentType(content_type)]()


__all__ = ["KanaAdapter", "KanjiAdapter", "VocabularyAdapter", "get_adapter"]
