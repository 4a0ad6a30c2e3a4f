"""Content caching for per-level kanji and vocabulary data."""

from dojo_engine.cache.content_cache import ContentCacheService
from dojo_engine.cache.parsers import parse_kanji, parse_word
from dojo_engine.cache.session_store import SessionStore, create_session_store
from dojo_engine.cache.sources import LevelSource, create_level_source
from dojo_engine.core.config import settings
from dojo_engine.learning_engine.constants import ContentType, JlptLevel
from dojo_engine.models.content import Kanji, Word

JLPT_LEVELS: tuple[str, ...] = tuple(level.value for level in JlptLevel)


def create_kanji_cache(
    source: LevelSource | None = None,
    session_store: SessionStore[Kanji] | None = None,
) -> ContentCacheService[Kanji]:
    """Build the kanji cache service. The caller owns the returned instance."""
    return ContentCacheService(
        domain=ContentType.KANJI.value,
        levels=JLPT_LEVELS,
        source=source or create_level_source(settings.KANJI_LEVEL_PATH),
        parse=parse_kanji,
        session_store=session_store if session_store is not None else create_session_store(Kanji),
    )


def create_vocab_cache(
    source: LevelSource | None = None,
    session_store: SessionStore[Word] | None = None,
) -> ContentCacheService[Word]:
    """Build the vocabulary cache service. The caller owns the returned instance."""
    return ContentCacheService(
        domain=ContentType.VOCABULARY.value,
        levels=JLPT_LEVELS,
        source=source or create_level_source(settings.VOCAB_LEVEL_PATH),
        parse=parse_word,
        session_store=session_store if session_store is not None else create_session_store(Word),
    )


__all__ = [
    "JLPT_LEVELS",
    "ContentCacheService",
    "create_kanji_cache",
    "create_vocab_cache",
]
