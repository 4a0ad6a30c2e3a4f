"""Tests for the per-level content cache service."""

import asyncio

import pytest

from dojo_engine.cache import ContentCacheService, JLPT_LEVELS, create_kanji_cache, create_vocab_cache
from dojo_engine.cache.parsers import parse_kanji, parse_word
from dojo_engine.cache.session_store import InMemorySessionStore, RedisSessionStore
from dojo_engine.core.app_exceptions import FetchFailureError
from dojo_engine.learning_engine.constants import JlptLevel
from dojo_engine.models.content import Kanji, Word

KANJI_RECORDS = {
    "n5": [
        {"id": 1, "kanjiChar": "日", "onyomi": ["ニチ"], "kunyomi": ["ひ"], "meanings": ["day", "sun"]},
        {"id": 2, "kanjiChar": "月", "onyomi": ["ゲツ"], "kunyomi": ["つき"], "meanings": ["month", "moon"]},
    ],
    "n4": [
        {"id": 3, "kanjiChar": "会", "onyomi": ["カイ"], "kunyomi": ["あ"], "meanings": ["meeting"]},
    ],
}


class FakeSource:
    """Level source that counts fetches and can be held open or made to fail."""

    def __init__(self, records=None, fail_levels=()):
        self.records = {level: list(rows) for level, rows in (records or KANJI_RECORDS).items()}
        self.fail_levels = set(fail_levels)
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    async def fetch_level(self, level: str):
        self.calls.append(level)
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if level in self.fail_levels:
            raise ConnectionError(f"cannot reach {level}")
        return self.records.get(level, [])


def make_cache(source, session_store=None) -> ContentCacheService[Kanji]:
    return ContentCacheService(
        domain="kanji",
        levels=JlptLevel,
        source=source,
        parse=parse_kanji,
        session_store=session_store if session_store is not None else InMemorySessionStore(),
    )


@pytest.mark.asyncio
async def test_get_by_level_fetches_and_parses():
    source = FakeSource()
    cache = make_cache(source)

    items = await cache.get_by_level("n5")
    assert [item.kanji_char for item in items] == ["日", "月"]
    assert items[0].meanings == ("day", "sun")
    assert source.calls == ["n5"]


@pytest.mark.asyncio
async def test_second_read_served_from_cache():
    source = FakeSource()
    cache = make_cache(source)

    first = await cache.get_by_level(JlptLevel.N5)
    second = await cache.get_by_level("n5")
    assert first is second
    assert source.calls == ["n5"]
    assert cache.is_cached("n5")


@pytest.mark.asyncio
async def test_concurrent_requests_coalesce():
    source = FakeSource()
    source.gate = asyncio.Event()
    cache = make_cache(source)

    first = asyncio.create_task(cache.get_by_level("n5"))
    second = asyncio.create_task(cache.get_by_level("n5"))
    await asyncio.sleep(0)
    assert cache.is_loading("n5")

    source.gate.set()
    first_items, second_items = await asyncio.gather(first, second)

    assert source.calls == ["n5"]
    assert first_items == second_items
    assert not cache.is_loading("n5")


@pytest.mark.asyncio
async def test_failure_propagates_to_all_waiters_and_is_not_cached():
    source = FakeSource(fail_levels={"n3"})
    source.gate = asyncio.Event()
    cache = make_cache(source)

    waiters = [asyncio.create_task(cache.get_by_level("n3")) for _ in range(3)]
    await asyncio.sleep(0)
    source.gate.set()
    results = await asyncio.gather(*waiters, return_exceptions=True)

    assert source.calls == ["n3"]
    assert all(isinstance(result, FetchFailureError) for result in results)
    assert results[0].level == "n3"
    assert results[0].code == "FETCH_FAILURE"
    assert isinstance(results[0].__cause__, ConnectionError)
    assert not cache.is_cached("n3")
    assert not cache.is_loading("n3")

    # A later call retries from scratch
    source.gate = None
    source.fail_levels.clear()
    source.records["n3"] = []
    assert await cache.get_by_level("n3") == ()
    assert source.calls == ["n3", "n3"]


@pytest.mark.asyncio
async def test_parse_error_is_a_fetch_failure():
    source = FakeSource(records={"n5": [{"id": "not-a-number"}]})
    cache = make_cache(source)

    with pytest.raises(FetchFailureError):
        await cache.get_by_level("n5")
    assert cache.get_all_cached() == {}


@pytest.mark.asyncio
async def test_unknown_level_rejected():
    cache = make_cache(FakeSource())
    with pytest.raises(ValueError):
        await cache.get_by_level("n6")


@pytest.mark.asyncio
async def test_clear_cache_forces_refetch():
    source = FakeSource()
    cache = make_cache(source)

    await cache.get_by_level("n5")
    cache.clear_cache()
    assert not cache.is_cached("n5")

    await cache.get_by_level("n5")
    assert source.calls == ["n5", "n5"]


@pytest.mark.asyncio
async def test_clear_cache_does_not_stop_in_flight_fetch():
    source = FakeSource()
    source.gate = asyncio.Event()
    cache = make_cache(source)

    pending = asyncio.create_task(cache.get_by_level("n5"))
    await asyncio.sleep(0)
    cache.clear_cache()
    source.gate.set()
    await pending

    assert cache.is_cached("n5")


@pytest.mark.asyncio
async def test_cancelled_caller_does_not_cancel_fetch():
    source = FakeSource()
    source.gate = asyncio.Event()
    cache = make_cache(source)

    caller = asyncio.create_task(cache.get_by_level("n5"))
    await asyncio.sleep(0)
    caller.cancel()
    with pytest.raises(asyncio.CancelledError):
        await caller

    source.gate.set()
    items = await cache.get_by_level("n5")
    assert len(items) == 2
    assert source.calls == ["n5"]


@pytest.mark.asyncio
async def test_preload_all_reports_failures_without_blocking_others():
    source = FakeSource(fail_levels={"n2"})
    cache = make_cache(source)

    failures = await cache.preload_all()

    assert list(failures) == ["n2"]
    assert sorted(source.calls) == sorted(JLPT_LEVELS)
    cached = cache.get_all_cached()
    assert set(cached) == {"n5", "n4", "n3", "n1"}
    assert cached["n3"] == ()


@pytest.mark.asyncio
async def test_session_store_checked_before_memory():
    store = InMemorySessionStore()
    source = FakeSource()
    cache = make_cache(source, session_store=store)
    await cache.get_by_level("n5")

    # A new process-level instance sharing the session store does not refetch
    reloaded = make_cache(source, session_store=store)
    items = await reloaded.get_by_level("n5")
    assert [item.kanji_char for item in items] == ["日", "月"]
    assert source.calls == ["n5"]


@pytest.mark.asyncio
async def test_redis_session_store_round_trip(fake_redis):
    source = FakeSource()
    cache = make_cache(source, session_store=RedisSessionStore(fake_redis, Kanji, ttl_seconds=60))
    await cache.get_by_level("n4")

    assert "content:kanji:n4" in fake_redis.data
    reloaded = make_cache(source, session_store=RedisSessionStore(fake_redis, Kanji, ttl_seconds=60))
    items = await reloaded.get_by_level("n4")
    assert items[0].kanji_char == "会"
    assert source.calls == ["n4"]

    reloaded.clear_cache()
    assert fake_redis.data == {}


@pytest.mark.asyncio
async def test_vocab_cache_factory_uses_word_parser():
    records = {
        "n5": [
            {"jmdict_seq": "1358280", "kana": "たべる", "kanji": "食べる", "waller_definition": "to eat; to live on"},
            {"jmdict_seq": "1000000", "kana": "これ", "kanji": "", "waller_definition": "this, this one"},
        ]
    }
    cache = create_vocab_cache(source=FakeSource(records=records), session_store=InMemorySessionStore())

    items = await cache.get_by_level("n5")
    assert items == (
        Word(word="食べる", reading="たべる", meanings=("to eat", "to live on")),
        Word(word="これ", reading="これ", meanings=("this", "this one")),
    )
    assert cache.domain == "vocabulary"


def test_kanji_cache_factory_defaults():
    cache = create_kanji_cache(source=FakeSource(), session_store=InMemorySessionStore())
    assert cache.domain == "kanji"
    assert cache.levels == ("n5", "n4", "n3", "n2", "n1")
    assert cache.parse is parse_kanji
    assert parse_word is not cache.parse
