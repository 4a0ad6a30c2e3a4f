"""Pytest configuration and shared fixtures."""

import fnmatch
import random
from collections.abc import Generator
from typing import Any

import pytest

from dojo_engine.events.achievements import AchievementEventBus
from dojo_engine.events.stats import StatsEventBus
from dojo_engine.models.content import KanaCharacter, Kanji, Word


class EventRecorder:
    """Listener that keeps every event it receives, in order."""

    def __init__(self):
        self.events: list[Any] = []

    def __call__(self, event: Any) -> None:
        self.events.append(event)

    @property
    def types(self) -> list[str]:
        return [event.type.value for event in self.events]


class FakeRedis:
    """Just enough of the redis client API for the session store."""

    def __init__(self, fail: bool = False):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.fail = fail

    def _check(self) -> None:
        if self.fail:
            raise ConnectionError("redis unavailable")

    def get(self, key: str) -> str | None:
        self._check()
        return self.data.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._check()
        self.data[key] = value
        self.ttls[key] = ttl

    def delete(self, key: str) -> None:
        self.data.pop(key, None)

    def scan_iter(self, match: str, count: int = 500):
        self._check()
        return [key for key in list(self.data) if fnmatch.fnmatch(key, match)]

    def pipeline(self, transaction: bool = False) -> "FakePipeline":
        return FakePipeline(self)


class FakePipeline:
    def __init__(self, client: FakeRedis):
        self.client = client
        self.pending: list[str] = []

    def delete(self, key: str) -> None:
        self.pending.append(key)

    def execute(self) -> None:
        for key in self.pending:
            self.client.delete(key)
        self.pending.clear()


@pytest.fixture
def stats_bus() -> StatsEventBus:
    return StatsEventBus()


@pytest.fixture
def achievement_bus() -> AchievementEventBus:
    return AchievementEventBus()


@pytest.fixture
def stat_recorder(stats_bus: StatsEventBus) -> Generator[EventRecorder, None, None]:
    """Records every stats event in emission order."""
    recorder = EventRecorder()
    unsubscribe = stats_bus.subscribe_all(recorder)
    yield recorder
    unsubscribe()


@pytest.fixture
def achievement_recorder(achievement_bus: AchievementEventBus) -> EventRecorder:
    recorder = EventRecorder()
    achievement_bus.subscribe(recorder)
    return recorder


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def hiragana() -> list[KanaCharacter]:
    rows = [
        ("あ", "a"), ("い", "i"), ("う", "u"), ("え", "e"), ("お", "o"),
        ("か", "ka"), ("き", "ki"), ("く", "ku"), ("け", "ke"), ("こ", "ko"),
        ("し", "shi"), ("つ", "tsu"),
    ]
    return [KanaCharacter(kana=kana, romanji=romanji, group="hiragana") for kana, romanji in rows]


@pytest.fixture
def kanji_items() -> list[Kanji]:
    return [
        Kanji(id=1, kanjiChar="日", onyomi=("ニチ", "ジツ"), kunyomi=("ひ", "か"), meanings=("day", "sun", "Japan")),
        Kanji(id=2, kanjiChar="月", onyomi=("ゲツ", "ガツ"), kunyomi=("つき",), meanings=("month", "moon")),
        Kanji(id=3, kanjiChar="火", onyomi=("カ",), kunyomi=("ひ",), meanings=("fire",)),
        Kanji(id=4, kanjiChar="水", onyomi=("スイ",), kunyomi=("みず",), meanings=("water",)),
        Kanji(id=5, kanjiChar="木", onyomi=("ボク", "モク"), kunyomi=("き",), meanings=("tree", "wood")),
        Kanji(id=6, kanjiChar="陽", onyomi=("ヨウ",), kunyomi=(), meanings=("sun", "sunshine")),
    ]


@pytest.fixture
def words() -> list[Word]:
    return [
        Word(word="食べる", reading="たべる", meanings=("to eat",)),
        Word(word="飲む", reading="のむ", meanings=("to drink",)),
        Word(word="水", reading="みず", meanings=("water",)),
        Word(word="猫", reading="ねこ", meanings=("cat",)),
        Word(word="犬", reading="いぬ", meanings=("dog",)),
    ]


@pytest.fixture
def failing_redis() -> FakeRedis:
    """Redis stand-in whose every call raises a connection error."""
    return FakeRedis(fail=True)
