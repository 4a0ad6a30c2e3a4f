"""Content cache service: per-level content loaded once and shared.

Lookup order for a level:
1. Session-scoped store (survives reloads within a session)
2. Process-wide memory
3. In-flight fetch for the same level (request coalescing)
4. New fetch -> parse -> store in both tiers

A failed fetch caches nothing, so the next call retries from scratch.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from dojo_engine.cache.helpers import content_level_key
from dojo_engine.cache.session_store import InMemorySessionStore, SessionStore
from dojo_engine.cache.sources import LevelSource
from dojo_engine.core.app_exceptions import FetchFailureError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ContentCacheService(Generic[M]):
    """
    Cache for one content domain over a closed set of levels.

    All coroutines must run on the same event loop. No locks are needed: the
    only suspension point is the fetch itself, and the in-flight task doubles
    as the deduplication marker.
    """

    def __init__(
        self,
        domain: str,
        levels: Iterable[str],
        source: LevelSource,
        parse: Callable[[dict[str, Any]], M],
        session_store: SessionStore[M] | None = None,
    ):
        self.domain = domain
        self.levels: tuple[str, ...] = tuple(str(getattr(level, "value", level)) for level in levels)
        self.source = source
        self.parse = parse
        self.session_store: SessionStore[M] = session_store if session_store is not None else InMemorySessionStore()
        self._memory: dict[str, tuple[M, ...]] = {}
        self._pending: dict[str, asyncio.Task[tuple[M, ...]]] = {}
        self.fetch_count = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _level(self, level: Any) -> str:
        name = str(getattr(level, "value", level))
        if name not in self.levels:
            raise ValueError(f"Unknown {self.domain} level: {name}. Expected one of {', '.join(self.levels)}")
        return name

    def _get_cached(self, level: str) -> tuple[M, ...] | None:
        session_items = self.session_store.get(content_level_key(self.domain, level))
        if session_items is not None:
            return session_items
        return self._memory.get(level)

    def _set_cached(self, level: str, items: tuple[M, ...]) -> None:
        self._memory[level] = items
        self.session_store.set(content_level_key(self.domain, level), items)

    async def get_by_level(self, level: Any) -> tuple[M, ...]:
        """
        Return the items of a level, fetching at most once per level.

        Concurrent callers for a level that is not cached yet all await the
        same fetch. Cancelling a caller does not cancel the fetch.

        Raises:
            FetchFailureError: If the underlying fetch or parse failed
            ValueError: If ``level`` is not one of this domain's levels
        """
        level = self._level(level)

        cached = self._get_cached(level)
        if cached is not None:
            return cached

        task = self._pending.get(level)
        if task is None:
            logger.debug("Cache miss for %s level %s", self.domain, level)
            task = asyncio.ensure_future(self._fetch(level))
            self._pending[level] = task
        else:
            logger.debug("Joining in-flight fetch for %s level %s", self.domain, level)

        return await asyncio.shield(task)

    async def _fetch(self, level: str) -> tuple[M, ...]:
        self.fetch_count += 1
        try:
            try:
                records = await self.source.fetch_level(level)
                items = tuple(self.parse(record) for record in records)
            except Exception as e:
                logger.warning(
                    "Content fetch failed",
                    extra={"domain": self.domain, "level": level, "error": str(e)},
                )
                raise FetchFailureError(self.domain, level, str(e) or type(e).__name__) from e

            self._set_cached(level, items)
            logger.info("Cached content level", extra={"domain": self.domain, "level": level, "items": len(items)})
            return items
        finally:
            self._pending.pop(level, None)

    async def preload_all(self) -> dict[str, FetchFailureError]:
        """
        Load every level concurrently.

        Returns:
            Failed levels mapped to their error (empty when all levels loaded)
        """
        results = await asyncio.gather(
            *(self.get_by_level(level) for level in self.levels),
            return_exceptions=True,
        )
        failures: dict[str, FetchFailureError] = {}
        for level, result in zip(self.levels, results):
            if isinstance(result, FetchFailureError):
                failures[level] = result
            elif isinstance(result, BaseException):
                raise result
        if failures:
            logger.warning("Preload finished with failures", extra={"domain": self.domain, "levels": sorted(failures)})
        return failures

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def is_cached(self, level: Any) -> bool:
        return self._get_cached(self._level(level)) is not None

    def is_loading(self, level: Any) -> bool:
        return self._level(level) in self._pending

    def get_all_cached(self) -> dict[str, tuple[M, ...]]:
        """Resolved levels only; levels never loaded are omitted."""
        cached: dict[str, tuple[M, ...]] = {}
        for level in self.levels:
            items = self._get_cached(level)
            if items is not None:
                cached[level] = items
        return cached

    def clear_cache(self) -> None:
        """
        Drop every resolved level from both tiers.

        Best-effort with respect to in-flight fetches: a fetch already running
        still completes and stores its result.
        """
        self._memory.clear()
        self.session_store.clear(self.domain)
        logger.info("Cleared content cache", extra={"domain": self.domain})
