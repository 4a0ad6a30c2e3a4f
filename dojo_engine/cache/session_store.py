"""Session-scoped stores for resolved content levels.

The session store outlives the in-process cache (a reload within the same
session reuses it). Stores are fail-open: any backend error reads as a miss
and never breaks content loading.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel

from dojo_engine.cache.helpers import content_domain_pattern, content_domain_prefix
from dojo_engine.core.config import settings
from dojo_engine.core.redis_client import get_redis_client

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class SessionStore(Protocol[M]):
    def get(self, key: str) -> tuple[M, ...] | None: ...

    def set(self, key: str, items: Sequence[M]) -> None: ...

    def clear(self, domain: str) -> None: ...


class InMemorySessionStore(Generic[M]):
    """Dict-backed store; holds the resolved tuples by reference."""

    def __init__(self):
        self._entries: dict[str, tuple[M, ...]] = {}

    def get(self, key: str) -> tuple[M, ...] | None:
        return self._entries.get(key)

    def set(self, key: str, items: Sequence[M]) -> None:
        self._entries[key] = tuple(items)

    def clear(self, domain: str) -> None:
        prefix = content_domain_prefix(domain)
        for key in [key for key in self._entries if key.startswith(prefix)]:
            del self._entries[key]

    def __contains__(self, key: str) -> bool:
        return key in self._entries


class RedisSessionStore(Generic[M]):
    """
    Redis-backed store with a TTL.

    Items are stored as a JSON list of model dumps and validated back into
    ``model`` on read.
    """

    def __init__(self, client: Any, model: type[M], ttl_seconds: int | None = None):
        self.client = client
        self.model = model
        self.ttl_seconds = ttl_seconds or settings.SESSION_CACHE_TTL_SECONDS

    def get(self, key: str) -> tuple[M, ...] | None:
        try:
            raw = self.client.get(key)
            if not raw:
                return None
            return tuple(self.model.model_validate(record) for record in json.loads(raw))
        except Exception as e:
            logger.warning("session_store_get_failed", extra={"key": key, "error": str(e)})
            return None

    def set(self, key: str, items: Sequence[M]) -> None:
        try:
            payload = json.dumps([item.model_dump(mode="json") for item in items])
            self.client.setex(key, int(self.ttl_seconds), payload)
        except Exception as e:
            logger.warning("session_store_set_failed", extra={"key": key, "error": str(e)})

    def clear(self, domain: str, max_delete: int = 5000) -> None:
        """Delete this domain's keys using SCAN."""
        pattern = content_domain_pattern(domain)
        deleted = 0
        try:
            pipe = self.client.pipeline(transaction=False)
            for key in self.client.scan_iter(match=pattern, count=500):
                pipe.delete(key)
                deleted += 1
                if deleted % 200 == 0:
                    pipe.execute()
                if deleted >= max_delete:
                    break
            if deleted % 200 != 0:
                pipe.execute()
        except Exception as e:
            logger.warning("session_store_clear_failed", extra={"pattern": pattern, "error": str(e)})


def create_session_store(model: type[M]) -> SessionStore[M]:
    """Redis store when Redis is enabled and reachable, memory otherwise."""
    client = get_redis_client()
    if client is None:
        return InMemorySessionStore()
    return RedisSessionStore(client, model)
