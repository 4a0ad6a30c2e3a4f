"""Level sources: idempotent reads of the raw records for one level."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Protocol

import httpx

from dojo_engine.core.config import settings

logger = logging.getLogger(__name__)

RawRecords = list[dict[str, Any]]


class LevelSource(Protocol):
    async def fetch_level(self, level: str) -> RawRecords: ...


def render_level_path(template: str, level: str) -> str:
    """Fill ``{level}`` (lowercase) and ``{LEVEL}`` (uppercase) in a path template."""
    return template.format(level=level.lower(), LEVEL=level.upper())


def _ensure_records(data: Any, origin: str) -> RawRecords:
    if not isinstance(data, list) or not all(isinstance(record, dict) for record in data):
        raise ValueError(f"Expected a JSON list of objects from {origin}")
    return data


class HttpLevelSource:
    """
    Fetch level files over HTTP.

    Pass ``client`` to share a connection pool (or a mock transport in tests);
    otherwise a short-lived client is opened per fetch.
    """

    def __init__(
        self,
        path_template: str,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.path_template = path_template
        self.base_url = (base_url or settings.CONTENT_BASE_URL).rstrip("/")
        self.client = client
        self.timeout = timeout or settings.CONTENT_FETCH_TIMEOUT_SECONDS

    def url_for(self, level: str) -> str:
        return f"{self.base_url}{render_level_path(self.path_template, level)}"

    async def fetch_level(self, level: str) -> RawRecords:
        url = self.url_for(level)
        if self.client is not None:
            resp = await self.client.get(url, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url)
        resp.raise_for_status()
        return _ensure_records(resp.json(), url)


class DirectoryLevelSource:
    """Read level files from a local directory, off the event loop."""

    def __init__(self, directory: str | Path, path_template: str):
        self.directory = Path(directory)
        self.path_template = path_template

    def path_for(self, level: str) -> Path:
        return self.directory / render_level_path(self.path_template, level).lstrip("/")

    async def fetch_level(self, level: str) -> RawRecords:
        path = self.path_for(level)
        text = await asyncio.to_thread(path.read_text, encoding="utf-8-sig")
        return _ensure_records(json.loads(text), str(path))


def create_level_source(path_template: str) -> LevelSource:
    """Directory source when CONTENT_DATA_DIR is set, HTTP otherwise."""
    if settings.CONTENT_DATA_DIR:
        return DirectoryLevelSource(settings.CONTENT_DATA_DIR, path_template)
    return HttpLevelSource(path_template)
