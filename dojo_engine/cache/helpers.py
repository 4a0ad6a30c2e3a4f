"""Cache key helpers."""

from __future__ import annotations

KEY_PREFIX = "content"


def content_level_key(domain: str, level: str) -> str:
    return f"{KEY_PREFIX}:{domain}:{level}"


def content_domain_pattern(domain: str) -> str:
    return f"{KEY_PREFIX}:{domain}:*"


def content_domain_prefix(domain: str) -> str:
    return f"{KEY_PREFIX}:{domain}:"
