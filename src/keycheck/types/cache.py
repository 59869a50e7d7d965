"""Typed dependency cache document."""

from __future__ import annotations

from typing import TypedDict

from keycheck.types.common import JsonObject


class CacheDocument(TypedDict):
    """One cache entry persisted per dependency package."""

    cache_key: str
    cached_at: str
    result: JsonObject
