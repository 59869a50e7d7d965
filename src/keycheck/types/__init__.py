"""Shared type aliases for Keycheck."""

from .cache import CacheDocument
from .common import JsonObject, JsonScalar, JsonValue

__all__ = [
    "CacheDocument",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
]
