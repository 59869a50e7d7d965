"""Shared exception hierarchy for Keycheck."""

from __future__ import annotations

from .base import KeycheckError
from .cache import CacheError
from .config import ConfigError
from .parsing import SourceParseError
from .snapshot import SnapshotError

__all__ = ["CacheError", "ConfigError", "KeycheckError", "SnapshotError", "SourceParseError"]
