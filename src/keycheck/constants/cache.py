"""Constants used by the dependency cache and hashing."""

from __future__ import annotations

from datetime import timedelta

CACHE_SUBDIR: str = "cache"
CACHE_FILE_SUFFIX: str = ".json"
CACHE_TEMP_PREFIX: str = ".cache-"
CACHE_TEMP_SUFFIX: str = ".tmp"
CACHE_TTL: timedelta = timedelta(hours=24)

# Bump when detector semantics change so stale dependency entries stop matching.
DETECTOR_VERSION: str = "v3.0.0"

UNKNOWN_SDK_VERSION: str = "unknown"
UNKNOWN_PACKAGE_VERSION: str = "unknown"
