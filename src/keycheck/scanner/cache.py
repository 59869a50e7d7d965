"""Per-package dependency cache with a 24 hour TTL.

Entries live under ``<root>/.cache/keycheck/cache/`` as one JSON document per
cache key. Workspace files are never cached.
"""

from __future__ import annotations

import hashlib
import json
import logging
import shutil
from collections.abc import Mapping
from contextlib import suppress
from datetime import datetime
from pathlib import Path
from typing import Any

from keycheck.constants.branding import TOOL_CACHE_DIRNAME, TOOL_NAME
from keycheck.constants.cache import CACHE_FILE_SUFFIX, CACHE_SUBDIR, CACHE_TEMP_PREFIX, CACHE_TEMP_SUFFIX, CACHE_TTL
from keycheck.exceptions import CacheError
from keycheck.io import load_json_file, write_json_atomic
from keycheck.model.fields import parse_timestamp, require_mapping, require_str, utc_now
from keycheck.types import CacheDocument, JsonObject

logger = logging.getLogger(__name__)


def cache_dir(root: Path) -> Path:
    return root / TOOL_CACHE_DIRNAME / TOOL_NAME / CACHE_SUBDIR


def get_cache_key(package_name: str, package_version: str, detector_hash: str, sdk_version: str) -> str:
    """Build the cache key for one dependency package; pure and deterministic."""
    return f"{package_name}@{package_version}|{detector_hash}|{sdk_version}"


def cache_path(root: Path, key: str) -> Path:
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
    return cache_dir(root) / f"{digest}{CACHE_FILE_SUFFIX}"


def save_cache(root: Path, key: str, payload: JsonObject, *, now: datetime | None = None) -> Path:
    """Write one cache entry atomically and return its path."""
    document: CacheDocument = {
        "cache_key": key,
        "cached_at": (now or utc_now()).isoformat(),
        "result": payload,
    }
    path = cache_path(root, key)
    write_json_atomic(path=path, payload=document, temp_prefix=CACHE_TEMP_PREFIX, temp_suffix=CACHE_TEMP_SUFFIX)
    logger.debug("Cached %s at %s", key, path)
    return path


def load_cache(root: Path, key: str, *, now: datetime | None = None) -> JsonObject | None:
    """Return the cached payload for ``key`` or ``None``.

    Expired and malformed entries are deleted and reported as a miss.
    """
    path = cache_path(root, key)
    if not path.is_file():
        return None

    try:
        document = _parse_document(load_json_file(path), key)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, CacheError) as exc:
        logger.warning("Discarding corrupt cache entry %s: %s", path.name, exc)
        _discard(path)
        return None

    cached_at = parse_timestamp(document, "cached_at")
    if (now or utc_now()) - cached_at > CACHE_TTL:
        logger.debug("Cache entry for %s expired (cached at %s)", key, document["cached_at"])
        _discard(path)
        return None
    return document["result"]


def clear_cache(root: Path) -> None:
    """Remove the entire cache subtree."""
    directory = cache_dir(root)
    if directory.exists():
        shutil.rmtree(directory)
        logger.info("Cleared dependency cache at %s", directory)


def _parse_document(payload: object, key: str) -> CacheDocument:
    try:
        document = require_mapping(payload, "cache entry")
        cache_key = require_str(document, "cache_key")
        parse_timestamp(document, "cached_at")
        result: Mapping[str, Any] = require_mapping(document.get("result"), "result")
    except ValueError as exc:
        raise CacheError(str(exc)) from exc
    if cache_key != key:
        raise CacheError(f"cache_key mismatch: expected {key!r}, found {cache_key!r}")
    return {"cache_key": cache_key, "cached_at": document["cached_at"], "result": dict(result)}


def _discard(path: Path) -> None:
    with suppress(FileNotFoundError):
        path.unlink()
