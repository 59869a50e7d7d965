"""Tests for the per-package dependency cache."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

from keycheck.scanner.cache import cache_dir, cache_path, clear_cache, get_cache_key, load_cache, save_cache

_KEY = "ui_kit@1.2.0|abc123|3.4.0"
_PAYLOAD = {"package": "ui_kit@1.2.0", "files": []}


def test_cache_key_format() -> None:
    assert get_cache_key("ui_kit", "1.2.0", "abc123", "3.4.0") == _KEY
    assert get_cache_key("ui_kit", "1.2.0", "abc123", "3.4.0") == get_cache_key("ui_kit", "1.2.0", "abc123", "3.4.0")
    assert get_cache_key("ui_kit", "1.2.1", "abc123", "3.4.0") != _KEY


def test_entries_live_under_tool_cache_dir(tmp_path: Path) -> None:
    path = save_cache(tmp_path, _KEY, _PAYLOAD)

    assert path == cache_path(tmp_path, _KEY)
    assert path.parent == tmp_path / ".cache" / "keycheck" / "cache"
    assert json.loads(path.read_text(encoding="utf-8"))["cache_key"] == _KEY


def test_fresh_entry_is_returned(tmp_path: Path) -> None:
    saved_at = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
    save_cache(tmp_path, _KEY, _PAYLOAD, now=saved_at)

    assert load_cache(tmp_path, _KEY, now=saved_at + timedelta(hours=1)) == _PAYLOAD


def test_expired_entry_is_deleted(tmp_path: Path) -> None:
    saved_at = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
    path = save_cache(tmp_path, _KEY, _PAYLOAD, now=saved_at)

    assert load_cache(tmp_path, _KEY, now=saved_at + timedelta(hours=25)) is None
    assert not path.exists()


def test_missing_entry_is_a_miss(tmp_path: Path) -> None:
    assert load_cache(tmp_path, _KEY) is None


def test_corrupt_entry_is_deleted(tmp_path: Path) -> None:
    path = cache_path(tmp_path, _KEY)
    path.parent.mkdir(parents=True)
    path.write_text("{truncated", encoding="utf-8")

    assert load_cache(tmp_path, _KEY) is None
    assert not path.exists()


def test_entry_for_other_key_is_rejected(tmp_path: Path) -> None:
    path = cache_path(tmp_path, _KEY)
    path.parent.mkdir(parents=True)
    path.write_text(
        json.dumps({"cache_key": "other@1.0.0|x|y", "cached_at": datetime.now(UTC).isoformat(), "result": {}}),
        encoding="utf-8",
    )

    assert load_cache(tmp_path, _KEY) is None
    assert not path.exists()


def test_clear_cache_removes_everything(tmp_path: Path) -> None:
    save_cache(tmp_path, _KEY, _PAYLOAD)
    save_cache(tmp_path, "other@1.0.0|x|y", _PAYLOAD)

    clear_cache(tmp_path)

    assert not cache_dir(tmp_path).exists()
    clear_cache(tmp_path)
