"""Tests for snapshot persistence and atomic JSON writes."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from keycheck.exceptions import SnapshotError
from keycheck.io import read_source_text, write_json_atomic
from keycheck.io.snapshot import load_snapshot, save_snapshot, save_validation_result
from keycheck.model import KeyLocation, KeyUsage, ScanResult, ValidationResult, ValidationSummary


def _result() -> ScanResult:
    usage = KeyUsage(
        id="login_button",
        locations=[KeyLocation(file="lib/login.dart", line=4, column=9, detector="ValueKey", context="method:build")],
        tags={"critical"},
    )
    return ScanResult(key_usages={"login_button": usage}, duration_ms=12)


def test_snapshot_save_and_load(tmp_path: Path) -> None:
    path = tmp_path / "reports" / "baseline.json"
    original = _result()

    save_snapshot(path, original)
    loaded = load_snapshot(path)

    assert loaded.keys == ["login_button"]
    assert loaded.key_usages["login_button"] == original.key_usages["login_button"]
    assert loaded.timestamp == original.timestamp
    assert not list(path.parent.glob(".tmp-*"))


def test_hand_written_baseline_with_bare_keys(tmp_path: Path) -> None:
    path = tmp_path / "baseline.json"
    path.write_text(
        json.dumps({"schemaVersion": "1.0", "timestamp": "2025-01-01T00:00:00Z", "keys": ["home", "cart"]}),
        encoding="utf-8",
    )

    loaded = load_snapshot(path)

    assert loaded.keys == ["home", "cart"]
    assert loaded.key_usages["cart"].locations == []


@pytest.mark.parametrize(
    ("content", "expected_match"),
    [
        ("{broken", "not valid JSON"),
        ("[1, 2]", "JSON object"),
        ('{"schemaVersion": "9.9", "timestamp": "2025-01-01T00:00:00Z"}', "malformed"),
        ('{"schemaVersion": "1.0", "timestamp": "yesterday"}', "malformed"),
        ('{"schemaVersion": "1.0", "timestamp": "2025-01-01T00:00:00Z", "key_usages": {"a": {"id": "b"}}}', "malformed"),
    ],
)
def test_load_snapshot_rejects_bad_documents(tmp_path: Path, content: str, expected_match: str) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(SnapshotError, match=expected_match):
        load_snapshot(path)


def test_load_snapshot_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SnapshotError, match="not found"):
        load_snapshot(tmp_path / "absent.json")


def test_validation_result_is_written(tmp_path: Path) -> None:
    path = tmp_path / "validation.json"
    summary = ValidationSummary(total_keys=1, lost=0, added=0, renamed=0, deprecated_in_use=0, drift_percentage=0.0)

    save_validation_result(path, ValidationResult(summary=summary))

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["has_violations"] is False
    assert payload["summary"]["total_keys"] == 1


def test_atomic_write_cleans_up_on_failure(tmp_path: Path) -> None:
    target = tmp_path / "out.json"
    target.write_text('{"old": true}\n', encoding="utf-8")

    with pytest.raises(TypeError):
        write_json_atomic(path=target, payload={"bad": object()}, temp_prefix=".tmp-", temp_suffix=".json")

    assert json.loads(target.read_text(encoding="utf-8")) == {"old": True}
    assert [path.name for path in tmp_path.iterdir()] == ["out.json"]


def test_read_source_text_strips_bom(tmp_path: Path) -> None:
    path = tmp_path / "a.dart"
    path.write_bytes(b"\xef\xbb\xbfvoid main() {}\n")

    assert read_source_text(path) == "void main() {}\n"
