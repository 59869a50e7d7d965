"""Tests for model invariants and (de)serialization."""

from __future__ import annotations

import pytest

from keycheck.model import BlindSpot, HandlerInfo, KeyLocation, KeyUsage, ScanMetrics, ScanResult


def _location(file: str = "lib/a.dart", line: int = 1) -> KeyLocation:
    return KeyLocation(file=file, line=line, column=5, detector="ValueKey")


def test_empty_metrics_report_full_coverage() -> None:
    metrics = ScanMetrics()

    assert metrics.file_coverage == 100.0
    assert metrics.widget_coverage == 100.0
    assert metrics.handler_coverage == 100.0
    assert metrics.avg_file_size_kb == 0.0


@pytest.mark.parametrize(
    ("covered", "total", "expected"),
    [(0, 4, 0.0), (1, 4, 25.0), (4, 4, 100.0), (9, 4, 100.0)],
)
def test_coverage_is_bounded(covered: int, total: int, expected: float) -> None:
    metrics = ScanMetrics(total_widgets=total, widgets_with_keys=covered)

    assert metrics.widget_coverage == pytest.approx(expected)


def test_metrics_serialization_rounds_derived_fields() -> None:
    metrics = ScanMetrics(total_files=3, scanned_files=1, total_size_bytes=3000)

    payload = metrics.to_dict()

    assert payload["file_coverage"] == 33.33
    assert payload["avg_file_size_kb"] == 2.93
    assert ScanMetrics.from_dict(payload) == metrics


def test_merge_prefers_workspace_source() -> None:
    package_usage = KeyUsage(
        id="login_button",
        locations=[_location("package:ui_kit/button.dart")],
        tags={"const"},
        source="package",
        package="ui_kit@1.2.0",
    )
    workspace_usage = KeyUsage(id="login_button", locations=[_location(line=9)], tags={"critical"})

    package_usage.merge(workspace_usage)

    assert package_usage.source == "workspace"
    assert package_usage.package is None
    assert package_usage.tags == {"const", "critical"}
    assert [location.line for location in package_usage.locations] == [1, 9]


def test_workspace_usage_stays_workspace_after_package_merge() -> None:
    usage = KeyUsage(id="k", locations=[_location()])

    usage.merge(KeyUsage(id="k", source="package", package="ui_kit@1.2.0"))

    assert usage.source_identity == "workspace"


def test_copy_is_detached() -> None:
    usage = KeyUsage(id="k", locations=[_location()], tags={"a"})

    clone = usage.copy()
    clone.tags.add("b")
    clone.locations.append(_location(line=2))
    clone.handlers.append(HandlerInfo(kind="tap", method="_onTap", file="lib/a.dart", line=3))

    assert usage.tags == {"a"}
    assert len(usage.locations) == 1
    assert usage.handlers == []


def test_last_seen_uses_first_location() -> None:
    assert KeyUsage(id="k").last_seen is None
    assert KeyUsage(id="k", locations=[_location(line=4), _location(line=8)]).last_seen == "lib/a.dart:4"


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "k", "status": "archived"},
        {"id": "k", "source": "remote"},
        {"id": 3},
        {"id": "k", "tags": "critical"},
    ],
)
def test_key_usage_rejects_invalid_fields(payload: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        KeyUsage.from_dict(payload)


def test_blind_spot_severity_is_validated() -> None:
    with pytest.raises(ValueError, match="severity"):
        BlindSpot.from_dict({"type": "x", "location": "global", "severity": "fatal", "message": "m"})


def test_scan_result_keys_follow_discovery_order() -> None:
    result = ScanResult(key_usages={key: KeyUsage(id=key) for key in ("zeta", "alpha", "mid")})

    assert result.keys == ["zeta", "alpha", "mid"]
    assert result.to_dict()["keys"] == ["zeta", "alpha", "mid"]
