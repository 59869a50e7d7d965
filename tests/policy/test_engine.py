"""Tests for policy validation."""

from __future__ import annotations

import pytest

from keycheck.config import PolicyConfig
from keycheck.model import FileAnalysis, KeyLocation, KeyUsage, ScanResult
from keycheck.policy import validate


def _usage(key: str, *, tags: set[str] | None = None, status: str = "active", file: str = "lib/a.dart") -> KeyUsage:
    return KeyUsage(
        id=key,
        locations=[KeyLocation(file=file, line=3, column=7, detector="ValueKey")],
        tags=set(tags or ()),
        status=status,
    )


def _snapshot(*usages: KeyUsage) -> ScanResult:
    return ScanResult(key_usages={usage.id: usage for usage in usages})


def test_protected_key_fails_even_when_lost_keys_are_allowed() -> None:
    baseline = _snapshot(_usage("critical_key", tags={"critical"}), _usage("home_title"))
    current = _snapshot(_usage("home_title"))

    result = validate(
        baseline,
        current,
        PolicyConfig(fail_on_lost=False, protected_tags=("critical",), max_drift=100.0),
    )

    assert not result.passed
    assert len(result.violations) == 1
    violation = result.violations[0]
    assert violation.type == "lost"
    assert violation.severity == "error"
    assert violation.policy == "protected_tags"
    assert violation.message == "Protected key 'critical_key' (critical) not found"
    assert violation.key is not None
    assert violation.key.tags == ("critical",)
    assert violation.key.last_seen == "lib/a.dart:3"


def test_unprotected_lost_key_is_a_warning_when_allowed() -> None:
    result = validate(
        _snapshot(_usage("banner"), _usage("home_title")),
        _snapshot(_usage("home_title")),
        PolicyConfig(fail_on_lost=False, max_drift=100.0),
    )

    assert result.passed
    assert result.warnings == ["Key 'banner' was removed"]
    assert result.summary.lost == 1


def test_lost_key_fails_by_default() -> None:
    result = validate(_snapshot(_usage("banner")), _snapshot(), PolicyConfig(max_drift=100.0))

    assert [(violation.type, violation.policy) for violation in result.violations] == [("lost", "fail_on_lost")]
    assert result.violations[0].message == "Key 'banner' not found in scan"


def test_drift_over_limit_is_single_violation() -> None:
    baseline = _snapshot(*(_usage(f"key{index}") for index in range(100)))
    current = _snapshot(*(_usage(f"key{index}") for index in range(90)))

    result = validate(baseline, current, PolicyConfig(fail_on_lost=False, max_drift=5.0))

    drift = [violation for violation in result.violations if violation.type == "drift"]
    assert len(drift) == 1
    assert drift[0].key is None
    assert drift[0].message == "Key drift 10.0% exceeds maximum 5.0%"
    assert result.summary.drift_percentage == pytest.approx(10.0)
    assert result.summary.total_keys == 90


def test_drift_at_limit_passes() -> None:
    baseline = _snapshot(*(_usage(f"key{index}") for index in range(10)))
    current = _snapshot(*(_usage(f"key{index}") for index in range(9)))

    result = validate(baseline, current, PolicyConfig(fail_on_lost=False, max_drift=10.0))

    assert result.passed


def test_rename_is_warning_unless_enforced() -> None:
    baseline = _snapshot(_usage("app_main"))
    current = _snapshot(_usage("app_main_view"))

    relaxed = validate(baseline, current, PolicyConfig(max_drift=100.0))
    strict = validate(baseline, current, PolicyConfig(fail_on_rename=True, max_drift=100.0))

    assert relaxed.passed
    assert relaxed.warnings == ["Key 'app_main' appears renamed to 'app_main_view'"]
    assert [violation.message for violation in strict.violations] == ["Key 'app_main' renamed to 'app_main_view'"]
    assert strict.violations[0].severity == "warning"
    assert strict.summary.renamed == 1


def test_extra_keys_fail_when_enforced() -> None:
    baseline = _snapshot(_usage("home_title"))
    current = _snapshot(_usage("home_title"), _usage("promo_banner", file="packages/promo/lib/banner.dart"))

    result = validate(baseline, current, PolicyConfig(fail_on_extra=True, max_drift=100.0))

    assert [violation.message for violation in result.violations] == ["Extra key 'promo_banner' found"]
    assert result.violations[0].key is not None
    assert result.violations[0].key.package == "promo"


def test_deprecated_keys_still_in_use_are_counted() -> None:
    baseline = _snapshot(_usage("old_tab"))
    current = _snapshot(_usage("old_tab", status="deprecated"))

    result = validate(baseline, current, PolicyConfig())

    assert result.passed
    assert result.summary.deprecated_in_use == 1
    assert result.warnings == ["Deprecated key 'old_tab' is still in use"]


def test_package_policies_run_over_source_usages() -> None:
    current = _snapshot(_usage("login_button"))
    current.source_usages = [
        _usage("login_button"),
        KeyUsage(id="login_button", source="package", package="ui_kit@1.2.0"),
        KeyUsage(id="kit_button", source="package", package="ui_kit@1.2.0"),
    ]

    result = validate(
        _snapshot(_usage("login_button")),
        current,
        PolicyConfig(fail_on_package_missing=True, fail_on_collision=True),
    )

    assert [violation.type for violation in result.violations] == ["package_missing", "collision"]


def test_summary_counts_scanned_packages() -> None:
    current = _snapshot(_usage("a"))
    current.file_analyses = {
        path: FileAnalysis(path=path, relative_path=path)
        for path in ("lib/main.dart", "packages/auth/lib/a.dart", "packages/auth/lib/b.dart", "packages/cart/lib/c.dart")
    }

    result = validate(_snapshot(_usage("a")), current, PolicyConfig())

    assert result.summary.scanned_packages == 3


def test_result_serializes_violations() -> None:
    result = validate(_snapshot(_usage("banner")), _snapshot(), PolicyConfig(max_drift=100.0))

    payload = result.to_dict()

    assert payload["schema_version"] == "1.0"
    assert payload["has_violations"] is True
    assert payload["violations"][0]["key"]["id"] == "banner"
    assert payload["violations"][0]["remediation"] == "Restore key or update registry"
