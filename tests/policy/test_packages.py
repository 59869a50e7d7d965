"""Tests for package-scope key policies."""

from __future__ import annotations

from keycheck.model import KeyLocation, KeyUsage
from keycheck.policy import check_package_policies


def _package_usage(key: str, package: str) -> KeyUsage:
    return KeyUsage(
        id=key,
        locations=[KeyLocation(file=f"package:{package.split('@')[0]}/widgets.dart", line=1, column=1, detector="Key")],
        source="package",
        package=package,
    )


def test_missing_in_app_and_three_way_collision() -> None:
    usages = [
        _package_usage("k", "p@1.0"),
        KeyUsage(id="k2", source="workspace"),
        _package_usage("k2", "p@1.0"),
        _package_usage("k2", "q@2.0"),
    ]

    result = check_package_policies(usages, fail_on_package_missing=True, fail_on_collision=True)

    assert result.missing_in_app == ["k"]
    assert len(result.collisions) == 1
    assert result.collisions[0].key == "k2"
    assert result.collisions[0].sources == ("workspace", "p@1.0", "q@2.0")
    assert not result.passed
    missing = result.violations[0]
    assert missing.message == "Key 'k' is defined in p@1.0 but never used in the app"
    assert missing.key is not None
    assert missing.key.package == "p@1.0"


def test_flags_off_report_findings_without_violations() -> None:
    usages = [_package_usage("k", "p@1.0"), _package_usage("k", "q@2.0")]

    result = check_package_policies(usages, fail_on_package_missing=False, fail_on_collision=False)

    assert result.missing_in_app == ["k"]
    assert [collision.sources for collision in result.collisions] == [("p@1.0", "q@2.0")]
    assert result.passed


def test_mapping_input_has_one_usage_per_key() -> None:
    usages = {"k": _package_usage("k", "p@1.0"), "home": KeyUsage(id="home")}

    result = check_package_policies(usages, fail_on_package_missing=True, fail_on_collision=True)

    assert result.missing_in_app == ["k"]
    assert result.collisions == []
    assert [violation.type for violation in result.violations] == ["package_missing"]


def test_repeated_usage_from_one_source_is_not_a_collision() -> None:
    usages = [KeyUsage(id="k"), KeyUsage(id="k")]

    result = check_package_policies(usages, fail_on_package_missing=True, fail_on_collision=True)

    assert result.collisions == []
    assert result.to_dict() == {"missing_in_app": [], "collisions": [], "violations": [], "passed": True}
