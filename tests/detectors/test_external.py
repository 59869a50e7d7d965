"""Tests for test-framework and accessibility detectors."""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Callable
from pathlib import Path

from keycheck.detectors import DETECTORS, KeyHit
from keycheck.scanner.analyzer import analyze_source

RunDetector: TypeAlias = Callable[[str, str], list[KeyHit]]


def test_semantics_identifier_is_tagged(run_detector: RunDetector) -> None:
    source = "Semantics(\n  identifier: 'checkout_total',\n  child: Text('Total'),\n);\n"

    hits = run_detector("Semantics", source)

    assert [hit.key for hit in hits] == ["checkout_total"]
    assert hits[0].tags == frozenset({"semantic", "accessibility"})
    assert hits[0].line == 2


def test_semantics_without_identifier_is_not_a_hit(run_detector: RunDetector) -> None:
    source = "Semantics(label: 'Total', child: Text('x'));\nSemantics(identifier: totalId, child: Text('y'));\n"

    hits = run_detector("Semantics", source)

    assert len(hits) == 1
    assert hits[0].key is None


def test_find_by_value_key_and_by_key(run_detector: RunDetector) -> None:
    source = (
        "await tester.tap(find.byValueKey('login_button'));\n"
        "expect(find.byKey(const ValueKey('welcome_banner')), findsOneWidget);\n"
        "expect(find.byKey(bannerKey), findsNothing);\n"
    )

    hits = run_detector("FindByKey", source)

    assert [hit.key for hit in hits] == ["login_button", "welcome_banner", None]
    assert all(hit.tags == frozenset({"test"}) for hit in hits)


def test_patrol_finder_reports_only_literal_keys(run_detector: RunDetector) -> None:
    source = "await $('email_input').enterText('a@b.c');\nawait $(#loginButton).tap();\nawait $(TextField).tap();\n"

    hits = run_detector("PatrolFinder", source)

    assert [hit.key for hit in hits] == ["email_input"]
    assert hits[0].tags == frozenset({"test", "patrol"})


def test_integration_key_attribute_requires_literal(run_detector: RunDetector) -> None:
    source = "final finder = SerializableFinder(key: 'submit_order');\nfinal w = Text('x', key: ValueKey('other'));\n"

    hits = run_detector("IntegrationTestKey", source)

    assert [hit.key for hit in hits] == ["submit_order"]
    assert hits[0].tags == frozenset({"integration"})


def test_finder_over_key_constructor_dedupes_to_first_detector() -> None:
    outcome = analyze_source(
        "expect(find.byKey(const Key('save')), findsOneWidget);\n",
        path=Path("finder_test.dart"),
        relative_path="finder_test.dart",
        detectors=DETECTORS,
    )

    assert len(outcome.hits) == 1
    hit = outcome.hits[0]
    assert hit.key == "save"
    assert hit.detector == "Key"
    assert hit.tags == frozenset({"const", "test"})
    assert outcome.analysis is not None
    assert outcome.analysis.detector_hits["Key"] == 1
    assert outcome.analysis.detector_hits["FindByKey"] == 1
