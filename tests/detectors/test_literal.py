"""Tests for literal key-constructor detectors."""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Callable

import pytest

from keycheck.detectors import KeyHit

RunDetector: TypeAlias = Callable[[str, str], list[KeyHit]]


def test_value_key_const_literal(run_detector: RunDetector) -> None:
    source = "final k = const ValueKey('login_button');\n"

    hits = run_detector("ValueKey", source)

    assert len(hits) == 1
    hit = hits[0]
    assert hit.key == "login_button"
    assert hit.detector == "ValueKey"
    assert hit.tags == frozenset({"const"})
    assert (hit.line, hit.column) == (1, source.index("'login_button'") + 1)
    assert hit.context == "global"


def test_value_key_with_type_arguments(run_detector: RunDetector) -> None:
    hits = run_detector("ValueKey", "final k = ValueKey<String>('typed');")

    assert [hit.key for hit in hits] == ["typed"]
    assert hits[0].tags == frozenset()


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("ValueKey('item_$id')", "item_${...}"),
        ("ValueKey('row_${index + 1}')", "row_${...}"),
        ('ValueKey("tab_${tabs[i]}_label")', "tab_${...}_label"),
    ],
)
def test_value_key_interpolation_is_normalized(run_detector: RunDetector, source: str, expected: str) -> None:
    hits = run_detector("ValueKey", f"final k = {source};")

    assert [hit.key for hit in hits] == [expected]
    assert "dynamic" in hits[0].tags


def test_raw_and_adjacent_literals(run_detector: RunDetector) -> None:
    source = "final a = ValueKey(r'price$usd');\nfinal b = ValueKey('checkout' '_total');\n"

    hits = run_detector("ValueKey", source)

    assert [hit.key for hit in hits] == ["price$usd", "checkout_total"]
    assert all("dynamic" not in hit.tags for hit in hits)
    assert hits[1].line == 2


@pytest.mark.parametrize("argument", ["someVariable", "'row_' + id", "widget.key"])
def test_value_key_non_literal_argument_is_unkeyed_hit(run_detector: RunDetector, argument: str) -> None:
    hits = run_detector("ValueKey", f"final k = ValueKey({argument});")

    assert len(hits) == 1
    assert hits[0].key is None


def test_commented_and_quoted_constructors_are_ignored(run_detector: RunDetector) -> None:
    source = (
        "// ValueKey('line_comment')\n"
        "/* ValueKey('block') /* nested */ ValueKey('still_comment') */\n"
        "final text = \"ValueKey('inside_string')\";\n"
    )

    assert run_detector("ValueKey", source) == []


def test_key_detector_matches_only_plain_key(run_detector: RunDetector) -> None:
    source = "final a = Key('plain');\nfinal b = ValueKey('value');\nfinal c = UniqueKey();\nfinal d = GlobalKey();\n"

    hits = run_detector("Key", source)

    assert [hit.key for hit in hits] == ["plain"]


def test_object_key(run_detector: RunDetector) -> None:
    hits = run_detector("ObjectKey", "final k = const ObjectKey('order_row');")

    assert [hit.key for hit in hits] == ["order_row"]
    assert hits[0].tags == frozenset({"const"})


def test_wrapper_key_types_carry_platform_tags(run_detector: RunDetector) -> None:
    source = "final m = MaterialKey('m_key');\nfinal c = CupertinoKey('c_key');\n"

    material = run_detector("MaterialKey", source)
    cupertino = run_detector("CupertinoKey", source)

    assert [(hit.key, hit.tags) for hit in material] == [("m_key", frozenset({"material"}))]
    assert [(hit.key, hit.tags) for hit in cupertino] == [("c_key", frozenset({"cupertino"}))]


def test_context_reports_enclosing_method(run_detector: RunDetector) -> None:
    source = (
        "class LoginScreen extends StatelessWidget {\n"
        "  final fieldKey = ValueKey('field');\n"
        "\n"
        "  Widget build(BuildContext context) {\n"
        "    return Text('hi', key: ValueKey('greeting'));\n"
        "  }\n"
        "}\n"
    )

    hits = {hit.key: hit for hit in run_detector("ValueKey", source)}

    assert hits["field"].context == "class:LoginScreen"
    assert hits["greeting"].context == "method:build"
    assert hits["greeting"].line == 5


@pytest.mark.parametrize("source", ["ValueKey(", "ValueKey((((", "Key(,,,)", "ValueKey()"])
def test_malformed_constructors_yield_unkeyed_hits(run_detector: RunDetector, source: str) -> None:
    hits = run_detector("ValueKey", source) + run_detector("Key", source)

    assert hits
    assert all(hit.key is None for hit in hits)
