"""Tests for the KeyConstants resolution detector."""

from __future__ import annotations

from keycheck.detectors.constants import detect_key_constants, index_key_constants, render_template
from keycheck.parsers import SourceDocument

_SOURCE = """\
class KeyConstants {
  static const String loginButton = 'login_button';
  static const emailField = 'email_field';
  static String itemKey(String id) => 'item_$id';
  static String rowKey(int index) => 'row_$index';
  static String get logout => 'logout_button';
}

Widget build(BuildContext context) {
  return Column(children: [
    ElevatedButton(key: ValueKey(KeyConstants.loginButton), onPressed: null, child: null),
    TextField(key: Key('email_field')),
    ListTile(key: ValueKey(KeyConstants.itemKey('42'))),
    ListTile(key: ValueKey(KeyConstants.rowKey(index))),
    TextButton(key: ValueKey(KeyConstants.logout), onPressed: null, child: null),
    TextButton(key: ValueKey(KeyConstants.missing), onPressed: null, child: null),
  ]);
}
"""


def _detect(source: str = _SOURCE):
    return detect_key_constants(SourceDocument.from_text(source))


def test_index_covers_fields_methods_and_getters() -> None:
    index = index_key_constants(SourceDocument.from_text(_SOURCE))

    assert set(index) == {"loginButton", "emailField", "itemKey", "rowKey", "logout"}
    assert index["loginButton"].value == "login_button"
    assert index["itemKey"].parameter == "id"
    assert index["itemKey"].template == "item_${id}"
    assert index["itemKey"].dynamic
    assert index["logout"].parameter is None


def test_references_and_literals_are_classified() -> None:
    hits = _detect()

    assert [(hit.key, hit.symbol) for hit in hits] == [
        ("login_button", "loginButton"),
        ("email_field", "emailField"),
        ("item_42", "itemKey"),
        ("row_${...}", "rowKey"),
        ("logout_button", "logout"),
        ("KeyConstants.missing", "missing"),
    ]
    tags = [hit.tags for hit in hits]
    assert tags[0] == frozenset({"resolved"})
    assert tags[1] == frozenset({"literal"})
    assert tags[2] == frozenset({"resolved"})
    assert tags[3] == frozenset({"resolved", "dynamic"})
    assert tags[5] == frozenset({"unresolved"})
    assert all(hit.detector == "KeyConstants" for hit in hits)


def test_reference_position_is_class_name() -> None:
    hits = _detect()
    line = _SOURCE.splitlines()[10]

    assert hits[0].line == 11
    assert hits[0].column == line.index("KeyConstants") + 1
    assert hits[0].context == "function:build"


def test_literals_inside_constants_class_are_not_reported() -> None:
    hits = _detect("class KeyConstants {\n  static const a = 'alpha';\n}\n")

    assert hits == []


def test_without_constants_class_every_reference_is_unresolved() -> None:
    hits = _detect("final k = ValueKey(KeyConstants.submit);\n")

    assert [(hit.key, hit.tags) for hit in hits] == [("KeyConstants.submit", frozenset({"unresolved"}))]


def test_methods_with_several_parameters_are_not_indexed() -> None:
    source = "class KeyConstants {\n  static String cell(int row, int col) => 'cell_${row}_$col';\n}\n"

    assert index_key_constants(SourceDocument.from_text(source)) == {}


def test_render_template_binds_known_parameters_only() -> None:
    assert render_template("row_${index}_${column}", {"index": "3"}) == "row_3_${...}"
