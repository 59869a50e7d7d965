"""Tests for the lexical source model."""

from __future__ import annotations

import pytest

from keycheck.exceptions import SourceParseError
from keycheck.parsers import SourceDocument


def test_comments_are_blanked_in_code_and_skeleton() -> None:
    text = "a // note\nb /* outer /* inner */ still */ c\n"

    doc = SourceDocument.from_text(text)

    assert len(doc.code) == len(text)
    assert doc.code.split() == ["a", "b", "c"]
    assert doc.skeleton.split() == ["a", "b", "c"]
    assert doc.code.count("\n") == text.count("\n")


def test_string_contents_are_blanked_only_in_skeleton() -> None:
    doc = SourceDocument.from_text("x = 'ValueKey(a)';\n")

    assert "ValueKey(a)" in doc.code
    assert "ValueKey" not in doc.skeleton
    assert doc.skeleton.split() == ["x", "=", "'", "';"]


@pytest.mark.parametrize(
    "text",
    ["/* never closed", "final s = 'open;\n", "final s = '${a';", "final s = '''triple"],
)
def test_unterminated_tokens_raise(text: str) -> None:
    with pytest.raises(SourceParseError):
        SourceDocument.from_text(text)


@pytest.mark.parametrize("text", ["final k = ValueKey(r", "final k = ValueKey(R", "r"])
def test_raw_prefix_at_end_of_file_is_plain_code(text: str) -> None:
    doc = SourceDocument.from_text(text)

    assert doc.literals == []
    assert doc.code == text


def test_literals_decode_escapes_and_interpolation() -> None:
    doc = SourceDocument.from_text(r"""a('it\'s'); b(r'raw$x\n'); c("row_${i + 1}_$name"); d('''x''');""")

    values = [literal.value for literal in doc.literals]

    assert values == ["it's", "raw$x\\n", "row_${...}_${...}", "x"]
    assert doc.literals[1].raw
    assert doc.literals[2].dynamic
    assert doc.literals[2].template == "row_${i + 1}_${name}"


def test_strings_nested_in_interpolation_are_not_top_level_literals() -> None:
    doc = SourceDocument.from_text("""x('a_${map['k']}');""")

    assert [literal.value for literal in doc.literals] == ["a_${...}"]


def test_position_is_one_based() -> None:
    doc = SourceDocument.from_text("ab\ncd\n")

    assert doc.position(0) == (1, 1)
    assert doc.position(1) == (1, 2)
    assert doc.position(3) == (2, 1)
    assert doc.line_count == 2


def test_string_argument_joins_adjacent_literals() -> None:
    text = "f('a' 'b', 'c' + d)"
    doc = SourceDocument.from_text(text)

    joined = doc.string_argument(text.index("'a'"))
    concatenated = doc.string_argument(text.index("'c'"))

    assert joined is not None
    assert joined[1] == "ab"
    assert concatenated is None


def test_arguments_split_named_and_positional() -> None:
    text = "Text('hi', key: ValueKey('k'), style: s(1, 2))"
    doc = SourceDocument.from_text(text)

    arguments = doc.arguments(text.index("("))

    assert [argument.name for argument in arguments] == [None, "key", "style"]
    assert text[arguments[1].value_start : arguments[1].end] == "ValueKey('k')"


def test_scopes_and_context_labels() -> None:
    text = (
        "class Form extends StatelessWidget {\n"
        "  void _onSubmit() {\n"
        "    print('x');\n"
        "  }\n"
        "  String get title => 'Form';\n"
        "}\n"
        "void main() => runApp(Form());\n"
    )
    doc = SourceDocument.from_text(text)

    assert doc.context_at(text.index("print")) == "method:_onSubmit"
    assert doc.context_at(text.index("'Form'")) == "method:title"
    assert doc.context_at(text.index("runApp")) == "function:main"
    assert doc.context_at(0) == "global"
    assert doc.function_names == ["_onSubmit", "title", "main"]
    assert doc.class_scope("Form") is not None
