"""Widget recognition and callback-handler tables for the file analyzer."""

from __future__ import annotations

import re
from re import Pattern

WIDGET_NAME_SUFFIXES: tuple[str, ...] = (
    "Widget",
    "Button",
    "Field",
    "View",
    "Screen",
    "Page",
    "Dialog",
    "Card",
    "Bar",
    "Tile",
)

KNOWN_WIDGETS: frozenset[str] = frozenset(
    {
        "AppBar",
        "Center",
        "Checkbox",
        "Column",
        "Container",
        "CupertinoApp",
        "Divider",
        "DropdownButton",
        "ElevatedButton",
        "Expanded",
        "FloatingActionButton",
        "Form",
        "GestureDetector",
        "GridView",
        "Icon",
        "IconButton",
        "Image",
        "InkWell",
        "ListTile",
        "ListView",
        "MaterialApp",
        "OutlinedButton",
        "Padding",
        "Radio",
        "Row",
        "Scaffold",
        "Semantics",
        "SizedBox",
        "Slider",
        "Stack",
        "Switch",
        "Text",
        "TextButton",
        "TextField",
        "TextFormField",
    }
)

# Constructors that look like widgets by suffix but never render one.
NON_WIDGET_TYPES: frozenset[str] = frozenset(
    {
        "ButtonStyle",
        "InputDecoration",
        "Key",
        "ObjectKey",
        "TextStyle",
        "UniqueKey",
        "ValueKey",
    }
)

KEY_ARGUMENT_NAME: str = "key"
SEMANTICS_IDENTIFIER_ARGUMENT: str = "identifier"

HANDLER_KINDS: dict[str, str] = {
    "onPressed": "press",
    "onTap": "tap",
    "onChanged": "change",
    "onLongPress": "long_press",
    "onSubmitted": "submit",
    "onFieldSubmitted": "submit",
    "onSaved": "save",
    "onSelected": "select",
    "onDoubleTap": "double_tap",
    "onEditingComplete": "editing_complete",
}
CALLBACK_HANDLER_KIND: str = "callback"
ANONYMOUS_HANDLER: str = "<anonymous>"
CALLBACK_NAME_PATTERN: Pattern[str] = re.compile(r"^_?(?:on[A-Z_]|handle)")

WIDGET_CONSTRUCTION_PATTERN: Pattern[str] = re.compile(
    r"(?<![A-Za-z0-9_$.])(?:(?:const|new)\s+)?(?P<name>_?[A-Z][A-Za-z0-9_$]*)"
    r"(?:\s*\.\s*(?P<ctor>[a-z_$][A-Za-z0-9_$]*))?\s*(?:<[^<>()]*>)?\s*(?P<open>\()"
)
INVOCATION_PATTERN: Pattern[str] = re.compile(r"(?<![A-Za-z0-9_$])[A-Za-z_$][A-Za-z0-9_$]*\s*(?:<[^<>()]*>)?\s*\(")
HANDLER_REFERENCE_PATTERN: Pattern[str] = re.compile(r"^[A-Za-z_$][\w$]*(?:\s*\.\s*[A-Za-z_$][\w$]*)*$")
HANDLER_CALL_PATTERN: Pattern[str] = re.compile(r"^(?P<target>[A-Za-z_$][\w$]*(?:\s*\.\s*[A-Za-z_$][\w$]*)*)\s*\(")

# Static helpers reached through a widget class name, e.g. ``ElevatedButton.styleFrom``.
NON_WIDGET_CONSTRUCTORS: frozenset[str] = frozenset({"styleFrom", "of", "maybeOf"})
