"""Widget construction sites and their callback handlers."""

from __future__ import annotations

from dataclasses import dataclass

from keycheck.constants.widgets import (
    ANONYMOUS_HANDLER,
    CALLBACK_NAME_PATTERN,
    HANDLER_CALL_PATTERN,
    HANDLER_KINDS,
    HANDLER_REFERENCE_PATTERN,
    KEY_ARGUMENT_NAME,
    KNOWN_WIDGETS,
    NON_WIDGET_CONSTRUCTORS,
    NON_WIDGET_TYPES,
    SEMANTICS_IDENTIFIER_ARGUMENT,
    WIDGET_CONSTRUCTION_PATTERN,
    WIDGET_NAME_SUFFIXES,
)
from keycheck.parsers import Argument, Scope, SourceDocument

_FUNCTION_KINDS = frozenset({"method", "function"})
_CLASS_KINDS = frozenset({"class"})


@dataclass(frozen=True)
class HandlerArgument:
    kind: str
    method: str | None
    offset: int


@dataclass(frozen=True)
class WidgetSite:
    """One constructed UI element."""

    name: str
    offset: int
    key_spans: tuple[tuple[int, int], ...]
    handlers: tuple[HandlerArgument, ...]

    @property
    def keyed(self) -> bool:
        return bool(self.key_spans)

    def owns(self, offset: int) -> bool:
        """Whether ``offset`` falls inside one of this widget's key arguments."""
        return any(start <= offset < end for start, end in self.key_spans)


def is_widget_name(name: str) -> bool:
    if name in NON_WIDGET_TYPES:
        return False
    return name in KNOWN_WIDGETS or name.endswith(WIDGET_NAME_SUFFIXES)


def find_widgets(doc: SourceDocument) -> list[WidgetSite]:
    """Widget constructions in source order; constructor declarations are skipped."""
    widgets: list[WidgetSite] = []
    for match in WIDGET_CONSTRUCTION_PATTERN.finditer(doc.skeleton):
        name = match.group("name")
        if not is_widget_name(name) or match.group("ctor") in NON_WIDGET_CONSTRUCTORS:
            continue
        if _is_constructor_declaration(doc, name, match.start()):
            continue

        arguments = doc.arguments(match.start("open"))
        key_spans = tuple(
            (argument.value_start, argument.end)
            for argument in arguments
            if argument.name == KEY_ARGUMENT_NAME
            or (name == "Semantics" and argument.name == SEMANTICS_IDENTIFIER_ARGUMENT)
        )
        handlers = tuple(
            HandlerArgument(
                kind=HANDLER_KINDS[argument.name],
                method=handler_method(doc, argument),
                offset=argument.value_start,
            )
            for argument in arguments
            if argument.name in HANDLER_KINDS and not _is_null(doc, argument)
        )
        widgets.append(WidgetSite(name=name, offset=match.start("name"), key_spans=key_spans, handlers=handlers))
    return widgets


def handler_method(doc: SourceDocument, argument: Argument) -> str | None:
    """Name of the method a callback argument refers to.

    A reference (``_submit``, ``widget.onTap``) or call (``handler(context)``)
    yields the last name segment. A closure yields ``<anonymous>``. Anything
    else (e.g. a conditional) yields ``None``.
    """
    value = doc.skeleton[argument.value_start : argument.end].strip()
    if value.startswith("(") or value.startswith("async") or "=>" in value:
        return ANONYMOUS_HANDLER
    if HANDLER_REFERENCE_PATTERN.match(value):
        return _last_segment(value)
    call = HANDLER_CALL_PATTERN.match(value)
    if call:
        return _last_segment(call.group("target"))
    return None


def nearest_callback(doc: SourceDocument, offset: int) -> Scope | None:
    """Innermost enclosing function or method whose name looks like a callback."""
    for scope in doc.enclosing_scopes(offset, _FUNCTION_KINDS):
        if CALLBACK_NAME_PATTERN.match(scope.name):
            return scope
    return None


def _is_constructor_declaration(doc: SourceDocument, name: str, offset: int) -> bool:
    if doc.innermost_scope(offset, _FUNCTION_KINDS) is not None:
        return False
    owner = doc.innermost_scope(offset, _CLASS_KINDS)
    return owner is not None and owner.name == name


def _is_null(doc: SourceDocument, argument: Argument) -> bool:
    return doc.skeleton[argument.value_start : argument.end].strip() == "null"


def _last_segment(value: str) -> str:
    return value.rsplit(".", 1)[-1].strip()
