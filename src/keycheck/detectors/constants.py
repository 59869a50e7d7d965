"""Constant-class resolution for the ``KeyConstants`` holder idiom.

Two passes over one file. Pass 1 indexes the class's static string fields and
its zero/one-argument key-building methods. Pass 2 classifies usages:
``KeyConstants.member`` references resolve through the index, and bare string
literals equal to an indexed value are reported as literal usages of that
constant. Nothing is shared across files.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from keycheck.constants.detectors import (
    DETECTOR_KEY_CONSTANTS,
    INTERPOLATION_PLACEHOLDER,
    KEY_CONSTANTS_CLASS,
    KEY_CONSTANTS_FIELD_PATTERN,
    KEY_CONSTANTS_METHOD_PATTERN,
    KEY_CONSTANTS_REFERENCE_PATTERN,
    TAG_DYNAMIC,
    TAG_LITERAL,
    TAG_RESOLVED,
    TAG_UNRESOLVED,
)
from keycheck.detectors.base import KeyHit
from keycheck.detectors.common import build_hit
from keycheck.parsers import Scope, SourceDocument

_TEMPLATE_SLOT = re.compile(r"\$\{(?P<expr>[^{}]*)\}")
_PARAMETER_NAME = re.compile(r"([A-Za-z_$][\w$]*)\s*(?:=.*)?$")


@dataclass(frozen=True)
class KeyConstant:
    """An indexed field or key-building method of the constants class."""

    name: str
    template: str
    parameter: str | None = None

    @property
    def value(self) -> str:
        return render_template(self.template, {})

    @property
    def dynamic(self) -> bool:
        return _TEMPLATE_SLOT.search(self.template) is not None


def render_template(template: str, bindings: dict[str, str]) -> str:
    """Substitute bound parameters; any other interpolation becomes ``${...}``."""

    def _replace(match: re.Match[str]) -> str:
        return bindings.get(match.group("expr").strip(), INTERPOLATION_PLACEHOLDER)

    return _TEMPLATE_SLOT.sub(_replace, template)


def index_key_constants(doc: SourceDocument) -> dict[str, KeyConstant]:
    """Pass 1: index ``KeyConstants`` fields and zero/one-argument methods."""
    scope = doc.class_scope(KEY_CONSTANTS_CLASS)
    if scope is None:
        return {}

    index: dict[str, KeyConstant] = {}
    for match in KEY_CONSTANTS_FIELD_PATTERN.finditer(doc.skeleton, scope.body_start, scope.body_end):
        argument = doc.string_argument(match.end())
        if argument is not None:
            name = match.group("name")
            index[name] = KeyConstant(name=name, template=argument[2])

    for match in KEY_CONSTANTS_METHOD_PATTERN.finditer(doc.skeleton, scope.body_start, scope.body_end):
        name = match.group("name")
        if name in index:
            continue
        parameters = _parameter_names(match.group("params"))
        if parameters is None or len(parameters) > 1:
            continue
        template = _first_literal_template(doc, match.start("body"), match.group("body"))
        if template is None:
            continue
        index[name] = KeyConstant(name=name, template=template, parameter=parameters[0] if parameters else None)
    return index


def detect_key_constants(doc: SourceDocument) -> list[KeyHit]:
    """Pass 2: classify references and matching literals against the file's index."""
    index = index_key_constants(doc)
    hits: list[KeyHit] = []

    for match in KEY_CONSTANTS_REFERENCE_PATTERN.finditer(doc.skeleton):
        member = match.group("member")
        constant = index.get(member)
        if constant is None:
            hits.append(
                build_hit(
                    doc,
                    match.start(),
                    f"{KEY_CONSTANTS_CLASS}.{member}",
                    DETECTOR_KEY_CONSTANTS,
                    (TAG_UNRESOLVED,),
                    symbol=member,
                )
            )
            continue

        bindings: dict[str, str] = {}
        if match.group("call") and constant.parameter:
            value = _first_argument_value(doc, match.end() - 1)
            if value is not None:
                bindings[constant.parameter] = value
        key = render_template(constant.template, bindings)
        tags = {TAG_RESOLVED}
        if INTERPOLATION_PLACEHOLDER in key:
            tags.add(TAG_DYNAMIC)
        hits.append(build_hit(doc, match.start(), key, DETECTOR_KEY_CONSTANTS, tags, symbol=member))

    scope = doc.class_scope(KEY_CONSTANTS_CLASS)
    by_value = {constant.value: constant.name for constant in index.values() if not constant.dynamic}
    for literal in doc.literals:
        if literal.dynamic or (scope is not None and _inside(scope, literal.start)):
            continue
        name = by_value.get(literal.value)
        if name is not None:
            hits.append(
                build_hit(doc, literal.start, literal.value, DETECTOR_KEY_CONSTANTS, (TAG_LITERAL,), symbol=name)
            )

    hits.sort(key=lambda hit: hit.offset)
    return hits


def _inside(scope: Scope, offset: int) -> bool:
    return scope.body_start <= offset < scope.body_end


def _parameter_names(raw: str | None) -> list[str] | None:
    """Parameter names of a declaration, ``[]`` for getters; ``None`` if unparseable."""
    if raw is None:
        return []
    names: list[str] = []
    for piece in raw.replace("{", " ").replace("}", " ").replace("[", " ").replace("]", " ").split(","):
        piece = piece.strip()
        if not piece:
            continue
        match = _PARAMETER_NAME.search(piece.split("=", 1)[0].strip())
        if match is None:
            return None
        names.append(match.group(1))
    return names


def _first_literal_template(doc: SourceDocument, body_start: int, body_kind: str) -> str | None:
    if body_kind == "{":
        close = doc.brackets.get(body_start)
        if close is None:
            return None
        body_end = close
    else:
        semicolon = doc.skeleton.find(";", body_start)
        body_end = semicolon if semicolon != -1 else len(doc.skeleton)
    for literal in doc.literals:
        if literal.start >= body_end:
            break
        if literal.start >= body_start:
            return literal.template
    return None


def _first_argument_value(doc: SourceDocument, open_paren: int) -> str | None:
    arguments = doc.arguments(open_paren)
    if not arguments or arguments[0].name is not None:
        return None
    argument = doc.string_argument(arguments[0].value_start)
    if argument is None or argument[0].dynamic:
        return None
    return argument[1]
