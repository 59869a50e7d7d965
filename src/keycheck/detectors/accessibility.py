"""Accessibility-identifier detector for ``Semantics(identifier: ...)``."""

from __future__ import annotations

from keycheck.constants.detectors import DETECTOR_SEMANTICS, SEMANTICS_PATTERN, TAG_ACCESSIBILITY, TAG_SEMANTIC
from keycheck.constants.widgets import SEMANTICS_IDENTIFIER_ARGUMENT
from keycheck.detectors.base import KeyHit
from keycheck.detectors.common import hit_at
from keycheck.parsers import SourceDocument


def detect_semantics_identifiers(doc: SourceDocument) -> list[KeyHit]:
    """Report the ``identifier:`` argument of every ``Semantics`` widget that has one."""
    hits: list[KeyHit] = []
    for match in SEMANTICS_PATTERN.finditer(doc.skeleton):
        for argument in doc.arguments(match.end() - 1):
            if argument.name == SEMANTICS_IDENTIFIER_ARGUMENT:
                hits.append(hit_at(doc, argument.value_start, DETECTOR_SEMANTICS, (TAG_SEMANTIC, TAG_ACCESSIBILITY)))
    return hits
