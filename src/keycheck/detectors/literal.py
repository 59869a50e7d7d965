"""Literal key-constructor detectors: ``ValueKey``, ``Key``, ``ObjectKey`` and wrapper key types."""

from __future__ import annotations

from keycheck.constants.detectors import (
    CUPERTINO_KEY_PATTERN,
    DETECTOR_CUPERTINO_KEY,
    DETECTOR_KEY,
    DETECTOR_MATERIAL_KEY,
    DETECTOR_OBJECT_KEY,
    DETECTOR_VALUE_KEY,
    KEY_PATTERN,
    MATERIAL_KEY_PATTERN,
    OBJECT_KEY_PATTERN,
    TAG_CUPERTINO,
    TAG_MATERIAL,
    VALUE_KEY_PATTERN,
)
from keycheck.detectors.base import KeyHit
from keycheck.detectors.common import constructor_hits
from keycheck.parsers import SourceDocument


def detect_value_keys(doc: SourceDocument) -> list[KeyHit]:
    """``ValueKey('x')`` and ``ValueKey<String>('x')``."""
    return constructor_hits(doc, VALUE_KEY_PATTERN, DETECTOR_VALUE_KEY)


def detect_keys(doc: SourceDocument) -> list[KeyHit]:
    """Plain ``Key('x')``."""
    return constructor_hits(doc, KEY_PATTERN, DETECTOR_KEY)


def detect_object_keys(doc: SourceDocument) -> list[KeyHit]:
    # UniqueKey() has no stable id and is intentionally not a detector.
    return constructor_hits(doc, OBJECT_KEY_PATTERN, DETECTOR_OBJECT_KEY)


def detect_material_keys(doc: SourceDocument) -> list[KeyHit]:
    return constructor_hits(doc, MATERIAL_KEY_PATTERN, DETECTOR_MATERIAL_KEY, (TAG_MATERIAL,))


def detect_cupertino_keys(doc: SourceDocument) -> list[KeyHit]:
    return constructor_hits(doc, CUPERTINO_KEY_PATTERN, DETECTOR_CUPERTINO_KEY, (TAG_CUPERTINO,))
