"""Detectors for test-framework idioms that reference keys from test code."""

from __future__ import annotations

from keycheck.constants.detectors import (
    DETECTOR_FIND_BY_KEY,
    DETECTOR_INTEGRATION_TEST_KEY,
    DETECTOR_PATROL_FINDER,
    FIND_BY_KEY_PATTERN,
    INTEGRATION_KEY_PATTERN,
    PATROL_FINDER_PATTERN,
    TAG_INTEGRATION,
    TAG_PATROL,
    TAG_TEST,
)
from keycheck.detectors.base import KeyHit
from keycheck.detectors.common import hit_at, literal_hit_at
from keycheck.parsers import SourceDocument


def detect_finder_keys(doc: SourceDocument) -> list[KeyHit]:
    """``find.byValueKey('x')`` and ``find.byKey(const Key('x'))``."""
    return [
        hit_at(doc, match.end(), DETECTOR_FIND_BY_KEY, (TAG_TEST,))
        for match in FIND_BY_KEY_PATTERN.finditer(doc.skeleton)
    ]


def detect_patrol_finders(doc: SourceDocument) -> list[KeyHit]:
    """Patrol's ``$('x')`` finder; symbol and type finders carry no key and are skipped."""
    hits: list[KeyHit] = []
    for match in PATROL_FINDER_PATTERN.finditer(doc.skeleton):
        hit = literal_hit_at(doc, match.end(), DETECTOR_PATROL_FINDER, (TAG_TEST, TAG_PATROL))
        if hit is not None:
            hits.append(hit)
    return hits


def detect_integration_keys(doc: SourceDocument) -> list[KeyHit]:
    """A ``key:`` attribute given a quoted literal, as in driver scripts and test configs."""
    hits: list[KeyHit] = []
    for match in INTEGRATION_KEY_PATTERN.finditer(doc.skeleton):
        hit = literal_hit_at(doc, match.end(), DETECTOR_INTEGRATION_TEST_KEY, (TAG_INTEGRATION,))
        if hit is not None:
            hits.append(hit)
    return hits
