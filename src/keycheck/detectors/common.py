"""Shared helpers for building key hits from pattern matches."""

from __future__ import annotations

from collections.abc import Iterable
from re import Match, Pattern

from keycheck.constants.detectors import TAG_CONST, TAG_DYNAMIC
from keycheck.detectors.base import KeyHit
from keycheck.parsers import SourceDocument


def hit_at(
    doc: SourceDocument,
    offset: int,
    detector: str,
    tags: Iterable[str] = (),
    *,
    symbol: str | None = None,
) -> KeyHit:
    """Build a hit for the argument starting at ``offset``.

    A whole-string argument yields a keyed hit positioned on the literal;
    anything else yields an unkeyed hit positioned on the argument.
    """
    tag_set = set(tags)
    argument = doc.string_argument(offset)
    if argument is not None:
        literal, value, _ = argument
        if value:
            if literal.dynamic:
                tag_set.add(TAG_DYNAMIC)
            return build_hit(doc, literal.start, value, detector, tag_set, symbol=symbol)
    return build_hit(doc, offset, None, detector, tag_set, symbol=symbol)


def literal_hit_at(doc: SourceDocument, offset: int, detector: str, tags: Iterable[str] = ()) -> KeyHit | None:
    """Like :func:`hit_at` but only for quoted arguments; other arguments are not a match."""
    argument = doc.string_argument(offset)
    if argument is None or not argument[1]:
        return None
    return hit_at(doc, offset, detector, tags)


def constructor_hits(
    doc: SourceDocument,
    pattern: Pattern[str],
    detector: str,
    tags: Iterable[str] = (),
) -> list[KeyHit]:
    """Hits for ``Name('key')``-style constructors whose pattern ends at the argument."""
    hits: list[KeyHit] = []
    for match in pattern.finditer(doc.skeleton):
        hits.append(hit_at(doc, match.end(), detector, _with_const(match, tags)))
    return hits


def _with_const(match: Match[str], tags: Iterable[str]) -> set[str]:
    tag_set = set(tags)
    if "const" in match.re.groupindex and match.group("const"):
        tag_set.add(TAG_CONST)
    return tag_set


def build_hit(
    doc: SourceDocument,
    offset: int,
    key: str | None,
    detector: str,
    tags: Iterable[str] = (),
    *,
    symbol: str | None = None,
) -> KeyHit:
    """Build a hit with an explicit key, positioned at ``offset``."""
    line, column = doc.position(offset)
    return KeyHit(
        key=key,
        detector=detector,
        offset=offset,
        line=line,
        column=column,
        context=doc.context_at(offset),
        tags=frozenset(tags),
        symbol=symbol,
    )
