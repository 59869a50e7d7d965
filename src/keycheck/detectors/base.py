"""Detector contract: named pure functions from a tokenized file to key hits."""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from keycheck.model import KeyLocation
from keycheck.model.fields import optional_str, require_int, require_str, string_list
from keycheck.parsers import SourceDocument
from keycheck.types import JsonObject


@dataclass(frozen=True)
class KeyHit:
    """One detector match.

    ``key`` is ``None`` when the idiom matched but no key string could be
    extracted, e.g. ``ValueKey(someVariable)``. Those hits still count toward
    detector effectiveness.
    """

    key: str | None
    detector: str
    offset: int
    line: int
    column: int
    context: str
    tags: frozenset[str] = frozenset()
    symbol: str | None = None

    def location(self, file: str) -> KeyLocation:
        return KeyLocation(
            file=file,
            line=self.line,
            column=self.column,
            detector=self.detector,
            context=self.context,
        )

    def to_dict(self) -> JsonObject:
        return {
            "key": self.key,
            "detector": self.detector,
            "offset": self.offset,
            "line": self.line,
            "column": self.column,
            "context": self.context,
            "tags": sorted(self.tags),
            "symbol": self.symbol,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> KeyHit:
        return cls(
            key=optional_str(payload, "key"),
            detector=require_str(payload, "detector"),
            offset=require_int(payload, "offset"),
            line=require_int(payload, "line"),
            column=require_int(payload, "column"),
            context=require_str(payload, "context"),
            tags=frozenset(string_list(payload, "tags")),
            symbol=optional_str(payload, "symbol"),
        )


DetectFunction: TypeAlias = Callable[[SourceDocument], list[KeyHit]]


@dataclass(frozen=True)
class DetectorSpec:
    """Registry entry pairing a stable detector name with its function."""

    name: str
    detect: DetectFunction
    description: str = ""
