"""Single-file analysis: run detectors, count widgets, associate handlers."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from keycheck.constants.scanner import ERROR_TYPE_PARSE, ERROR_TYPE_READ
from keycheck.constants.widgets import CALLBACK_HANDLER_KIND, INVOCATION_PATTERN
from keycheck.detectors import DetectorSpec, KeyHit
from keycheck.exceptions import SourceParseError
from keycheck.io import read_source_text
from keycheck.model import FileAnalysis, HandlerInfo, ScanError
from keycheck.model.fields import object_list, require_mapping, require_str
from keycheck.parsers import SourceDocument
from keycheck.scanner.filters import FileFilter, should_analyze
from keycheck.scanner.widgets import WidgetSite, find_widgets, nearest_callback
from keycheck.types import JsonObject

logger = logging.getLogger(__name__)


@dataclass
class FileAnalysisOutcome:
    """Everything one file contributes to a scan.

    ``hits`` are deduplicated and keyed. ``handlers`` maps a key id to the
    callbacks associated with it in this file.
    """

    relative_path: str
    analysis: FileAnalysis | None = None
    hits: list[KeyHit] = field(default_factory=list)
    handlers: dict[str, list[HandlerInfo]] = field(default_factory=dict)
    error: ScanError | None = None

    def to_dict(self) -> JsonObject:
        return {
            "relative_path": self.relative_path,
            "analysis": self.analysis.to_dict() if self.analysis is not None else None,
            "hits": [hit.to_dict() for hit in self.hits],
            "handlers": {key: [handler.to_dict() for handler in items] for key, items in self.handlers.items()},
            "error": self.error.to_dict() if self.error is not None else None,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> FileAnalysisOutcome:
        raw_analysis = payload.get("analysis")
        raw_error = payload.get("error")
        raw_handlers = require_mapping(payload.get("handlers", {}), "handlers")
        return cls(
            relative_path=require_str(payload, "relative_path"),
            analysis=FileAnalysis.from_dict(require_mapping(raw_analysis, "analysis")) if raw_analysis else None,
            hits=[KeyHit.from_dict(item) for item in object_list(payload, "hits")],
            handlers={
                str(key): [HandlerInfo.from_dict(item) for item in object_list(raw_handlers, key)]
                for key in raw_handlers
            },
            error=ScanError.from_dict(require_mapping(raw_error, "error")) if raw_error else None,
        )


def analyze_file(
    path: Path,
    relative_path: str,
    *,
    detectors: Sequence[DetectorSpec],
    file_filter: FileFilter | None = None,
) -> FileAnalysisOutcome | None:
    """Analyze one file from disk; ``None`` when ``file_filter`` excludes it.

    Read and tokenize failures come back as ``outcome.error``.
    """
    if file_filter is not None and not should_analyze(relative_path, file_filter):
        return None
    try:
        text = read_source_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read %s: %s", relative_path, exc)
        return FileAnalysisOutcome(
            relative_path=relative_path,
            error=ScanError(file=relative_path, type=ERROR_TYPE_READ, message=str(exc)),
        )
    return analyze_source(text, path=path, relative_path=relative_path, detectors=detectors)


def analyze_source(
    text: str,
    *,
    path: Path,
    relative_path: str,
    detectors: Sequence[DetectorSpec],
) -> FileAnalysisOutcome:
    """Analyze already-loaded source text."""
    try:
        doc = SourceDocument.from_text(text)
    except SourceParseError as exc:
        logger.warning("Failed to tokenize %s: %s", relative_path, exc)
        return FileAnalysisOutcome(
            relative_path=relative_path,
            error=ScanError(file=relative_path, type=ERROR_TYPE_PARSE, message=str(exc)),
        )

    detector_hits: dict[str, int] = {}
    detector_keys: dict[str, int] = {}
    raw_hits: list[KeyHit] = []
    for spec in detectors:
        found = spec.detect(doc)
        detector_hits[spec.name] = len(found)
        detector_keys[spec.name] = sum(1 for hit in found if hit.key is not None)
        raw_hits.extend(found)

    order = {spec.name: index for index, spec in enumerate(detectors)}
    hits = dedupe_hits(raw_hits, order)
    widgets = find_widgets(doc)
    handlers = associate_handlers(doc, widgets, hits, relative_path)

    widget_types = {widget.name for widget in widgets}
    keyed_types = {widget.name for widget in widgets if widget.keyed}
    analysis = FileAnalysis(
        path=str(path),
        relative_path=relative_path,
        keys_found={hit.key for hit in hits if hit.key is not None},
        widget_types=widget_types,
        uncovered_widget_types=widget_types - keyed_types,
        functions=doc.function_names,
        detector_hits=detector_hits,
        detector_keys=detector_keys,
        nodes_analyzed=sum(1 for _ in INVOCATION_PATTERN.finditer(doc.skeleton)),
        widget_count=len(widgets),
        widgets_with_keys=sum(1 for widget in widgets if widget.keyed),
        line_count=doc.line_count,
        size_bytes=len(text.encode("utf-8")),
    )
    return FileAnalysisOutcome(relative_path=relative_path, analysis=analysis, hits=hits, handlers=handlers)


def dedupe_hits(hits: Sequence[KeyHit], detector_order: Mapping[str, int]) -> list[KeyHit]:
    """Collapse hits on the same key+line+column; the first detector in table order names the location.

    Unkeyed hits are dropped here; they only matter for effectiveness counts.
    """
    ordered = sorted(
        (hit for hit in hits if hit.key is not None),
        key=lambda hit: (hit.offset, detector_order.get(hit.detector, len(detector_order))),
    )
    merged: dict[tuple[str, int, int], KeyHit] = {}
    for hit in ordered:
        assert hit.key is not None
        identity = (hit.key, hit.line, hit.column)
        existing = merged.get(identity)
        if existing is None:
            merged[identity] = hit
            continue
        merged[identity] = KeyHit(
            key=existing.key,
            detector=existing.detector,
            offset=existing.offset,
            line=existing.line,
            column=existing.column,
            context=existing.context,
            tags=existing.tags | hit.tags,
            symbol=existing.symbol or hit.symbol,
        )
    return list(merged.values())


def associate_handlers(
    doc: SourceDocument,
    widgets: Sequence[WidgetSite],
    hits: Sequence[KeyHit],
    relative_path: str,
) -> dict[str, list[HandlerInfo]]:
    """Attach each keyed widget's callbacks to the keys constructed in its ``key:`` argument.

    Widgets without callback arguments fall back to the nearest enclosing
    callback-like method (``onX``, ``_onX``, ``handleX``).
    """
    handlers: dict[str, list[HandlerInfo]] = {}
    for widget in widgets:
        if not widget.keyed:
            continue
        keys = [hit.key for hit in hits if hit.key is not None and widget.owns(hit.offset)]
        if not keys:
            continue

        infos = [
            HandlerInfo(
                kind=handler.kind,
                method=handler.method,
                file=relative_path,
                line=doc.position(handler.offset)[0],
            )
            for handler in widget.handlers
        ]
        if not infos:
            callback = nearest_callback(doc, widget.offset)
            if callback is not None:
                infos.append(
                    HandlerInfo(
                        kind=CALLBACK_HANDLER_KIND,
                        method=callback.name,
                        file=relative_path,
                        line=doc.position(callback.start)[0],
                    )
                )
        for key in dict.fromkeys(keys):
            handlers.setdefault(key, []).extend(infos)
    return {key: items for key, items in handlers.items() if items}
