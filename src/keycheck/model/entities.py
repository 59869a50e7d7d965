"""Scan-side data models: locations, usages, per-file analyses, and snapshots."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from keycheck.constants.policy import STATUS_ACTIVE, VALID_STATUSES
from keycheck.constants.reporting import SNAPSHOT_SCHEMA_VERSION, VALID_BLIND_SPOT_SEVERITIES
from keycheck.constants.scanner import SOURCE_PACKAGE, SOURCE_WORKSPACE
from keycheck.model.fields import (
    int_map,
    object_list,
    optional_str,
    parse_timestamp,
    require_bool,
    require_int,
    require_mapping,
    require_number,
    require_str,
    string_list,
    utc_now,
)
from keycheck.types import JsonObject


def _percentage(covered: int, total: int) -> float:
    """Return covered/total as a percentage, defined as 100 when total is 0."""
    if total <= 0:
        return 100.0
    return min(100.0, max(0.0, covered / total * 100.0))


@dataclass(frozen=True)
class KeyLocation:
    """One occurrence of a key in source."""

    file: str
    line: int
    column: int
    detector: str
    context: str = "global"

    def to_dict(self) -> JsonObject:
        return {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "detector": self.detector,
            "context": self.context,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> KeyLocation:
        return cls(
            file=require_str(payload, "file"),
            line=require_int(payload, "line"),
            column=require_int(payload, "column"),
            detector=require_str(payload, "detector"),
            context=optional_str(payload, "context") or "global",
        )


@dataclass(frozen=True)
class HandlerInfo:
    """Callback associated with a keyed widget."""

    kind: str
    method: str | None
    file: str
    line: int

    def to_dict(self) -> JsonObject:
        return {"kind": self.kind, "method": self.method, "file": self.file, "line": self.line}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> HandlerInfo:
        return cls(
            kind=require_str(payload, "kind"),
            method=optional_str(payload, "method"),
            file=require_str(payload, "file"),
            line=require_int(payload, "line"),
        )


@dataclass
class KeyUsage:
    """Every known occurrence of one key id, plus its lifecycle metadata."""

    id: str
    locations: list[KeyLocation] = field(default_factory=list)
    handlers: list[HandlerInfo] = field(default_factory=list)
    tags: set[str] = field(default_factory=set)
    status: str = STATUS_ACTIVE
    notes: str | None = None
    source: str = SOURCE_WORKSPACE
    package: str | None = None

    @property
    def source_identity(self) -> str:
        """``workspace`` or the ``name@version`` of the contributing package."""
        return self.package or self.source

    @property
    def last_seen(self) -> str | None:
        if not self.locations:
            return None
        first = self.locations[0]
        return f"{first.file}:{first.line}"

    def copy(self) -> KeyUsage:
        """Detached copy whose lists and tag set can be mutated independently."""
        return replace(self, locations=list(self.locations), handlers=list(self.handlers), tags=set(self.tags))

    def merge(self, other: KeyUsage) -> None:
        """Fold another usage of the same key into this one."""
        self.locations.extend(other.locations)
        self.handlers.extend(other.handlers)
        self.tags |= other.tags
        if self.source == SOURCE_PACKAGE and other.source == SOURCE_WORKSPACE:
            self.source = SOURCE_WORKSPACE
            self.package = None

    def to_dict(self) -> JsonObject:
        return {
            "id": self.id,
            "locations": [location.to_dict() for location in self.locations],
            "handlers": [handler.to_dict() for handler in self.handlers],
            "tags": sorted(self.tags),
            "status": self.status,
            "notes": self.notes,
            "source": self.source,
            "package": self.package,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> KeyUsage:
        status = optional_str(payload, "status") or STATUS_ACTIVE
        if status not in VALID_STATUSES:
            raise ValueError(f"status must be one of {sorted(VALID_STATUSES)}, got {status!r}")
        source = optional_str(payload, "source") or SOURCE_WORKSPACE
        if source not in {SOURCE_WORKSPACE, SOURCE_PACKAGE}:
            raise ValueError(f"source must be 'workspace' or 'package', got {source!r}")
        return cls(
            id=require_str(payload, "id"),
            locations=[KeyLocation.from_dict(item) for item in object_list(payload, "locations")],
            handlers=[HandlerInfo.from_dict(item) for item in object_list(payload, "handlers")],
            tags=set(string_list(payload, "tags")),
            status=status,
            notes=optional_str(payload, "notes"),
            source=source,
            package=optional_str(payload, "package"),
        )


@dataclass
class FileAnalysis:
    """Per-file scan outcome, recreated on every scan."""

    path: str
    relative_path: str
    keys_found: set[str] = field(default_factory=set)
    widget_types: set[str] = field(default_factory=set)
    uncovered_widget_types: set[str] = field(default_factory=set)
    functions: list[str] = field(default_factory=list)
    detector_hits: dict[str, int] = field(default_factory=dict)
    detector_keys: dict[str, int] = field(default_factory=dict)
    nodes_analyzed: int = 0
    widget_count: int = 0
    widgets_with_keys: int = 0
    line_count: int = 0
    size_bytes: int = 0

    def to_dict(self) -> JsonObject:
        return {
            "path": self.path,
            "relative_path": self.relative_path,
            "keys_found": sorted(self.keys_found),
            "widget_types": sorted(self.widget_types),
            "uncovered_widget_types": sorted(self.uncovered_widget_types),
            "functions": list(self.functions),
            "detector_hits": dict(self.detector_hits),
            "detector_keys": dict(self.detector_keys),
            "nodes_analyzed": self.nodes_analyzed,
            "widget_count": self.widget_count,
            "widgets_with_keys": self.widgets_with_keys,
            "line_count": self.line_count,
            "size_bytes": self.size_bytes,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> FileAnalysis:
        return cls(
            path=require_str(payload, "path"),
            relative_path=require_str(payload, "relative_path"),
            keys_found=set(string_list(payload, "keys_found")),
            widget_types=set(string_list(payload, "widget_types")),
            uncovered_widget_types=set(string_list(payload, "uncovered_widget_types")),
            functions=string_list(payload, "functions"),
            detector_hits=int_map(payload, "detector_hits"),
            detector_keys=int_map(payload, "detector_keys"),
            nodes_analyzed=require_int(payload, "nodes_analyzed", 0),
            widget_count=require_int(payload, "widget_count", 0),
            widgets_with_keys=require_int(payload, "widgets_with_keys", 0),
            line_count=require_int(payload, "line_count", 0),
            size_bytes=require_int(payload, "size_bytes", 0),
        )


@dataclass(frozen=True)
class ScanError:
    """A per-file failure recorded as data instead of aborting the scan."""

    file: str
    type: str
    message: str

    def to_dict(self) -> JsonObject:
        return {"file": self.file, "type": self.type, "message": self.message}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> ScanError:
        return cls(
            file=require_str(payload, "file"),
            type=require_str(payload, "type"),
            message=require_str(payload, "message"),
        )


@dataclass
class ScanMetrics:
    """Aggregate counters for one scan; coverage figures are derived."""

    total_files: int = 0
    scanned_files: int = 0
    total_lines: int = 0
    analyzed_nodes: int = 0
    total_widgets: int = 0
    widgets_with_keys: int = 0
    total_keys: int = 0
    keys_with_handlers: int = 0
    detector_hits: dict[str, int] = field(default_factory=dict)
    detector_keys: dict[str, int] = field(default_factory=dict)
    errors: list[ScanError] = field(default_factory=list)
    incremental_scan: bool = False
    incremental_base: str | None = None
    cache_hits: int = 0
    cache_misses: int = 0
    parallel_files_processed: int = 0
    large_files_processed: int = 0
    total_size_bytes: int = 0
    total_scan_time_ms: int = 0

    @property
    def file_coverage(self) -> float:
        return _percentage(self.scanned_files, self.total_files)

    @property
    def widget_coverage(self) -> float:
        return _percentage(self.widgets_with_keys, self.total_widgets)

    @property
    def handler_coverage(self) -> float:
        return _percentage(self.keys_with_handlers, self.total_keys)

    @property
    def avg_file_size_kb(self) -> float:
        if self.scanned_files == 0:
            return 0.0
        return self.total_size_bytes / self.scanned_files / 1024

    def to_dict(self) -> JsonObject:
        return {
            "total_files": self.total_files,
            "scanned_files": self.scanned_files,
            "total_lines": self.total_lines,
            "analyzed_nodes": self.analyzed_nodes,
            "total_widgets": self.total_widgets,
            "widgets_with_keys": self.widgets_with_keys,
            "total_keys": self.total_keys,
            "keys_with_handlers": self.keys_with_handlers,
            "file_coverage": round(self.file_coverage, 2),
            "widget_coverage": round(self.widget_coverage, 2),
            "handler_coverage": round(self.handler_coverage, 2),
            "detector_hits": dict(self.detector_hits),
            "detector_keys": dict(self.detector_keys),
            "errors": [error.to_dict() for error in self.errors],
            "incremental_scan": self.incremental_scan,
            "incremental_base": self.incremental_base,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "parallel_files_processed": self.parallel_files_processed,
            "large_files_processed": self.large_files_processed,
            "total_size_bytes": self.total_size_bytes,
            "avg_file_size_kb": round(self.avg_file_size_kb, 2),
            "total_scan_time_ms": self.total_scan_time_ms,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> ScanMetrics:
        return cls(
            total_files=require_int(payload, "total_files", 0),
            scanned_files=require_int(payload, "scanned_files", 0),
            total_lines=require_int(payload, "total_lines", 0),
            analyzed_nodes=require_int(payload, "analyzed_nodes", 0),
            total_widgets=require_int(payload, "total_widgets", 0),
            widgets_with_keys=require_int(payload, "widgets_with_keys", 0),
            total_keys=require_int(payload, "total_keys", 0),
            keys_with_handlers=require_int(payload, "keys_with_handlers", 0),
            detector_hits=int_map(payload, "detector_hits"),
            detector_keys=int_map(payload, "detector_keys"),
            errors=[ScanError.from_dict(item) for item in object_list(payload, "errors")],
            incremental_scan=require_bool(payload, "incremental_scan", False),
            incremental_base=optional_str(payload, "incremental_base"),
            cache_hits=require_int(payload, "cache_hits", 0),
            cache_misses=require_int(payload, "cache_misses", 0),
            parallel_files_processed=require_int(payload, "parallel_files_processed", 0),
            large_files_processed=require_int(payload, "large_files_processed", 0),
            total_size_bytes=require_int(payload, "total_size_bytes", 0),
            total_scan_time_ms=require_int(payload, "total_scan_time_ms", 0),
        )


@dataclass(frozen=True)
class BlindSpot:
    """Heuristic warning about under-instrumented code or a weak detector."""

    type: str
    location: str
    severity: str
    message: str

    def to_dict(self) -> JsonObject:
        return {"type": self.type, "location": self.location, "severity": self.severity, "message": self.message}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> BlindSpot:
        severity = require_str(payload, "severity")
        if severity not in VALID_BLIND_SPOT_SEVERITIES:
            raise ValueError(f"severity must be one of {sorted(VALID_BLIND_SPOT_SEVERITIES)}, got {severity!r}")
        return cls(
            type=require_str(payload, "type"),
            location=require_str(payload, "location"),
            severity=severity,
            message=require_str(payload, "message"),
        )


@dataclass
class ScanResult:
    """The unit of comparison and persistence (a snapshot)."""

    metrics: ScanMetrics = field(default_factory=ScanMetrics)
    file_analyses: dict[str, FileAnalysis] = field(default_factory=dict)
    key_usages: dict[str, KeyUsage] = field(default_factory=dict)
    blind_spots: list[BlindSpot] = field(default_factory=list)
    duration_ms: int = 0
    source_usages: list[KeyUsage] = field(default_factory=list)
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def keys(self) -> list[str]:
        """Key ids in discovery order."""
        return list(self.key_usages)

    def to_dict(self) -> JsonObject:
        return {
            "schemaVersion": SNAPSHOT_SCHEMA_VERSION,
            "timestamp": self.timestamp.isoformat(),
            "keys": self.keys,
            "metrics": self.metrics.to_dict(),
            "file_analyses": {path: analysis.to_dict() for path, analysis in self.file_analyses.items()},
            "key_usages": {key: usage.to_dict() for key, usage in self.key_usages.items()},
            "source_usages": [usage.to_dict() for usage in self.source_usages],
            "blind_spots": [spot.to_dict() for spot in self.blind_spots],
            "duration_ms": self.duration_ms,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> ScanResult:
        schema_version = require_str(payload, "schemaVersion")
        if schema_version != SNAPSHOT_SCHEMA_VERSION:
            raise ValueError(f"Unsupported snapshot schemaVersion {schema_version!r}")

        raw_analyses = require_mapping(payload.get("file_analyses", {}), "file_analyses")
        raw_usages = require_mapping(payload.get("key_usages", {}), "key_usages")
        key_usages: dict[str, KeyUsage] = {}
        for key, raw_usage in raw_usages.items():
            usage = KeyUsage.from_dict(require_mapping(raw_usage, f"key_usages.{key}"))
            if usage.id != key:
                raise ValueError(f"key_usages.{key} has mismatched id {usage.id!r}")
            key_usages[key] = usage
        # Hand-written baselines may list bare key ids without usage detail.
        for key in string_list(payload, "keys"):
            key_usages.setdefault(key, KeyUsage(id=key))

        return cls(
            metrics=ScanMetrics.from_dict(require_mapping(payload.get("metrics", {}), "metrics")),
            file_analyses={
                str(path): FileAnalysis.from_dict(require_mapping(raw, f"file_analyses.{path}"))
                for path, raw in raw_analyses.items()
            },
            key_usages=key_usages,
            blind_spots=[BlindSpot.from_dict(item) for item in object_list(payload, "blind_spots")],
            duration_ms=int(require_number(payload, "duration_ms", 0)),
            source_usages=[KeyUsage.from_dict(item) for item in object_list(payload, "source_usages")],
            timestamp=parse_timestamp(payload, "timestamp"),
        )
