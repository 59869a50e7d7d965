"""Work units executed by the scan worker pool.

Each unit is stateless and returns an immutable-by-convention ``UnitResult``;
merging happens afterwards on the calling thread.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from keycheck.constants.scanner import ERROR_TYPE_CANCELLED, SOURCE_PACKAGE, SOURCE_WORKSPACE
from keycheck.detectors import DetectorSpec
from keycheck.model import ScanError
from keycheck.model.fields import object_list
from keycheck.scanner.analyzer import FileAnalysisOutcome, analyze_file
from keycheck.scanner.cache import load_cache, save_cache
from keycheck.scanner.dependencies import PackageDependency
from keycheck.scanner.discovery import discover_package_files
from keycheck.scanner.filters import FileFilter
from keycheck.types import JsonObject

logger = logging.getLogger(__name__)


@dataclass
class UnitResult:
    """Outcomes for one workspace file or one dependency package."""

    source: str
    package: str | None = None
    outcomes: list[FileAnalysisOutcome] = field(default_factory=list)
    cache_hit: bool | None = None

    @property
    def source_identity(self) -> str:
        return self.package or self.source

    @property
    def analyzed_files(self) -> int:
        """Files analyzed in this run (cached and cancelled files excluded)."""
        if self.cache_hit:
            return 0
        return sum(1 for outcome in self.outcomes if not _is_cancelled(outcome))


def run_workspace_unit(
    path: Path,
    relative_path: str,
    *,
    detectors: Sequence[DetectorSpec],
    cancel_event: threading.Event | None = None,
) -> UnitResult:
    if _cancelled(cancel_event):
        return UnitResult(source=SOURCE_WORKSPACE, outcomes=[cancelled_outcome(relative_path)])
    outcome = analyze_file(path, relative_path, detectors=detectors)
    outcomes = [outcome] if outcome is not None else []
    return UnitResult(source=SOURCE_WORKSPACE, outcomes=outcomes)


def run_dependency_unit(
    dependency: PackageDependency,
    *,
    root: Path,
    detectors: Sequence[DetectorSpec],
    file_filter: FileFilter,
    cache_key: str | None,
    cancel_event: threading.Event | None = None,
) -> UnitResult:
    """Analyze one dependency package, serving it from the cache when possible.

    ``cache_key`` of ``None`` disables both cache reads and writes.
    """
    identity = dependency.identity
    if cache_key is not None:
        cached = _load_cached_outcomes(root, cache_key, identity)
        if cached is not None:
            logger.debug("Cache hit for %s (%d files)", identity, len(cached))
            return UnitResult(source=SOURCE_PACKAGE, package=identity, outcomes=cached, cache_hit=True)

    files = discover_package_files(dependency.name, dependency.root_path, file_filter)
    outcomes: list[FileAnalysisOutcome] = []
    for path, identifier in files:
        if _cancelled(cancel_event):
            outcomes.append(cancelled_outcome(identifier))
            continue
        outcome = analyze_file(path, identifier, detectors=detectors)
        if outcome is not None:
            outcomes.append(outcome)

    result = UnitResult(
        source=SOURCE_PACKAGE,
        package=identity,
        outcomes=outcomes,
        cache_hit=False if cache_key is not None else None,
    )
    if cache_key is not None and not any(outcome.error is not None for outcome in outcomes):
        try:
            save_cache(root, cache_key, serialize_outcomes(identity, outcomes))
        except OSError as exc:
            logger.warning("Could not write cache entry for %s: %s", identity, exc)
    logger.debug("Analyzed %s (%d files)", identity, len(outcomes))
    return result


def serialize_outcomes(identity: str, outcomes: Sequence[FileAnalysisOutcome]) -> JsonObject:
    return {"package": identity, "files": [outcome.to_dict() for outcome in outcomes]}


def deserialize_outcomes(payload: JsonObject) -> list[FileAnalysisOutcome]:
    return [FileAnalysisOutcome.from_dict(item) for item in object_list(payload, "files")]


def cancelled_outcome(relative_path: str) -> FileAnalysisOutcome:
    return FileAnalysisOutcome(
        relative_path=relative_path,
        error=ScanError(
            file=relative_path,
            type=ERROR_TYPE_CANCELLED,
            message="Scan cancelled before file was analyzed",
        ),
    )


def _load_cached_outcomes(root: Path, cache_key: str, identity: str) -> list[FileAnalysisOutcome] | None:
    payload = load_cache(root, cache_key)
    if payload is None:
        return None
    if payload.get("package") != identity:
        logger.warning("Ignoring cache entry for %s: payload belongs to %r", identity, payload.get("package"))
        return None
    try:
        return deserialize_outcomes(payload)
    except ValueError as exc:
        logger.warning("Ignoring unreadable cache payload for %s: %s", identity, exc)
        return None


def _cancelled(cancel_event: threading.Event | None) -> bool:
    return cancel_event is not None and cancel_event.is_set()


def _is_cancelled(outcome: FileAnalysisOutcome) -> bool:
    return outcome.error is not None and outcome.error.type == ERROR_TYPE_CANCELLED
