"""End-to-end scan orchestration for Keycheck.

``scan_project`` is the single entry point: resolve the file set for the
requested scope, fan work out to a thread pool, then merge results on the
calling thread.
"""

from __future__ import annotations

import logging
import os
import re
import threading
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial

from keycheck.constants.config import VALID_SCOPES
from keycheck.detectors import detector_fingerprint
from keycheck.exceptions import ConfigError
from keycheck.model import ScanResult
from keycheck.scanner.cache import get_cache_key
from keycheck.scanner.dependencies import PackageDependency, read_sdk_version, resolve_dependencies
from keycheck.scanner.discovery import discover_workspace_files
from keycheck.scanner.options import ScanOptions
from keycheck.scanner.pipeline.aggregation import aggregate_units
from keycheck.scanner.pipeline.blind_spots import detect_blind_spots
from keycheck.scanner.pipeline.units import UnitResult, run_dependency_unit, run_workspace_unit
from keycheck.scanner.vcs import changed_files

logger = logging.getLogger(__name__)


def scan_project(
    options: ScanOptions,
    *,
    dependencies: Sequence[PackageDependency] | None = None,
    cancel_event: threading.Event | None = None,
) -> ScanResult:
    """Scan a project and return the aggregated snapshot.

    ``dependencies`` overrides manifest resolution. Setting ``cancel_event``
    while the scan runs makes units that have not started report their files
    as cancelled errors instead of analyzing them.
    """
    started_at = time.perf_counter()
    if options.scope not in VALID_SCOPES:
        raise ConfigError(f"Unknown scope '{options.scope}'. Valid scopes: {', '.join(sorted(VALID_SCOPES))}")
    root = options.root.resolve()
    if not root.is_dir():
        raise ConfigError(f"Project root does not exist or is not a directory: {root}")

    detectors = options.detectors()
    detector_names = [spec.name for spec in detectors]
    package_pattern = _compile_package_filter(options.package_filter)
    file_filter = options.file_filter

    changed: set[str] | None = None
    if options.diff_base and not options.scans_workspace:
        logger.debug("Ignoring diff base %s: scope %s has no workspace files", options.diff_base, options.scope)
    elif options.diff_base:
        changed = changed_files(root, options.diff_base)
        if changed is None:
            logger.warning("Incremental scan against %s unavailable; scanning all files", options.diff_base)

    units: list[Callable[[], UnitResult]] = []
    if options.scans_workspace:
        workspace_files = discover_workspace_files(root, file_filter)
        if package_pattern is not None:
            workspace_files = [item for item in workspace_files if package_pattern.search(item[1])]
        if changed is not None:
            workspace_files = [item for item in workspace_files if item[1] in changed]
        units.extend(
            partial(run_workspace_unit, path, relative_path, detectors=detectors, cancel_event=cancel_event)
            for path, relative_path in workspace_files
        )

    if options.scans_dependencies:
        packages = list(dependencies) if dependencies is not None else resolve_dependencies(root)
        if package_pattern is not None:
            packages = [package for package in packages if package_pattern.search(package.name)]
        detector_hash = detector_fingerprint(detectors)
        sdk_version = options.sdk_version or read_sdk_version(root)
        units.extend(
            partial(
                run_dependency_unit,
                package,
                root=root,
                detectors=detectors,
                file_filter=file_filter,
                cache_key=(
                    get_cache_key(package.name, package.version, detector_hash, sdk_version)
                    if options.use_cache
                    else None
                ),
                cancel_event=cancel_event,
            )
            for package in packages
        )

    results = _run_units(units, options.max_workers)
    aggregation = aggregate_units(results, detector_names)
    metrics = aggregation.metrics
    metrics.incremental_scan = changed is not None
    metrics.incremental_base = options.diff_base if changed is not None else None

    blind_spots = detect_blind_spots(
        aggregation.file_analyses,
        metrics,
        detector_names=detector_names,
        effectiveness_floor=options.min_detector_effectiveness,
    )

    duration_ms = int((time.perf_counter() - started_at) * 1000)
    metrics.total_scan_time_ms = duration_ms
    logger.info(
        "Scanned %d/%d files in %d ms: %d keys, %d errors, %d blind spots",
        metrics.scanned_files,
        metrics.total_files,
        duration_ms,
        metrics.total_keys,
        len(metrics.errors),
        len(blind_spots),
    )
    return ScanResult(
        metrics=metrics,
        file_analyses=aggregation.file_analyses,
        key_usages=aggregation.key_usages,
        blind_spots=blind_spots,
        duration_ms=duration_ms,
        source_usages=aggregation.source_usages,
    )


def _run_units(units: Sequence[Callable[[], UnitResult]], max_workers: int | None) -> list[UnitResult]:
    """Run units on a bounded pool and return results in submission order."""
    if not units:
        return []
    workers = max_workers or os.cpu_count() or 1
    with ThreadPoolExecutor(max_workers=min(workers, len(units))) as executor:
        futures = [executor.submit(unit) for unit in units]
        return [future.result() for future in futures]


def _compile_package_filter(package_filter: str | None) -> re.Pattern[str] | None:
    if not package_filter:
        return None
    try:
        return re.compile(package_filter)
    except re.error as exc:
        raise ConfigError(f"Invalid package_filter pattern {package_filter!r}: {exc}") from exc
