"""Single-threaded reducer that merges unit results into scan aggregates."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from keycheck.constants.scanner import LARGE_FILE_BYTES
from keycheck.model import FileAnalysis, KeyUsage, ScanMetrics
from keycheck.scanner.pipeline.units import UnitResult


@dataclass
class Aggregation:
    metrics: ScanMetrics = field(default_factory=ScanMetrics)
    file_analyses: dict[str, FileAnalysis] = field(default_factory=dict)
    key_usages: dict[str, KeyUsage] = field(default_factory=dict)
    source_usages: list[KeyUsage] = field(default_factory=list)


def aggregate_units(units: Sequence[UnitResult], detector_names: Sequence[str]) -> Aggregation:
    """Merge unit results in submission order.

    ``key_usages`` holds one merged usage per key (workspace wins over packages);
    ``source_usages`` holds one usage per key and source identity.
    """
    metrics = ScanMetrics(
        detector_hits={name: 0 for name in detector_names},
        detector_keys={name: 0 for name in detector_names},
    )
    aggregation = Aggregation(metrics=metrics)
    by_source: dict[tuple[str, str], KeyUsage] = {}

    for unit in units:
        if unit.cache_hit is True:
            metrics.cache_hits += 1
        elif unit.cache_hit is False:
            metrics.cache_misses += 1
        metrics.parallel_files_processed += unit.analyzed_files

        for outcome in unit.outcomes:
            metrics.total_files += 1
            if outcome.error is not None:
                metrics.errors.append(outcome.error)
            analysis = outcome.analysis
            if analysis is None:
                continue
            _count_analysis(metrics, analysis)
            aggregation.file_analyses[outcome.relative_path] = analysis

            for hit in outcome.hits:
                if hit.key is None:
                    continue
                single = KeyUsage(
                    id=hit.key,
                    locations=[hit.location(outcome.relative_path)],
                    tags=set(hit.tags),
                    source=unit.source,
                    package=unit.package,
                )
                _merge_into(by_source, aggregation.source_usages, (hit.key, unit.source_identity), single)
                _merge_key(aggregation.key_usages, single)

            for key, handlers in outcome.handlers.items():
                source_usage = by_source.get((key, unit.source_identity))
                if source_usage is not None:
                    source_usage.handlers.extend(handlers)
                merged = aggregation.key_usages.get(key)
                if merged is not None:
                    merged.handlers.extend(handlers)

    metrics.total_keys = len(aggregation.key_usages)
    metrics.keys_with_handlers = sum(1 for usage in aggregation.key_usages.values() if usage.handlers)
    return aggregation


def _count_analysis(metrics: ScanMetrics, analysis: FileAnalysis) -> None:
    metrics.scanned_files += 1
    metrics.total_lines += analysis.line_count
    metrics.analyzed_nodes += analysis.nodes_analyzed
    metrics.total_widgets += analysis.widget_count
    metrics.widgets_with_keys += analysis.widgets_with_keys
    metrics.total_size_bytes += analysis.size_bytes
    if analysis.size_bytes > LARGE_FILE_BYTES:
        metrics.large_files_processed += 1
    for name, count in analysis.detector_hits.items():
        metrics.detector_hits[name] = metrics.detector_hits.get(name, 0) + count
    for name, count in analysis.detector_keys.items():
        metrics.detector_keys[name] = metrics.detector_keys.get(name, 0) + count


def _merge_into(
    index: dict[tuple[str, str], KeyUsage],
    ordered: list[KeyUsage],
    identity: tuple[str, str],
    usage: KeyUsage,
) -> None:
    existing = index.get(identity)
    if existing is None:
        copy = usage.copy()
        index[identity] = copy
        ordered.append(copy)
    else:
        existing.merge(usage)


def _merge_key(key_usages: dict[str, KeyUsage], usage: KeyUsage) -> None:
    existing = key_usages.get(usage.id)
    if existing is None:
        key_usages[usage.id] = usage.copy()
    else:
        existing.merge(usage)

