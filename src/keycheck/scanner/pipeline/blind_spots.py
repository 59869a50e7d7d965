"""Blind-spot heuristics over merged scan data."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from keycheck.constants.scanner import (
    BLIND_SPOT_INEFFECTIVE_DETECTOR,
    BLIND_SPOT_UI_HEAVY,
    BLIND_SPOT_UNCOVERED_WIDGETS,
    UI_HEAVY_WIDGET_THRESHOLD,
)
from keycheck.model import BlindSpot, FileAnalysis, ScanMetrics


def detect_blind_spots(
    file_analyses: Mapping[str, FileAnalysis],
    metrics: ScanMetrics,
    *,
    detector_names: Sequence[str],
    effectiveness_floor: float,
) -> list[BlindSpot]:
    spots = ui_heavy_files(file_analyses)
    spots.extend(ineffective_detectors(metrics, detector_names, effectiveness_floor))
    uncovered = uncovered_widget_types(file_analyses)
    if uncovered is not None:
        spots.append(uncovered)
    return spots


def ui_heavy_files(file_analyses: Mapping[str, FileAnalysis]) -> list[BlindSpot]:
    return [
        BlindSpot(
            type=BLIND_SPOT_UI_HEAVY,
            location=relative_path,
            severity="warning",
            message=f"File has {analysis.widget_count} widgets but no keys",
        )
        for relative_path, analysis in file_analyses.items()
        if analysis.widget_count > UI_HEAVY_WIDGET_THRESHOLD and not analysis.keys_found
    ]


def ineffective_detectors(
    metrics: ScanMetrics,
    detector_names: Sequence[str],
    effectiveness_floor: float,
) -> list[BlindSpot]:
    """Flag detectors whose keys-found/hits ratio is under the floor (0 when nothing matched)."""
    spots: list[BlindSpot] = []
    for name in detector_names:
        hits = metrics.detector_hits.get(name, 0)
        keys = metrics.detector_keys.get(name, 0)
        ratio = keys / hits if hits else 0.0
        if ratio >= effectiveness_floor:
            continue
        if hits == 0:
            message = f'Detector "{name}" found no matches'
        else:
            message = f'Detector "{name}" extracted keys from {keys} of {hits} matches ({ratio:.0%})'
        spots.append(
            BlindSpot(
                type=BLIND_SPOT_INEFFECTIVE_DETECTOR,
                location=f"detector:{name}",
                severity="info",
                message=message,
            )
        )
    return spots


def uncovered_widget_types(file_analyses: Mapping[str, FileAnalysis]) -> BlindSpot | None:
    """One global entry listing widget types never constructed with a key anywhere."""
    seen: set[str] = set()
    keyed: set[str] = set()
    for analysis in file_analyses.values():
        seen |= analysis.widget_types
        keyed |= analysis.widget_types - analysis.uncovered_widget_types
    uncovered = sorted(seen - keyed)
    if not uncovered:
        return None
    return BlindSpot(
        type=BLIND_SPOT_UNCOVERED_WIDGETS,
        location="global",
        severity="info",
        message=f"Widget types without key detection: {', '.join(uncovered)}",
    )
