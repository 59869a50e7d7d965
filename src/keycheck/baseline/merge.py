"""Carry baseline lifecycle metadata into a fresh scan."""

from __future__ import annotations

from dataclasses import replace

from keycheck.model import KeyUsage, ScanResult


def merge_baseline(baseline: ScanResult, current: ScanResult) -> ScanResult:
    """Return a copy of ``current`` where surviving keys keep the baseline's tags, status and notes.

    Tags are unioned with the ones found by the current scan. Keys missing from
    ``current`` are dropped; new keys are kept as scanned.
    """
    key_usages: dict[str, KeyUsage] = {}
    for key, usage in current.key_usages.items():
        previous = baseline.key_usages.get(key)
        key_usages[key] = _carry(usage, previous) if previous is not None else usage.copy()

    source_usages = [
        _carry(usage, baseline.key_usages[usage.id]) if usage.id in baseline.key_usages else usage.copy()
        for usage in current.source_usages
    ]
    return replace(current, key_usages=key_usages, source_usages=source_usages)


def _carry(usage: KeyUsage, previous: KeyUsage) -> KeyUsage:
    merged = usage.copy()
    merged.tags |= previous.tags
    merged.status = previous.status
    merged.notes = previous.notes
    return merged

