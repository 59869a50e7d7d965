"""Snapshot comparison with greedy rename detection."""

from __future__ import annotations

import logging

from keycheck.constants.policy import RENAME_SIMILARITY_THRESHOLD
from keycheck.model import DiffResult, ScanResult
from keycheck.policy.similarity import similarity

logger = logging.getLogger(__name__)


def diff_snapshots(
    baseline: ScanResult,
    current: ScanResult,
    *,
    threshold: float = RENAME_SIMILARITY_THRESHOLD,
) -> DiffResult:
    """Compare the key sets of two snapshots.

    Renames are matched first-match-wins: removed keys in baseline order each
    take the first still-unmatched added key (in current order) whose
    similarity is strictly above ``threshold``. This is not an optimal
    assignment.
    """
    baseline_keys = list(baseline.key_usages)
    current_keys = list(current.key_usages)
    baseline_set = set(baseline_keys)
    current_set = set(current_keys)

    removed = [key for key in baseline_keys if key not in current_set]
    added = [key for key in current_keys if key not in baseline_set]

    renamed: dict[str, str] = {}
    matched: set[str] = set()
    for old in removed:
        for new in added:
            if new in matched:
                continue
            if similarity(old, new) > threshold:
                renamed[old] = new
                matched.add(new)
                break

    result = DiffResult(
        added=frozenset(key for key in added if key not in matched),
        removed=frozenset(key for key in removed if key not in renamed),
        unchanged=frozenset(baseline_set & current_set),
        renamed=renamed,
        baseline=baseline,
        current=current,
    )
    logger.debug(
        "Diff: %d added, %d removed, %d renamed, %d unchanged",
        len(result.added),
        len(result.removed),
        len(result.renamed),
        len(result.unchanged),
    )
    return result
