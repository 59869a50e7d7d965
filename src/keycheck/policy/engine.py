"""Policy evaluation of a baseline/current snapshot pair."""

from __future__ import annotations

import logging

from keycheck.config import PolicyConfig
from keycheck.constants.policy import (
    POLICY_FAIL_ON_EXTRA,
    POLICY_FAIL_ON_LOST,
    POLICY_FAIL_ON_RENAME,
    POLICY_MAX_DRIFT,
    POLICY_PROTECTED_TAGS,
    REMEDIATION_DRIFT,
    REMEDIATION_EXTRA,
    REMEDIATION_LOST,
    REMEDIATION_RENAMED,
    STATUS_DEPRECATED,
    VIOLATION_DRIFT,
    VIOLATION_EXTRA,
    VIOLATION_LOST,
    VIOLATION_RENAMED,
    VIOLATION_SEVERITY,
)
from keycheck.model import DiffResult, ScanResult, ValidationResult, ValidationSummary, Violation
from keycheck.policy.diff import diff_snapshots
from keycheck.policy.keyinfo import key_info, package_from_path
from keycheck.policy.packages import check_package_policies

logger = logging.getLogger(__name__)


def validate(baseline: ScanResult, current: ScanResult, config: PolicyConfig) -> ValidationResult:
    """Diff two snapshots and check the result against ``config``.

    Keys carrying any protected tag always produce a ``lost`` violation when
    removed, whatever ``fail_on_lost`` says. Violations are returned, never raised.
    """
    diff = diff_snapshots(baseline, current)
    protected = set(config.protected_tags)
    violations: list[Violation] = []
    warnings: list[str] = []

    def warn(message: str) -> None:
        warnings.append(message)
        logger.warning(message)

    for key in _ordered(diff.removed, baseline):
        usage = baseline.key_usages[key]
        protected_hit = sorted(usage.tags & protected)
        if protected_hit or config.fail_on_lost:
            violations.append(
                Violation(
                    type=VIOLATION_LOST,
                    severity=VIOLATION_SEVERITY[VIOLATION_LOST],
                    message=(
                        f"Protected key '{key}' ({', '.join(protected_hit)}) not found"
                        if protected_hit
                        else f"Key '{key}' not found in scan"
                    ),
                    remediation=REMEDIATION_LOST,
                    policy=POLICY_PROTECTED_TAGS if protected_hit else POLICY_FAIL_ON_LOST,
                    key=key_info(usage),
                )
            )
        else:
            warn(f"Key '{key}' was removed")

    for old, new in diff.renamed.items():
        if config.fail_on_rename:
            violations.append(
                Violation(
                    type=VIOLATION_RENAMED,
                    severity=VIOLATION_SEVERITY[VIOLATION_RENAMED],
                    message=f"Key '{old}' renamed to '{new}'",
                    remediation=REMEDIATION_RENAMED,
                    policy=POLICY_FAIL_ON_RENAME,
                    key=key_info(baseline.key_usages[old]),
                )
            )
        else:
            warn(f"Key '{old}' appears renamed to '{new}'")

    if config.fail_on_extra:
        violations.extend(
            Violation(
                type=VIOLATION_EXTRA,
                severity=VIOLATION_SEVERITY[VIOLATION_EXTRA],
                message=f"Extra key '{key}' found",
                remediation=REMEDIATION_EXTRA,
                policy=POLICY_FAIL_ON_EXTRA,
                key=key_info(current.key_usages[key]),
            )
            for key in _ordered(diff.added, current)
        )

    deprecated_in_use = 0
    for key in _ordered(diff.unchanged, current):
        if current.key_usages[key].status == STATUS_DEPRECATED:
            deprecated_in_use += 1
            warn(f"Deprecated key '{key}' is still in use")

    drift = diff.drift_percentage
    if drift > config.max_drift:
        violations.append(
            Violation(
                type=VIOLATION_DRIFT,
                severity=VIOLATION_SEVERITY[VIOLATION_DRIFT],
                message=f"Key drift {drift:.1f}% exceeds maximum {config.max_drift}%",
                remediation=REMEDIATION_DRIFT,
                policy=POLICY_MAX_DRIFT,
            )
        )

    if config.fail_on_package_missing or config.fail_on_collision:
        package_result = check_package_policies(
            current.source_usages,
            fail_on_package_missing=config.fail_on_package_missing,
            fail_on_collision=config.fail_on_collision,
        )
        violations.extend(package_result.violations)

    summary = _summarize(diff, current, deprecated_in_use)
    logger.info(
        "Validation %s: %d violations, %d warnings, drift %.1f%%",
        "passed" if not violations else "failed",
        len(violations),
        len(warnings),
        drift,
    )
    return ValidationResult(summary=summary, violations=violations, warnings=warnings)


def _summarize(diff: DiffResult, current: ScanResult, deprecated_in_use: int) -> ValidationSummary:
    scanned_packages = {package_from_path(path) for path in current.file_analyses}
    return ValidationSummary(
        total_keys=len(current.key_usages),
        lost=len(diff.removed),
        added=len(diff.added),
        renamed=len(diff.renamed),
        deprecated_in_use=deprecated_in_use,
        drift_percentage=diff.drift_percentage,
        scanned_packages=len(scanned_packages),
    )


def _ordered(keys: frozenset[str], snapshot: ScanResult) -> list[str]:
    """Keys from ``keys`` in the snapshot's discovery order."""
    return [key for key in snapshot.key_usages if key in keys]
