"""Package-scope key policies: keys missing from the app and cross-source collisions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from keycheck.constants.policy import (
    POLICY_FAIL_ON_COLLISION,
    POLICY_FAIL_ON_PACKAGE_MISSING,
    REMEDIATION_COLLISION,
    REMEDIATION_PACKAGE_MISSING,
    VIOLATION_COLLISION,
    VIOLATION_PACKAGE_MISSING,
    VIOLATION_SEVERITY,
)
from keycheck.constants.scanner import SOURCE_PACKAGE, SOURCE_WORKSPACE
from keycheck.model import KeyCollision, KeyUsage, PackagePolicyResult, Violation
from keycheck.policy.keyinfo import key_info


def check_package_policies(
    key_usages: Mapping[str, KeyUsage] | Iterable[KeyUsage],
    *,
    fail_on_package_missing: bool,
    fail_on_collision: bool,
) -> PackagePolicyResult:
    """Evaluate package policies over one key inventory.

    Accepts either a ``key -> KeyUsage`` mapping or any iterable of usages;
    the latter may hold several usages per key (one per source identity).
    """
    usages = list(key_usages.values()) if isinstance(key_usages, Mapping) else list(key_usages)

    sources_by_key: dict[str, list[str]] = {}
    first_usage: dict[str, KeyUsage] = {}
    package_keys: dict[str, None] = {}
    workspace_keys: set[str] = set()
    for usage in usages:
        identities = sources_by_key.setdefault(usage.id, [])
        if usage.source_identity not in identities:
            identities.append(usage.source_identity)
        first_usage.setdefault(usage.id, usage)
        if usage.source == SOURCE_PACKAGE:
            package_keys[usage.id] = None
        elif usage.source == SOURCE_WORKSPACE:
            workspace_keys.add(usage.id)

    missing_in_app = [key for key in package_keys if key not in workspace_keys]
    collisions = [
        KeyCollision(key=key, sources=tuple(sources)) for key, sources in sources_by_key.items() if len(sources) > 1
    ]

    violations: list[Violation] = []
    if fail_on_package_missing:
        violations.extend(
            Violation(
                type=VIOLATION_PACKAGE_MISSING,
                severity=VIOLATION_SEVERITY[VIOLATION_PACKAGE_MISSING],
                message=f"Key '{key}' is defined in {first_usage[key].source_identity} but never used in the app",
                remediation=REMEDIATION_PACKAGE_MISSING,
                policy=POLICY_FAIL_ON_PACKAGE_MISSING,
                key=key_info(first_usage[key]),
            )
            for key in missing_in_app
        )
    if fail_on_collision:
        violations.extend(
            Violation(
                type=VIOLATION_COLLISION,
                severity=VIOLATION_SEVERITY[VIOLATION_COLLISION],
                message=f"Key '{collision.key}' is defined by multiple sources: {', '.join(collision.sources)}",
                remediation=REMEDIATION_COLLISION,
                policy=POLICY_FAIL_ON_COLLISION,
                key=key_info(first_usage[collision.key]),
            )
            for collision in collisions
        )

    return PackagePolicyResult(missing_in_app=missing_in_app, collisions=collisions, violations=violations)
