"""Diff and policy engine constants."""

from __future__ import annotations

import re
from re import Pattern

RENAME_SIMILARITY_THRESHOLD: float = 0.6
KEY_TOKEN_SPLIT_PATTERN: Pattern[str] = re.compile(r"[._-]")

VIOLATION_LOST: str = "lost"
VIOLATION_RENAMED: str = "renamed"
VIOLATION_EXTRA: str = "extra"
VIOLATION_DRIFT: str = "drift"
VIOLATION_PACKAGE_MISSING: str = "package_missing"
VIOLATION_COLLISION: str = "collision"

VIOLATION_SEVERITY: dict[str, str] = {
    VIOLATION_LOST: "error",
    VIOLATION_RENAMED: "warning",
    VIOLATION_EXTRA: "warning",
    VIOLATION_DRIFT: "error",
    VIOLATION_PACKAGE_MISSING: "warning",
    VIOLATION_COLLISION: "error",
}

REMEDIATION_LOST: str = "Restore key or update registry"
REMEDIATION_RENAMED: str = "Update tests and documentation"
REMEDIATION_EXTRA: str = "Add to registry or remove from code"
REMEDIATION_DRIFT: str = "Review changes and update baseline"
REMEDIATION_PACKAGE_MISSING: str = "Use the key in the app or drop it from the package"
REMEDIATION_COLLISION: str = "Namespace the key per package or share a single definition"

POLICY_FAIL_ON_LOST: str = "fail_on_lost"
POLICY_PROTECTED_TAGS: str = "protected_tags"
POLICY_FAIL_ON_RENAME: str = "fail_on_rename"
POLICY_FAIL_ON_EXTRA: str = "fail_on_extra"
POLICY_MAX_DRIFT: str = "max_drift"
POLICY_FAIL_ON_PACKAGE_MISSING: str = "fail_on_package_missing"
POLICY_FAIL_ON_COLLISION: str = "fail_on_collision"

STATUS_ACTIVE: str = "active"
STATUS_DEPRECATED: str = "deprecated"
STATUS_RESERVED: str = "reserved"
STATUS_REMOVED: str = "removed"
VALID_STATUSES: frozenset[str] = frozenset({STATUS_ACTIVE, STATUS_DEPRECATED, STATUS_RESERVED, STATUS_REMOVED})
