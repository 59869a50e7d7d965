"""Diff and validation result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from keycheck.constants.reporting import VALIDATION_SCHEMA_VERSION
from keycheck.model.entities import ScanResult
from keycheck.model.fields import utc_now
from keycheck.types import JsonObject


@dataclass(frozen=True)
class DiffResult:
    """Key-level comparison of two snapshots."""

    added: frozenset[str]
    removed: frozenset[str]
    unchanged: frozenset[str]
    renamed: dict[str, str]
    baseline: ScanResult
    current: ScanResult

    @property
    def total_changes(self) -> int:
        return len(self.added) + len(self.removed) + len(self.renamed)

    @property
    def has_changes(self) -> bool:
        return self.total_changes > 0

    @property
    def drift_percentage(self) -> float:
        return self.total_changes / max(1, len(self.baseline.key_usages)) * 100.0

    def to_dict(self) -> JsonObject:
        return {
            "added": sorted(self.added),
            "removed": sorted(self.removed),
            "unchanged": sorted(self.unchanged),
            "renamed": dict(self.renamed),
            "total_changes": self.total_changes,
            "drift_percentage": round(self.drift_percentage, 2),
            "has_changes": self.has_changes,
        }


@dataclass(frozen=True)
class KeyInfo:
    """Snapshot of a key's identity attached to a violation."""

    id: str
    package: str
    tags: tuple[str, ...] = ()
    status: str = "active"
    last_seen: str | None = None

    def to_dict(self) -> JsonObject:
        return {
            "id": self.id,
            "package": self.package,
            "tags": list(self.tags),
            "status": self.status,
            "last_seen": self.last_seen,
        }


@dataclass(frozen=True)
class Violation:
    """A policy breach. Produced as data, never raised."""

    type: str
    severity: str
    message: str
    remediation: str
    policy: str
    key: KeyInfo | None = None

    def to_dict(self) -> JsonObject:
        return {
            "type": self.type,
            "severity": self.severity,
            "key": self.key.to_dict() if self.key is not None else None,
            "message": self.message,
            "remediation": self.remediation,
            "policy": self.policy,
        }


@dataclass(frozen=True)
class ValidationSummary:
    total_keys: int
    lost: int
    added: int
    renamed: int
    deprecated_in_use: int
    drift_percentage: float
    scanned_packages: int = 0

    def to_dict(self) -> JsonObject:
        return {
            "total_keys": self.total_keys,
            "lost": self.lost,
            "added": self.added,
            "renamed": self.renamed,
            "deprecated_in_use": self.deprecated_in_use,
            "drift_percentage": round(self.drift_percentage, 2),
            "scanned_packages": self.scanned_packages,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Verdict of a policy evaluation; ``passed`` iff there are no violations."""

    summary: ValidationSummary
    violations: list[Violation] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    @property
    def passed(self) -> bool:
        return not self.violations

    def to_dict(self) -> JsonObject:
        return {
            "schema_version": VALIDATION_SCHEMA_VERSION,
            "timestamp": self.timestamp.isoformat(),
            "summary": self.summary.to_dict(),
            "violations": [violation.to_dict() for violation in self.violations],
            "warnings": list(self.warnings),
            "has_violations": self.has_violations,
        }


@dataclass(frozen=True)
class KeyCollision:
    """A key contributed by more than one source identity."""

    key: str
    sources: tuple[str, ...]

    def to_dict(self) -> JsonObject:
        return {"key": self.key, "sources": list(self.sources)}


@dataclass(frozen=True)
class PackagePolicyResult:
    missing_in_app: list[str] = field(default_factory=list)
    collisions: list[KeyCollision] = field(default_factory=list)
    violations: list[Violation] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations

    def to_dict(self) -> JsonObject:
        return {
            "missing_in_app": list(self.missing_in_app),
            "collisions": [collision.to_dict() for collision in self.collisions],
            "violations": [violation.to_dict() for violation in self.violations],
            "passed": self.passed,
        }
