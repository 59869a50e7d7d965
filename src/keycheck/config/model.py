"""Config data model for Keycheck scans and policy validation."""

from __future__ import annotations

from dataclasses import dataclass

from keycheck.constants.config import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_FAIL_ON_COLLISION,
    DEFAULT_FAIL_ON_EXTRA,
    DEFAULT_FAIL_ON_LOST,
    DEFAULT_FAIL_ON_PACKAGE_MISSING,
    DEFAULT_FAIL_ON_RENAME,
    DEFAULT_INCLUDE_PATTERNS,
    DEFAULT_MAX_DRIFT_PERCENT,
    DEFAULT_PROTECTED_TAGS,
    DEFAULT_SCOPE,
    DEFAULT_TAG_RULES,
)
from keycheck.constants.scanner import DEFAULT_DETECTOR_EFFECTIVENESS_FLOOR


@dataclass(frozen=True)
class ScanSettings:
    """File selection and execution settings for the scan orchestrator."""

    scope: str = DEFAULT_SCOPE
    include: tuple[str, ...] = DEFAULT_INCLUDE_PATTERNS
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    include_tests: bool = False
    include_generated: bool = False
    include_examples: bool = False
    package_filter: str | None = None
    max_workers: int | None = None
    min_detector_effectiveness: float = DEFAULT_DETECTOR_EFFECTIVENESS_FLOOR
    use_cache: bool = True


@dataclass(frozen=True)
class PolicyConfig:
    """Thresholds and switches evaluated by the policy engine."""

    fail_on_lost: bool = DEFAULT_FAIL_ON_LOST
    fail_on_rename: bool = DEFAULT_FAIL_ON_RENAME
    fail_on_extra: bool = DEFAULT_FAIL_ON_EXTRA
    max_drift: float = DEFAULT_MAX_DRIFT_PERCENT
    protected_tags: tuple[str, ...] = DEFAULT_PROTECTED_TAGS
    fail_on_package_missing: bool = DEFAULT_FAIL_ON_PACKAGE_MISSING
    fail_on_collision: bool = DEFAULT_FAIL_ON_COLLISION


@dataclass(frozen=True)
class DetectorConfig:
    """Detector enable/disable overrides by registry name."""

    enabled: tuple[str, ...] = ()
    disabled: tuple[str, ...] = ()


@dataclass(frozen=True)
class TagRule:
    """Apply ``tag`` to every key whose id contains ``pattern`` (case-insensitive)."""

    pattern: str
    tag: str


DEFAULT_TAG_RULE_SET: tuple[TagRule, ...] = tuple(TagRule(pattern, tag) for pattern, tag in DEFAULT_TAG_RULES)


@dataclass(frozen=True)
class KeycheckConfig:
    """Resolved project config."""

    scan: ScanSettings = ScanSettings()
    policies: PolicyConfig = PolicyConfig()
    detectors: DetectorConfig = DetectorConfig()
    tag_rules: tuple[TagRule, ...] = DEFAULT_TAG_RULE_SET
