"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = ".keycheck.yaml"

SCOPE_WORKSPACE: str = "workspace"
SCOPE_DEPS: str = "deps"
SCOPE_ALL: str = "all"
VALID_SCOPES: frozenset[str] = frozenset({SCOPE_WORKSPACE, SCOPE_DEPS, SCOPE_ALL})
DEFAULT_SCOPE: str = SCOPE_WORKSPACE

DEFAULT_INCLUDE_PATTERNS: tuple[str, ...] = ("**/*.dart",)
DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = ("**/*.g.dart", "**/*.freezed.dart")

DEFAULT_FAIL_ON_LOST: bool = True
DEFAULT_FAIL_ON_RENAME: bool = False
DEFAULT_FAIL_ON_EXTRA: bool = False
DEFAULT_FAIL_ON_PACKAGE_MISSING: bool = False
DEFAULT_FAIL_ON_COLLISION: bool = False
DEFAULT_MAX_DRIFT_PERCENT: float = 10.0
DEFAULT_PROTECTED_TAGS: tuple[str, ...] = ("critical", "aqa")

# Substring of a key id -> tag applied by auto-tagging.
DEFAULT_TAG_RULES: tuple[tuple[str, str], ...] = (
    ("auth", "critical"),
    ("login", "critical"),
    ("button", "aqa"),
    ("field", "aqa"),
    ("_test", "e2e"),
    ("e2e", "e2e"),
)

SCAN_ALLOWED_KEYS: frozenset[str] = frozenset(
    {
        "scope",
        "include",
        "exclude",
        "include_tests",
        "include_generated",
        "include_examples",
        "package_filter",
        "max_workers",
        "min_detector_effectiveness",
        "use_cache",
    }
)
POLICY_ALLOWED_KEYS: frozenset[str] = frozenset(
    {
        "fail_on_lost",
        "fail_on_rename",
        "fail_on_extra",
        "fail_on_package_missing",
        "fail_on_collision",
        "max_drift",
        "protected_tags",
    }
)
TOP_LEVEL_ALLOWED_KEYS: frozenset[str] = frozenset({"scan", "policies", "detectors", "tag_rules"})
