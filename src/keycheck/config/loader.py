"""Config loading and normalization for Keycheck."""

from __future__ import annotations

import difflib
import logging
import re
from pathlib import Path
from typing import Any

import yaml

from keycheck.config.model import (
    DEFAULT_TAG_RULE_SET,
    DetectorConfig,
    KeycheckConfig,
    PolicyConfig,
    ScanSettings,
    TagRule,
)
from keycheck.constants.config import (
    CONFIG_FILENAME,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_INCLUDE_PATTERNS,
    DEFAULT_PROTECTED_TAGS,
    POLICY_ALLOWED_KEYS,
    SCAN_ALLOWED_KEYS,
    TOP_LEVEL_ALLOWED_KEYS,
    VALID_SCOPES,
)
from keycheck.detectors import build_detectors
from keycheck.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_config(root: Path, config_path: Path | None = None) -> KeycheckConfig:
    """Load and validate config from ``.keycheck.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return KeycheckConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Config file at {path} is unreadable: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    _reject_unknown_keys(raw, TOP_LEVEL_ALLOWED_KEYS, "")
    scan_raw = _ensure_mapping(raw.get("scan"), "scan")
    policies_raw = _ensure_mapping(raw.get("policies"), "policies")
    detectors_raw = _ensure_mapping(raw.get("detectors"), "detectors")
    _reject_unknown_keys(scan_raw, SCAN_ALLOWED_KEYS, "scan.")
    _reject_unknown_keys(policies_raw, POLICY_ALLOWED_KEYS, "policies.")
    _reject_unknown_keys(detectors_raw, frozenset({"enabled", "disabled"}), "detectors.")

    detectors = DetectorConfig(
        enabled=tuple(_ensure_string_list(detectors_raw.get("enabled", []), "detectors.enabled")),
        disabled=tuple(_ensure_string_list(detectors_raw.get("disabled", []), "detectors.disabled")),
    )
    # Fail fast on unknown detector names.
    build_detectors(detectors.enabled, detectors.disabled)

    config = KeycheckConfig(
        scan=_build_scan_settings(scan_raw),
        policies=_build_policy_config(policies_raw),
        detectors=detectors,
        tag_rules=_build_tag_rules(raw.get("tag_rules")),
    )
    logger.debug("Loaded config from %s", path)
    return config


def _build_scan_settings(raw: dict[str, Any]) -> ScanSettings:
    scope = raw.get("scope", ScanSettings.scope)
    if not isinstance(scope, str) or scope not in VALID_SCOPES:
        raise ConfigError(f"scan.scope must be one of {sorted(VALID_SCOPES)}, got {scope!r}")

    package_filter = raw.get("package_filter")
    if package_filter is not None:
        if not isinstance(package_filter, str):
            raise ConfigError("scan.package_filter must be a string")
        try:
            re.compile(package_filter)
        except re.error as exc:
            raise ConfigError(f"scan.package_filter is not a valid regular expression: {exc}") from exc

    max_workers = raw.get("max_workers")
    if max_workers is not None and (
        isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers <= 0
    ):
        raise ConfigError("scan.max_workers must be a positive integer")

    floor = raw.get("min_detector_effectiveness", ScanSettings.min_detector_effectiveness)
    if isinstance(floor, bool) or not isinstance(floor, (int, float)) or not 0 <= floor <= 1:
        raise ConfigError("scan.min_detector_effectiveness must be a number between 0 and 1")

    return ScanSettings(
        scope=scope,
        include=tuple(_ensure_string_list(raw.get("include", list(DEFAULT_INCLUDE_PATTERNS)), "scan.include")),
        exclude=tuple(_ensure_string_list(raw.get("exclude", list(DEFAULT_EXCLUDE_PATTERNS)), "scan.exclude")),
        include_tests=_ensure_bool(raw.get("include_tests", False), "scan.include_tests"),
        include_generated=_ensure_bool(raw.get("include_generated", False), "scan.include_generated"),
        include_examples=_ensure_bool(raw.get("include_examples", False), "scan.include_examples"),
        package_filter=package_filter,
        max_workers=max_workers,
        min_detector_effectiveness=float(floor),
        use_cache=_ensure_bool(raw.get("use_cache", True), "scan.use_cache"),
    )


def _build_policy_config(raw: dict[str, Any]) -> PolicyConfig:
    defaults = PolicyConfig()
    max_drift = raw.get("max_drift", defaults.max_drift)
    if isinstance(max_drift, bool) or not isinstance(max_drift, (int, float)) or max_drift < 0:
        raise ConfigError("policies.max_drift must be a non-negative number")

    return PolicyConfig(
        fail_on_lost=_ensure_bool(raw.get("fail_on_lost", defaults.fail_on_lost), "policies.fail_on_lost"),
        fail_on_rename=_ensure_bool(raw.get("fail_on_rename", defaults.fail_on_rename), "policies.fail_on_rename"),
        fail_on_extra=_ensure_bool(raw.get("fail_on_extra", defaults.fail_on_extra), "policies.fail_on_extra"),
        max_drift=float(max_drift),
        protected_tags=tuple(
            _ensure_string_list(raw.get("protected_tags", list(DEFAULT_PROTECTED_TAGS)), "policies.protected_tags")
        ),
        fail_on_package_missing=_ensure_bool(
            raw.get("fail_on_package_missing", defaults.fail_on_package_missing),
            "policies.fail_on_package_missing",
        ),
        fail_on_collision=_ensure_bool(
            raw.get("fail_on_collision", defaults.fail_on_collision),
            "policies.fail_on_collision",
        ),
    )


def _build_tag_rules(raw: Any) -> tuple[TagRule, ...]:
    if raw is None:
        return DEFAULT_TAG_RULE_SET
    if not isinstance(raw, list):
        raise ConfigError("tag_rules must be a list of {pattern, tag} mappings")

    rules: list[TagRule] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ConfigError(f"tag_rules[{index}] must be a mapping")
        pattern = item.get("pattern")
        tag = item.get("tag")
        if not isinstance(pattern, str) or not pattern.strip():
            raise ConfigError(f"tag_rules[{index}].pattern must be a non-empty string")
        if not isinstance(tag, str) or not tag.strip():
            raise ConfigError(f"tag_rules[{index}].tag must be a non-empty string")
        rules.append(TagRule(pattern=pattern.strip(), tag=tag.strip()))
    return tuple(rules)


def _ensure_mapping(value: Any, key_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key_name} must be a mapping")
    return value


def _ensure_bool(value: Any, key_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{key_name} must be a boolean")
    return value


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _reject_unknown_keys(raw: dict[str, Any], allowed: frozenset[str], prefix: str) -> None:
    for key in raw:
        if key in allowed:
            continue
        message = f"Unknown config key `{prefix}{key}`"
        hint = _suggest_key(str(key), allowed)
        raise ConfigError(f"{message}; {hint}" if hint else message)


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""
