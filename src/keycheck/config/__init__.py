"""Configuration loading, validation, and normalization for Keycheck.

This package facade re-exports the public names so callers can use
``from keycheck.config import ...``.
"""

from __future__ import annotations

from keycheck.config.fingerprint import config_fingerprint, effective_detector_names
from keycheck.config.loader import load_config
from keycheck.config.model import (
    DEFAULT_TAG_RULE_SET,
    DetectorConfig,
    KeycheckConfig,
    PolicyConfig,
    ScanSettings,
    TagRule,
)

__all__ = [
    "DEFAULT_TAG_RULE_SET",
    "DetectorConfig",
    "KeycheckConfig",
    "PolicyConfig",
    "ScanSettings",
    "TagRule",
    "config_fingerprint",
    "effective_detector_names",
    "load_config",
]
