"""Config fingerprinting for reproducible scan identity."""

from __future__ import annotations

import hashlib
import json

from keycheck.config.model import KeycheckConfig
from keycheck.detectors import build_detectors


def effective_detector_names(config: KeycheckConfig) -> tuple[str, ...]:
    """Resolve enabled detector names with config overrides applied."""
    return tuple(spec.name for spec in build_detectors(config.detectors.enabled, config.detectors.disabled))


def config_fingerprint(config: KeycheckConfig) -> str:
    """Return a stable hash of every setting that changes scan output."""
    scan = config.scan
    payload = {
        "scope": scan.scope,
        "include": list(scan.include),
        "exclude": list(scan.exclude),
        "include_tests": scan.include_tests,
        "include_generated": scan.include_generated,
        "include_examples": scan.include_examples,
        "package_filter": scan.package_filter,
        "min_detector_effectiveness": scan.min_detector_effectiveness,
        "effective_detectors": list(effective_detector_names(config)),
    }
    blob = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(blob).hexdigest()
