"""Constants for persisted snapshot and validation documents."""

from __future__ import annotations

SNAPSHOT_SCHEMA_VERSION: str = "1.0"
VALIDATION_SCHEMA_VERSION: str = "1.0"
REPORT_TEMP_PREFIX: str = ".tmp-"
REPORT_TEMP_SUFFIX: str = ".json"

VALID_BLIND_SPOT_SEVERITIES: frozenset[str] = frozenset({"info", "warning", "error"})
