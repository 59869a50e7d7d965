"""Orchestrator thresholds and blind-spot parameters."""

from __future__ import annotations

UI_HEAVY_WIDGET_THRESHOLD: int = 5
DEFAULT_DETECTOR_EFFECTIVENESS_FLOOR: float = 0.1
LARGE_FILE_BYTES: int = 100 * 1024

GIT_DIFF_TIMEOUT_SECONDS: float = 10.0

SOURCE_WORKSPACE: str = "workspace"
SOURCE_PACKAGE: str = "package"

ERROR_TYPE_READ: str = "read"
ERROR_TYPE_PARSE: str = "parse"
ERROR_TYPE_CANCELLED: str = "cancelled"

BLIND_SPOT_UI_HEAVY: str = "no_keys_in_ui_heavy_file"
BLIND_SPOT_INEFFECTIVE_DETECTOR: str = "ineffective_detector"
BLIND_SPOT_UNCOVERED_WIDGETS: str = "uncovered_widget_types"
