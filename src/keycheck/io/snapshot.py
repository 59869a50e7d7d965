"""Snapshot and validation-result persistence."""

from __future__ import annotations

import logging
from pathlib import Path

from keycheck.constants.reporting import REPORT_TEMP_PREFIX, REPORT_TEMP_SUFFIX
from keycheck.exceptions import SnapshotError
from keycheck.io.json_io import load_json_file, write_json_atomic
from keycheck.model import ScanResult, ValidationResult

logger = logging.getLogger(__name__)


def load_snapshot(path: Path) -> ScanResult:
    """Load a persisted ``ScanResult`` document, raising ``SnapshotError`` on any input problem."""
    try:
        payload = load_json_file(path)
    except FileNotFoundError as exc:
        raise SnapshotError(f"Snapshot file not found: {path}") from exc
    except OSError as exc:
        raise SnapshotError(f"Snapshot file is unreadable: {path} ({exc})") from exc
    except ValueError as exc:
        raise SnapshotError(f"Snapshot file is not valid JSON: {path} ({exc})") from exc

    if not isinstance(payload, dict):
        raise SnapshotError(f"Snapshot file must contain a JSON object: {path}")

    try:
        result = ScanResult.from_dict(payload)
    except ValueError as exc:
        raise SnapshotError(f"Snapshot file is malformed: {path} ({exc})") from exc

    logger.debug("Loaded snapshot %s with %d keys", path, len(result.key_usages))
    return result


def save_snapshot(path: Path, result: ScanResult) -> None:
    """Persist a scan result atomically."""
    write_json_atomic(
        path=path,
        payload=result.to_dict(),
        temp_prefix=REPORT_TEMP_PREFIX,
        temp_suffix=REPORT_TEMP_SUFFIX,
    )


def save_validation_result(path: Path, result: ValidationResult) -> None:
    """Persist a validation verdict atomically."""
    write_json_atomic(
        path=path,
        payload=result.to_dict(),
        temp_prefix=REPORT_TEMP_PREFIX,
        temp_suffix=REPORT_TEMP_SUFFIX,
    )
