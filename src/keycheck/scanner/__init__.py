"""Scanner orchestration package."""

from __future__ import annotations

from typing import Any

__all__ = ["ScanOptions", "scan_project"]


def __getattr__(name: str) -> Any:
    """Lazily expose scanner APIs to avoid import cycles at package import time."""
    if name == "scan_project":
        from .orchestrator import scan_project

        return scan_project
    if name == "ScanOptions":
        from .options import ScanOptions

        return ScanOptions
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
