"""File-level helpers for reading scanned sources."""

from __future__ import annotations

from pathlib import Path


def read_source_text(path: Path) -> str:
    """Read a source file as UTF-8, dropping a leading byte-order mark."""
    return path.read_text(encoding="utf-8").lstrip("\ufeff")
