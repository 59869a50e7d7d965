"""Snapshot persistence exceptions."""

from __future__ import annotations

from keycheck.exceptions.base import KeycheckError


class SnapshotError(KeycheckError, OSError):
    """Raised when a snapshot document is missing, unreadable, or malformed."""
