"""Base exception for Keycheck."""

from __future__ import annotations


class KeycheckError(Exception):
    """Base class for all Keycheck failures surfaced to callers."""
