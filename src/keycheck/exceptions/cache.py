"""Cache-related exceptions."""

from __future__ import annotations

from keycheck.exceptions.base import KeycheckError


class CacheError(KeycheckError, ValueError):
    """Raised when a dependency cache entry is malformed."""
