"""Configuration-related exceptions."""

from __future__ import annotations

from keycheck.exceptions.base import KeycheckError


class ConfigError(KeycheckError, ValueError):
    """Raised when scan or policy configuration is invalid."""
