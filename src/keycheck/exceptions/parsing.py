"""Parsing-related exceptions."""

from __future__ import annotations

from keycheck.exceptions.base import KeycheckError


class SourceParseError(KeycheckError, ValueError):
    """Raised when a source file cannot be tokenized."""
