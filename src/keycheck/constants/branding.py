"""Tool naming constants shared by cache paths and reports."""

from __future__ import annotations

TOOL_NAME: str = "keycheck"
TOOL_CACHE_DIRNAME: str = ".cache"
