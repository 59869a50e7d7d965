"""Baseline tooling: auto-tags and metadata carry-over between scans."""

from .merge import merge_baseline
from .tagging import apply_auto_tags

__all__ = ["apply_auto_tags", "merge_baseline"]
