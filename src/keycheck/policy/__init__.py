"""Diff and policy engines."""

from .diff import diff_snapshots
from .engine import validate
from .packages import check_package_policies
from .similarity import similarity, tokenize_key

__all__ = ["check_package_policies", "diff_snapshots", "similarity", "tokenize_key", "validate"]
