"""Small shared helpers."""

from .globs import compile_glob, matches_any

__all__ = ["compile_glob", "matches_any"]
