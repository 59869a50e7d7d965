"""Glob matching for POSIX relative paths with ``**`` support."""

from __future__ import annotations

import re
from functools import lru_cache
from re import Pattern


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> Pattern[str]:
    """Translate a glob into an anchored regex.

    ``**/`` matches zero or more directories, ``*`` and ``?`` never cross ``/``.
    """
    parts: list[str] = []
    index = 0
    while index < len(pattern):
        if pattern.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
        elif pattern.startswith("**", index):
            parts.append(".*")
            index += 2
        elif pattern[index] == "*":
            parts.append("[^/]*")
            index += 1
        elif pattern[index] == "?":
            parts.append("[^/]")
            index += 1
        else:
            parts.append(re.escape(pattern[index]))
            index += 1
    return re.compile("".join(parts) + r"\Z")


def matches_any(relative_path: str, patterns: tuple[str, ...]) -> bool:
    return any(compile_glob(pattern).match(relative_path) for pattern in patterns)
