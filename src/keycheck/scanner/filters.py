"""Per-file inclusion rules shared by discovery and the file analyzer."""

from __future__ import annotations

from dataclasses import dataclass

from keycheck.constants.config import DEFAULT_EXCLUDE_PATTERNS, DEFAULT_INCLUDE_PATTERNS
from keycheck.constants.discovery import (
    EXAMPLE_DIR_NAMES,
    GENERATED_FILE_SUFFIXES,
    SOURCE_SUFFIX,
    TEST_DIR_NAMES,
    TEST_FILE_SUFFIX,
)
from keycheck.utils import matches_any


@dataclass(frozen=True)
class FileFilter:
    """Glob patterns plus test/generated/example switches."""

    include: tuple[str, ...] = DEFAULT_INCLUDE_PATTERNS
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    include_tests: bool = False
    include_generated: bool = False
    include_examples: bool = False


def is_test_file(relative_path: str) -> bool:
    parts = relative_path.split("/")
    return parts[-1].endswith(TEST_FILE_SUFFIX) or any(part in TEST_DIR_NAMES for part in parts[:-1])


def is_generated_file(relative_path: str) -> bool:
    return relative_path.endswith(GENERATED_FILE_SUFFIXES)


def is_example_file(relative_path: str) -> bool:
    return any(part in EXAMPLE_DIR_NAMES for part in relative_path.split("/")[:-1])


def should_analyze(relative_path: str, file_filter: FileFilter) -> bool:
    """Return whether a POSIX path relative to the scan root is in scope."""
    if not relative_path.endswith(SOURCE_SUFFIX):
        return False
    if not file_filter.include_tests and is_test_file(relative_path):
        return False
    if not file_filter.include_generated and is_generated_file(relative_path):
        return False
    if not file_filter.include_examples and is_example_file(relative_path):
        return False
    if file_filter.include and not matches_any(relative_path, file_filter.include):
        return False
    return not matches_any(relative_path, file_filter.exclude)
