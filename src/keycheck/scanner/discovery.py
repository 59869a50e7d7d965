"""Source file discovery for workspace and dependency scopes."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from keycheck.constants.discovery import PACKAGE_LIB_DIRNAME, PACKAGE_URI_PREFIX, SKIPPED_DIR_NAMES, SOURCE_SUFFIX
from keycheck.scanner.filters import FileFilter, should_analyze

logger = logging.getLogger(__name__)


def discover_workspace_files(root: Path, file_filter: FileFilter) -> list[tuple[Path, str]]:
    """Walk ``root`` and return ``(absolute path, relative POSIX path)`` pairs in stable order.

    Hidden directories (``.dart_tool``, ``.git``, ...) and build output are never entered.
    """
    root = root.resolve()
    discovered: list[tuple[Path, str]] = []
    for directory, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if not _skip_directory(name))
        for filename in sorted(filenames):
            if not filename.endswith(SOURCE_SUFFIX):
                continue
            path = Path(directory) / filename
            relative_path = path.relative_to(root).as_posix()
            if should_analyze(relative_path, file_filter):
                discovered.append((path, relative_path))
    logger.debug("Discovered %d workspace files under %s", len(discovered), root)
    return discovered


def discover_package_files(
    package_name: str,
    package_root: Path,
    file_filter: FileFilter,
) -> list[tuple[Path, str]]:
    """Return a dependency package's ``lib/`` sources keyed by ``package:<name>/<path>`` identifiers."""
    lib_root = package_root / PACKAGE_LIB_DIRNAME
    if not lib_root.is_dir():
        return []

    discovered: list[tuple[Path, str]] = []
    for directory, dirnames, filenames in os.walk(lib_root):
        dirnames[:] = sorted(name for name in dirnames if not _skip_directory(name))
        for filename in sorted(filenames):
            if not filename.endswith(SOURCE_SUFFIX):
                continue
            path = Path(directory) / filename
            if not should_analyze(path.relative_to(package_root).as_posix(), file_filter):
                continue
            identifier = f"{PACKAGE_URI_PREFIX}{package_name}/{path.relative_to(lib_root).as_posix()}"
            discovered.append((path, identifier))
    return discovered


def _skip_directory(name: str) -> bool:
    return name.startswith(".") or name in SKIPPED_DIR_NAMES
