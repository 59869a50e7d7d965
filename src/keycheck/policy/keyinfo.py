"""Key snapshots attached to violations."""

from __future__ import annotations

from keycheck.constants.discovery import DEFAULT_APP_PACKAGE, MONOREPO_PACKAGES_DIRNAME
from keycheck.model import KeyInfo, KeyUsage


def package_from_path(file_path: str) -> str:
    """``packages/feature_auth/lib/login.dart`` -> ``feature_auth``; anything else is the app."""
    parts = file_path.split("/")
    if MONOREPO_PACKAGES_DIRNAME in parts:
        index = parts.index(MONOREPO_PACKAGES_DIRNAME)
        if index < len(parts) - 2:
            return parts[index + 1]
    return DEFAULT_APP_PACKAGE


def key_info(usage: KeyUsage, *, status: str | None = None) -> KeyInfo:
    if usage.package:
        package = usage.package
    elif usage.locations:
        package = package_from_path(usage.locations[0].file)
    else:
        package = DEFAULT_APP_PACKAGE
    return KeyInfo(
        id=usage.id,
        package=package,
        tags=tuple(sorted(usage.tags)),
        status=status or usage.status,
        last_seen=usage.last_seen,
    )
