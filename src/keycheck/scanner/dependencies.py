"""Dependency manifest resolution from ``.dart_tool/package_config.json``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

import yaml

from keycheck.constants.cache import UNKNOWN_PACKAGE_VERSION, UNKNOWN_SDK_VERSION
from keycheck.constants.discovery import PACKAGE_CONFIG_PATH, PUBSPEC_FILENAME
from keycheck.io import load_json_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageDependency:
    """One resolved dependency package."""

    name: str
    version: str
    root_path: Path

    @property
    def identity(self) -> str:
        return f"{self.name}@{self.version}"


def resolve_dependencies(root: Path) -> list[PackageDependency]:
    """Read third-party packages from the project's package config, in manifest order.

    Packages that live under ``root`` are workspace code and are skipped. A
    missing or invalid manifest yields no dependencies.
    """
    root = root.resolve()
    packages = _load_package_entries(root)
    config_dir = root.joinpath(*PACKAGE_CONFIG_PATH).parent

    dependencies: list[PackageDependency] = []
    for entry in packages:
        name = entry.get("name")
        root_uri = entry.get("rootUri")
        if not isinstance(name, str) or not isinstance(root_uri, str):
            continue
        package_root = _resolve_root_uri(root_uri, config_dir)
        if package_root == root or package_root.is_relative_to(root):
            continue
        if not package_root.is_dir():
            logger.debug("Skipping package %s: root %s does not exist", name, package_root)
            continue
        dependencies.append(
            PackageDependency(name=name, version=read_package_version(package_root), root_path=package_root)
        )
    logger.debug("Resolved %d dependency packages for %s", len(dependencies), root)
    return dependencies


def read_package_version(package_root: Path) -> str:
    """Version declared in a package's ``pubspec.yaml``, or ``unknown``."""
    pubspec = package_root / PUBSPEC_FILENAME
    try:
        payload = yaml.safe_load(pubspec.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        logger.debug("Cannot read %s: %s", pubspec, exc)
        return UNKNOWN_PACKAGE_VERSION
    if isinstance(payload, dict):
        version = payload.get("version")
        if isinstance(version, (str, int, float)) and not isinstance(version, bool):
            return str(version)
    return UNKNOWN_PACKAGE_VERSION


def read_sdk_version(root: Path) -> str:
    """Toolchain version recorded by ``pub get`` (``generatorVersion``), or ``unknown``."""
    config_path = root.joinpath(*PACKAGE_CONFIG_PATH)
    try:
        payload = load_json_file(config_path)
    except (OSError, ValueError):
        return UNKNOWN_SDK_VERSION
    if isinstance(payload, dict):
        version = payload.get("generatorVersion")
        if isinstance(version, str) and version:
            return version
    return UNKNOWN_SDK_VERSION


def _load_package_entries(root: Path) -> list[dict[str, object]]:
    config_path = root.joinpath(*PACKAGE_CONFIG_PATH)
    if not config_path.is_file():
        logger.warning("No package config at %s; dependency packages will not be scanned", config_path)
        return []
    try:
        payload = load_json_file(config_path)
    except (OSError, ValueError) as exc:
        logger.warning("Invalid package config at %s: %s", config_path, exc)
        return []
    packages = payload.get("packages") if isinstance(payload, dict) else None
    if not isinstance(packages, list):
        logger.warning("Package config at %s has no packages list", config_path)
        return []
    return [entry for entry in packages if isinstance(entry, dict)]


def _resolve_root_uri(root_uri: str, config_dir: Path) -> Path:
    parsed = urlparse(root_uri)
    if parsed.scheme == "file":
        return Path(url2pathname(unquote(parsed.path))).resolve()
    return (config_dir / unquote(root_uri)).resolve()
