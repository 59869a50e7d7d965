"""Tests for package-config dependency resolution."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from keycheck.constants.cache import UNKNOWN_PACKAGE_VERSION
from keycheck.scanner.dependencies import read_package_version, read_sdk_version, resolve_dependencies


def _write_package_config(
    root: Path,
    packages: dict[str, Path | str],
    *,
    generator_version: str = "3.4.0",
) -> Path:
    entries = [
        {
            "name": name,
            "rootUri": location.as_uri() if isinstance(location, Path) else location,
            "packageUri": "lib/",
            "languageVersion": "3.0",
        }
        for name, location in packages.items()
    ]
    entries.append({"name": root.name, "rootUri": "../", "packageUri": "lib/", "languageVersion": "3.0"})
    path = root / ".dart_tool" / "package_config.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps({"configVersion": 2, "packages": entries, "generatorVersion": generator_version}),
        encoding="utf-8",
    )
    return path


def test_resolves_external_packages_with_versions(project_root: Path, ui_kit_root: Path) -> None:
    _write_package_config(project_root, {"ui_kit": ui_kit_root})

    dependencies = resolve_dependencies(project_root)

    assert len(dependencies) == 1
    dependency = dependencies[0]
    assert dependency.name == "ui_kit"
    assert dependency.version == "1.2.0"
    assert dependency.identity == "ui_kit@1.2.0"
    assert dependency.root_path == ui_kit_root.resolve()


def test_relative_root_uris_resolve_from_dart_tool(project_root: Path, ui_kit_root: Path) -> None:
    _write_package_config(project_root, {"ui_kit": "../../pub-cache/ui_kit-1.2.0/"})

    dependencies = resolve_dependencies(project_root)

    assert [dependency.root_path for dependency in dependencies] == [ui_kit_root.resolve()]


def test_workspace_and_missing_packages_are_skipped(project_root: Path, tmp_path: Path) -> None:
    _write_package_config(
        project_root,
        {
            "feature_auth": project_root / "packages" / "feature_auth",
            "ghost": tmp_path / "does-not-exist",
        },
    )

    assert resolve_dependencies(project_root) == []


def test_missing_or_invalid_config_yields_nothing(project_root: Path, caplog: pytest.LogCaptureFixture) -> None:
    assert resolve_dependencies(project_root) == []

    config = project_root / ".dart_tool" / "package_config.json"
    config.parent.mkdir(parents=True)
    config.write_text("{not json", encoding="utf-8")

    assert resolve_dependencies(project_root) == []
    assert "Invalid package config" in caplog.text


def test_package_version_falls_back_to_unknown(tmp_path: Path) -> None:
    assert read_package_version(tmp_path) == UNKNOWN_PACKAGE_VERSION

    (tmp_path / "pubspec.yaml").write_text("name: x\n", encoding="utf-8")
    assert read_package_version(tmp_path) == UNKNOWN_PACKAGE_VERSION

    (tmp_path / "pubspec.yaml").write_text("name: x\nversion: [broken\n", encoding="utf-8")
    assert read_package_version(tmp_path) == UNKNOWN_PACKAGE_VERSION


def test_sdk_version_comes_from_generator_version(project_root: Path) -> None:
    assert read_sdk_version(project_root) == "unknown"

    _write_package_config(project_root, {}, generator_version="3.5.1")

    assert read_sdk_version(project_root) == "3.5.1"
