"""Shared pytest fixtures for repository-local test data."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_root() -> Path:
    """Return root directory for test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def basic_repo_root(fixtures_root: Path) -> Path:
    """Return the primary fixture repository path."""
    return fixtures_root / "repos" / "basic"


@pytest.fixture()
def project_root(tmp_path: Path, basic_repo_root: Path) -> Path:
    """Writable copy of the basic fixture app; scans that touch the cache use this."""
    target = tmp_path / "app"
    shutil.copytree(basic_repo_root, target)
    return target


@pytest.fixture()
def ui_kit_root(tmp_path: Path) -> Path:
    """A dependency package living outside the project, like a pub cache entry."""
    package = tmp_path / "pub-cache" / "ui_kit-1.2.0"
    (package / "lib" / "src").mkdir(parents=True)
    (package / "pubspec.yaml").write_text("name: ui_kit\nversion: 1.2.0\n", encoding="utf-8")
    (package / "lib" / "ui_kit.dart").write_text(
        "export 'src/kit_button.dart';\n",
        encoding="utf-8",
    )
    (package / "lib" / "src" / "kit_button.dart").write_text(
        "class KitButton extends StatelessWidget {\n"
        "  const KitButton({super.key});\n"
        "\n"
        "  @override\n"
        "  Widget build(BuildContext context) {\n"
        "    return Row(\n"
        "      children: [\n"
        "        TextButton(key: const ValueKey('kit_button'), onPressed: null, child: Text('Go')),\n"
        "        IconButton(key: const ValueKey('login_button'), onPressed: () {}, icon: Icon(Icons.login)),\n"
        "      ],\n"
        "    );\n"
        "  }\n"
        "}\n",
        encoding="utf-8",
    )
    return package

