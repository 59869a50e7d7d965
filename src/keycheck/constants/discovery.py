"""Constants for filesystem discovery of Dart sources."""

from __future__ import annotations

SOURCE_SUFFIX: str = ".dart"

SKIPPED_DIR_NAMES: frozenset[str] = frozenset(
    {
        "build",
        "node_modules",
        "Pods",
    }
)

TEST_DIR_NAMES: frozenset[str] = frozenset({"test", "integration_test", "test_driver"})
TEST_FILE_SUFFIX: str = "_test.dart"
GENERATED_FILE_SUFFIXES: tuple[str, ...] = (
    ".g.dart",
    ".freezed.dart",
    ".mocks.dart",
    ".gr.dart",
    ".config.dart",
)
EXAMPLE_DIR_NAMES: frozenset[str] = frozenset({"example", "examples"})

PACKAGE_LIB_DIRNAME: str = "lib"
PACKAGE_CONFIG_PATH: tuple[str, ...] = (".dart_tool", "package_config.json")
PUBSPEC_FILENAME: str = "pubspec.yaml"
PACKAGE_URI_PREFIX: str = "package:"

# ``packages/<name>/...`` segment used to attribute workspace keys to a package.
MONOREPO_PACKAGES_DIRNAME: str = "packages"
DEFAULT_APP_PACKAGE: str = "app"
