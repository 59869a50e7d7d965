"""Explicit scan inputs; the orchestrator reads no ambient state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from keycheck.config import KeycheckConfig
from keycheck.constants.config import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_INCLUDE_PATTERNS,
    DEFAULT_SCOPE,
    SCOPE_ALL,
    SCOPE_DEPS,
    SCOPE_WORKSPACE,
)
from keycheck.constants.scanner import DEFAULT_DETECTOR_EFFECTIVENESS_FLOOR
from keycheck.detectors import DetectorSpec, build_detectors
from keycheck.scanner.filters import FileFilter


@dataclass(frozen=True)
class ScanOptions:
    """Everything one ``scan_project`` call needs.

    ``sdk_version`` of ``None`` means read it from the package config. ``enabled_detectors``
    of ``None`` means every registered detector.
    """

    root: Path
    scope: str = DEFAULT_SCOPE
    include: tuple[str, ...] = DEFAULT_INCLUDE_PATTERNS
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    include_tests: bool = False
    include_generated: bool = False
    include_examples: bool = False
    diff_base: str | None = None
    package_filter: str | None = None
    max_workers: int | None = None
    enabled_detectors: tuple[str, ...] | None = None
    disabled_detectors: tuple[str, ...] = ()
    min_detector_effectiveness: float = DEFAULT_DETECTOR_EFFECTIVENESS_FLOOR
    sdk_version: str | None = None
    use_cache: bool = True

    @classmethod
    def from_config(cls, root: Path, config: KeycheckConfig, **overrides: Any) -> ScanOptions:
        """Build options from a loaded config; keyword overrides win (e.g. CLI flags)."""
        scan = config.scan
        options = cls(
            root=root,
            scope=scan.scope,
            include=scan.include,
            exclude=scan.exclude,
            include_tests=scan.include_tests,
            include_generated=scan.include_generated,
            include_examples=scan.include_examples,
            package_filter=scan.package_filter,
            max_workers=scan.max_workers,
            enabled_detectors=config.detectors.enabled or None,
            disabled_detectors=config.detectors.disabled,
            min_detector_effectiveness=scan.min_detector_effectiveness,
            use_cache=scan.use_cache,
        )
        return replace(options, **overrides) if overrides else options

    @property
    def file_filter(self) -> FileFilter:
        return FileFilter(
            include=self.include,
            exclude=self.exclude,
            include_tests=self.include_tests,
            include_generated=self.include_generated,
            include_examples=self.include_examples,
        )

    @property
    def scans_workspace(self) -> bool:
        return self.scope in {SCOPE_WORKSPACE, SCOPE_ALL}

    @property
    def scans_dependencies(self) -> bool:
        return self.scope in {SCOPE_DEPS, SCOPE_ALL}

    def detectors(self) -> tuple[DetectorSpec, ...]:
        return build_detectors(self.enabled_detectors, self.disabled_detectors)
