"""Shared helpers for detector tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from keycheck.detectors import DETECTORS, KeyHit
from keycheck.parsers import SourceDocument


@pytest.fixture()
def run_detector() -> Callable[[str, str], list[KeyHit]]:
    """Run one registered detector by name over inline Dart source."""
    by_name = {spec.name: spec for spec in DETECTORS}

    def _run(name: str, source: str) -> list[KeyHit]:
        return by_name[name].detect(SourceDocument.from_text(source))

    return _run
