"""Central detector registry.

Adding a detector means adding one function and one entry in ``DETECTORS``.
Table order is the tie-break when two detectors report the same key position.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Sequence

from keycheck.constants.cache import DETECTOR_VERSION
from keycheck.constants.detectors import (
    DETECTOR_CUPERTINO_KEY,
    DETECTOR_FIND_BY_KEY,
    DETECTOR_INTEGRATION_TEST_KEY,
    DETECTOR_KEY,
    DETECTOR_KEY_CONSTANTS,
    DETECTOR_MATERIAL_KEY,
    DETECTOR_OBJECT_KEY,
    DETECTOR_PATROL_FINDER,
    DETECTOR_SEMANTICS,
    DETECTOR_VALUE_KEY,
)
from keycheck.detectors.accessibility import detect_semantics_identifiers
from keycheck.detectors.base import DetectorSpec
from keycheck.detectors.constants import detect_key_constants
from keycheck.detectors.external import detect_finder_keys, detect_integration_keys, detect_patrol_finders
from keycheck.detectors.literal import (
    detect_cupertino_keys,
    detect_keys,
    detect_material_keys,
    detect_object_keys,
    detect_value_keys,
)
from keycheck.exceptions import ConfigError

DETECTORS: tuple[DetectorSpec, ...] = (
    DetectorSpec(DETECTOR_VALUE_KEY, detect_value_keys, "ValueKey('x') constructors"),
    DetectorSpec(DETECTOR_KEY, detect_keys, "Key('x') constructors"),
    DetectorSpec(DETECTOR_OBJECT_KEY, detect_object_keys, "ObjectKey('x') constructors"),
    DetectorSpec(DETECTOR_SEMANTICS, detect_semantics_identifiers, "Semantics(identifier: 'x')"),
    DetectorSpec(DETECTOR_KEY_CONSTANTS, detect_key_constants, "KeyConstants fields and key builders"),
    DetectorSpec(DETECTOR_FIND_BY_KEY, detect_finder_keys, "find.byValueKey / find.byKey finders"),
    DetectorSpec(DETECTOR_PATROL_FINDER, detect_patrol_finders, "Patrol $('x') finders"),
    DetectorSpec(DETECTOR_INTEGRATION_TEST_KEY, detect_integration_keys, "key: 'x' attributes"),
    DetectorSpec(DETECTOR_MATERIAL_KEY, detect_material_keys, "MaterialKey('x') wrappers"),
    DetectorSpec(DETECTOR_CUPERTINO_KEY, detect_cupertino_keys, "CupertinoKey('x') wrappers"),
)

DETECTOR_NAMES: tuple[str, ...] = tuple(spec.name for spec in DETECTORS)


def build_detectors(
    enabled: Iterable[str] | None = None,
    disabled: Iterable[str] = (),
) -> tuple[DetectorSpec, ...]:
    """Resolve the enabled detector set in registry order.

    ``enabled`` of ``None`` or empty means every registered detector.
    """
    enabled_names = list(enabled or ())
    disabled_names = set(disabled)
    unknown = (set(enabled_names) | disabled_names) - set(DETECTOR_NAMES)
    if unknown:
        raise ConfigError(
            f"Unknown detector(s): {', '.join(sorted(unknown))}. Valid detectors: {', '.join(DETECTOR_NAMES)}"
        )

    selected = set(enabled_names) if enabled_names else set(DETECTOR_NAMES)
    return tuple(spec for spec in DETECTORS if spec.name in selected and spec.name not in disabled_names)


def detector_fingerprint(detectors: Sequence[DetectorSpec]) -> str:
    """Stable hash of the detector version and the enabled set, used in dependency cache keys."""
    payload = {
        "version": DETECTOR_VERSION,
        "detectors": sorted(spec.name for spec in detectors),
    }
    blob = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(blob).hexdigest()
