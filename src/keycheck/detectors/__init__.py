"""Key detectors and their registry."""

from .base import DetectorSpec, KeyHit
from .registry import DETECTOR_NAMES, DETECTORS, build_detectors, detector_fingerprint

__all__ = ["DETECTORS", "DETECTOR_NAMES", "DetectorSpec", "KeyHit", "build_detectors", "detector_fingerprint"]
