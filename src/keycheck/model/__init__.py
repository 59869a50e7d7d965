"""Core data models for Keycheck."""

from .entities import (
    BlindSpot,
    FileAnalysis,
    HandlerInfo,
    KeyLocation,
    KeyUsage,
    ScanError,
    ScanMetrics,
    ScanResult,
)
from .results import (
    DiffResult,
    KeyCollision,
    KeyInfo,
    PackagePolicyResult,
    ValidationResult,
    ValidationSummary,
    Violation,
)

__all__ = [
    "BlindSpot",
    "DiffResult",
    "FileAnalysis",
    "HandlerInfo",
    "KeyCollision",
    "KeyInfo",
    "KeyLocation",
    "KeyUsage",
    "PackagePolicyResult",
    "ScanError",
    "ScanMetrics",
    "ScanResult",
    "ValidationResult",
    "ValidationSummary",
    "Violation",
]
