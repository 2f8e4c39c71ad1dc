"""
Shared utilities for llmkit.

Common functionality used across contexts:
- Canonical value model
- Pipeline exceptions
- Settings and logging
"""

from llmkit.utils.canonical import CanonicalValue, ValueKind, canonicalize, kind_of
from llmkit.utils.exceptions import (
    ConfigurationError,
    ConversionError,
    DetectionInconclusiveError,
    NarrowingFailureError,
    ParseFailureError,
    PipelineStage,
)
from llmkit.utils.settings import ConversionSettings, get_settings, load_settings

__all__ = [
    "CanonicalValue",
    "ValueKind",
    "canonicalize",
    "kind_of",
    "ConfigurationError",
    "ConversionError",
    "DetectionInconclusiveError",
    "NarrowingFailureError",
    "ParseFailureError",
    "PipelineStage",
    "ConversionSettings",
    "get_settings",
    "load_settings",
]
