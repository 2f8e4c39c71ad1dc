"""
Conversion Context

Responsibilities:
- Parses text of a detected format into the canonical value
- Applies the shared scalar typing rule to YAML, CSV and markdown cells
- Orchestrates intake, parsing and rendering into a ConversionBundle

Owns: Format parsers, pipeline orchestration, result bundle
Never: Decides which format an input is (intake) or how a target is written (rendering)
"""

from llmkit.contexts.conversion.converter import ConversionBundle, convert, convert_map
from llmkit.contexts.conversion.parsers import PARSERS, parse_text
from llmkit.utils.scalars import coerce_scalar

__all__ = [
    "ConversionBundle",
    "convert",
    "convert_map",
    "PARSERS",
    "parse_text",
    "coerce_scalar",
]
