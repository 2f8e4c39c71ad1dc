"""
llmkit - structured output normalization for model-generated text

Detects which structured format a blob of model output is in, parses it into
one canonical value, and re-renders it as JSON, YAML, TOML and CSV.

Architecture:
- Intake Context: Input decoding, fence stripping, format detection
- Conversion Context: Format parsing and pipeline orchestration
- Rendering Context: Target serialization and narrowing checks
"""

from loguru import logger

from llmkit.contexts.conversion import ConversionBundle, convert, convert_map
from llmkit.contexts.intake import DetectedFormat, detect_format, extract_fenced_block

__version__ = "0.1.0"

# Library use is silent until a logger is set up (see llmkit.utils.logger)
logger.disable("llmkit")

__all__ = [
    "ConversionBundle",
    "DetectedFormat",
    "convert",
    "convert_map",
    "detect_format",
    "extract_fenced_block",
]
