"""
Intake Context

Responsibilities:
- Decodes caller-supplied bytes and applies the input byte budget
- Strips markdown code fences wrapped around model output
- Classifies text into one DetectedFormat with an ordered heuristic chain

Owns: Raw input handling, format detection
Never: Parses content into values
"""

from llmkit.contexts.intake.detector import DETECTION_RULES, DetectedFormat, detect_format
from llmkit.contexts.intake.fence import decode_input, extract_fenced_block

__all__ = [
    "DETECTION_RULES",
    "DetectedFormat",
    "detect_format",
    "decode_input",
    "extract_fenced_block",
]
