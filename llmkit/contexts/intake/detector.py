"""
Format detection for the Intake context.

Classifies text into exactly one DetectedFormat with a priority-ordered chain of
pure predicates. Rules are evaluated top to bottom and the first match wins;
there is no scoring across rules.

Order:
1. JSON            - leading { or [ and the whole text parses
2. NDJSON          - 2+ non-blank lines, each one a complete JSON value
3. Markdown table  - header row followed by a |---|---| separator
4. TOML            - [table] header or key = value line
5. YAML            - key: value line, "- item" line or --- marker
6. CSV             - 2+ rows with the same field count (at least 2 fields)
7. Unknown
"""

import csv
import io
import json
import re
from enum import Enum
from typing import Callable, List, Optional, Tuple

from llmkit.contexts.intake.fence import decode_input
from llmkit.contexts.intake.logger import log_detection
from llmkit.contexts.intake.patterns import TomlPatterns, YamlPatterns, find_table_header


class DetectedFormat(str, Enum):
    """Classification produced by detect_format()."""

    JSON = "json"
    NDJSON = "ndjson"
    YAML = "yaml"
    TOML = "toml"
    CSV = "csv"
    MARKDOWN_TABLE = "markdown_table"
    UNKNOWN = "unknown"


def _non_blank_lines(text: str) -> List[str]:
    return [line for line in text.splitlines() if line.strip()]


def _content_lines(text: str) -> List[str]:
    """Non-blank lines that are not # comments."""
    return [line for line in _non_blank_lines(text) if not re.match(YamlPatterns.COMMENT, line)]


def _parses_as_json(text: str) -> bool:
    try:
        json.loads(text)
    except (ValueError, RecursionError):
        return False
    return True


def looks_like_json(text: str) -> bool:
    """Leading { or [ and the trimmed text is one complete JSON value."""
    stripped = text.strip()
    if not stripped or stripped[0] not in "{[":
        return False
    return _parses_as_json(stripped)


def looks_like_ndjson(text: str) -> bool:
    """
    At least two non-blank lines, each independently a complete JSON value.

    A pretty-printed JSON document fails here because its inner lines
    ('"a": 1,') are not complete values on their own.
    """
    lines = _non_blank_lines(text)
    return len(lines) >= 2 and all(_parses_as_json(line.strip()) for line in lines)


def looks_like_markdown_table(text: str) -> bool:
    """A line containing '|' directly followed by a separator row."""
    return find_table_header(text.splitlines()) is not None


def looks_like_toml(text: str) -> bool:
    """Any [table] / [[array]] header line or key = value line."""
    for line in _content_lines(text):
        if re.match(TomlPatterns.TABLE_HEADER, line) or re.match(TomlPatterns.KEY_VALUE, line):
            return True
    return False


def looks_like_yaml(text: str) -> bool:
    """Any key: value line, block sequence item, or document start marker."""
    for line in _content_lines(text):
        if (
            re.match(YamlPatterns.KEY_VALUE, line)
            or re.match(YamlPatterns.SEQUENCE_ITEM, line)
            or re.match(YamlPatterns.DOCUMENT_START, line)
        ):
            return True
    return False


def looks_like_csv(text: str) -> bool:
    """
    At least two rows, every row with the same number of fields (two or more).

    Fields are counted with the csv module, so commas inside quoted cells do
    not change the column count. Blank lines are ignored.
    """
    try:
        rows = [
            row
            for row in csv.reader(io.StringIO(text))
            if row and not (len(row) == 1 and not row[0].strip())
        ]
    except csv.Error:
        return False

    if len(rows) < 2:
        return False

    widths = {len(row) for row in rows}
    return len(widths) == 1 and widths.pop() >= 2


# Evaluated in order; first match wins
DETECTION_RULES: List[Tuple[DetectedFormat, Callable[[str], bool]]] = [
    (DetectedFormat.JSON, looks_like_json),
    (DetectedFormat.NDJSON, looks_like_ndjson),
    (DetectedFormat.MARKDOWN_TABLE, looks_like_markdown_table),
    (DetectedFormat.TOML, looks_like_toml),
    (DetectedFormat.YAML, looks_like_yaml),
    (DetectedFormat.CSV, looks_like_csv),
]


def detect_format(text: str, max_bytes: Optional[int] = None) -> DetectedFormat:
    """
    Classify text into one DetectedFormat.

    Never raises: text that matches no rule (including empty text) is UNKNOWN.

    Args:
        text: Input text, normally already fence-stripped
        max_bytes: Optional byte budget; only the first max_bytes UTF-8 bytes are inspected

    Returns:
        The first DetectedFormat whose rule matches, else DetectedFormat.UNKNOWN
    """
    if max_bytes is not None:
        text = decode_input(text, max_bytes)

    if not text.strip():
        return DetectedFormat.UNKNOWN

    for index, (detected, rule) in enumerate(DETECTION_RULES, 1):
        if rule(text):
            log_detection(detected.value, index, len(text))
            return detected

    log_detection(DetectedFormat.UNKNOWN.value, len(DETECTION_RULES) + 1, len(text))
    return DetectedFormat.UNKNOWN
