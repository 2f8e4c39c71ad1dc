"""
Intake Pattern Constants

Regex patterns used for fence extraction and format detection.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

# TOML key forms: bare, basic-quoted, literal-quoted
_TOML_KEY = r"""(?:[A-Za-z0-9_-]+|"[^"\n]*"|'[^'\n]*')"""


@dataclass(frozen=True)
class FencePatterns:
    """
    Markdown code fence patterns.

    Used to strip the fence models often wrap around structured output.
    """
    # Opening ``` or ~~~ (3+), optional info string, body, then a closing run of the
    # same marker at least as long as the opener, at the end of a line (its own or
    # the last content line, as in '{"a":1}```')
    FENCED_BLOCK: str = (
        r"^[ \t]*(?P<fence>(?P<mark>[`~])(?P=mark){2,})[ \t]*(?P<lang>[^\s`]*)[^\n`]*\n"
        r"(?P<body>.*?)"
        r"[ \t]*(?P=fence)(?P=mark)*[ \t]*\r?$"
    )
    # Whole input wrapped in a single inline code span
    INLINE_SPAN: str = r"^\s*`(?P<body>[^`]+)`\s*$"


@dataclass(frozen=True)
class MarkdownTablePatterns:
    """
    GitHub-flavored markdown table patterns.

    Used for table detection and row splitting.
    """
    # |---|:--:|--:| with optional outer pipes
    SEPARATOR_ROW: str = r"^\s*\|?\s*:?-+:?\s*(?:\|\s*:?-+:?\s*)*\|?\s*$"
    # Cell boundary: pipe not escaped with a backslash
    CELL_DELIMITER: str = r"(?<!\\)\|"


@dataclass(frozen=True)
class TomlPatterns:
    """
    TOML line patterns.

    A single match anywhere in the text is enough for detection.
    """
    # [table] or [[array.of.tables]]
    TABLE_HEADER: str = r"""^\s*\[\[?\s*[A-Za-z0-9_\-."' ]+?\s*\]\]?\s*(?:#.*)?$"""
    # key = value, key.sub = value, "quoted key" = value
    KEY_VALUE: str = rf"^\s*{_TOML_KEY}(?:\s*\.\s*{_TOML_KEY})*\s*=\s*\S"


@dataclass(frozen=True)
class YamlPatterns:
    """
    YAML block-style line patterns.

    Used only after JSON, NDJSON, markdown and TOML have been ruled out.
    """
    # key: value / key: (nested block follows) / - key: value
    KEY_VALUE: str = (
        r"""^\s*(?:-\s+)?(?:"[^"\n]*"|'[^'\n]*'|[^\s#"'\-:?,\[\]{}|>][^:\n]*?)"""
        r"\s*:(?:[ \t]+\S.*|[ \t]*)$"
    )
    # - item
    SEQUENCE_ITEM: str = r"^\s*-(?:[ \t]+\S.*|[ \t]*)$"
    DOCUMENT_START: str = r"^---(?:[ \t].*)?$"
    COMMENT: str = r"^\s*#"


def is_table_separator(line: str) -> bool:
    """Check whether a line is a markdown table separator row (must contain a pipe)."""
    return "|" in line and re.match(MarkdownTablePatterns.SEPARATOR_ROW, line) is not None


def find_table_header(lines: List[str]) -> Optional[int]:
    """
    Find the first markdown table header line.

    A header is a line containing '|' immediately followed by a separator row.

    Args:
        lines: Text split into lines

    Returns:
        Index of the header line, or None if no table is present
    """
    for i in range(len(lines) - 1):
        if "|" in lines[i] and is_table_separator(lines[i + 1]):
            return i
    return None


def split_table_row(line: str) -> List[str]:
    """
    Split a markdown table row into trimmed cells.

    Outer pipes are optional. Escaped pipes (\\|) stay inside their cell as '|'.

    Example:
        split_table_row("| a | b \\| c |")  # ["a", "b | c"]
    """
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]

    cells = re.split(MarkdownTablePatterns.CELL_DELIMITER, row)
    return [cell.strip().replace("\\|", "|") for cell in cells]
