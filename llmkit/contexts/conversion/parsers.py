"""
Format parsers for the Conversion context.

One parser per DetectedFormat. Each turns text into a canonical value
(see llmkit.utils.canonical) or raises ParseFailureError naming the format.
There is no fallback to another format when the detected one fails.
"""

import csv
import io
import json
import tomllib
from typing import Any, Callable, Dict, List, Tuple

import yaml

from llmkit.contexts.conversion.logger import _log_debug
from llmkit.contexts.intake.detector import DetectedFormat
from llmkit.contexts.intake.patterns import find_table_header, split_table_row
from llmkit.utils.canonical import CanonicalValue, canonicalize
from llmkit.utils.exceptions import DetectionInconclusiveError, ParseFailureError
from llmkit.utils.scalars import ScalarRuleLoader, coerce_scalar


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def _loads_strict(text: str) -> Any:
    """json.loads without the NaN / Infinity / -Infinity extension."""
    return json.loads(text, parse_constant=_reject_constant)


def parse_json(text: str) -> CanonicalValue:
    """Parse a single JSON document."""
    try:
        return canonicalize(_loads_strict(text.strip()))
    except (ValueError, RecursionError) as e:
        raise ParseFailureError(DetectedFormat.JSON.value, str(e), text) from e


def parse_ndjson(text: str) -> CanonicalValue:
    """
    Parse newline-delimited JSON into a sequence, one element per non-blank line.

    Raises:
        ParseFailureError: Naming the first line that is not a complete JSON value
    """
    values = []
    for line_number, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        try:
            values.append(_loads_strict(line))
        except (ValueError, RecursionError) as e:
            raise ParseFailureError(
                DetectedFormat.NDJSON.value, f"line {line_number}: {e}", line
            ) from e
    return canonicalize(values)


def parse_yaml(text: str) -> CanonicalValue:
    """
    Parse YAML with the shared scalar rule.

    A stream with several documents (separated by ---) becomes a sequence of
    documents; a single document is returned as-is.
    """
    try:
        documents = list(yaml.load_all(text, Loader=ScalarRuleLoader))
    except yaml.YAMLError as e:
        raise ParseFailureError(DetectedFormat.YAML.value, str(e), text) from e

    if len(documents) > 1:
        _log_debug(f"YAML stream holds {len(documents)} documents")
        return canonicalize(documents)
    return canonicalize(documents[0] if documents else None)


def parse_toml(text: str) -> CanonicalValue:
    """Parse a TOML document into nested mappings. Dates and times become ISO strings."""
    try:
        return canonicalize(tomllib.loads(text))
    except tomllib.TOMLDecodeError as e:
        raise ParseFailureError(DetectedFormat.TOML.value, str(e), text) from e


def _rows_to_records(
    format_name: str, headers: List[str], rows: List[Tuple[int, List[str]]], pad: bool
) -> List[Dict[str, Any]]:
    """
    Zip each row with the headers into a mapping of coerced cells.

    Args:
        format_name: Reported in errors
        headers: Column names (already trimmed)
        rows: (source line number, raw cell strings) for each data row
        pad: If True, short rows are padded with None and extra cells dropped
             (markdown); if False, any width mismatch fails (CSV)
    """
    if len(set(headers)) != len(headers):
        duplicates = sorted({h for h in headers if headers.count(h) > 1})
        raise ParseFailureError(format_name, f"duplicate column names: {duplicates}")

    records = []
    for line_number, row in rows:
        if len(row) != len(headers) and not pad:
            raise ParseFailureError(
                format_name,
                f"line {line_number} has {len(row)} fields, header has {len(headers)}",
            )
        cells = [coerce_scalar(cell.strip()) for cell in row[: len(headers)]]
        cells += [None] * (len(headers) - len(cells))
        records.append(dict(zip(headers, cells)))
    return records


def parse_csv(text: str) -> CanonicalValue:
    """
    Parse CSV into a sequence of row mappings keyed by the header row.

    Headers and cells are trimmed; cells are typed with coerce_scalar()
    (so "30" becomes 30 and an empty cell becomes None). Blank lines are skipped.
    """
    # line_num is the source line a record ends on, so blank lines keep numbers accurate
    reader = csv.reader(io.StringIO(text))
    try:
        rows = [(reader.line_num, row) for row in reader if any(cell.strip() for cell in row)]
    except csv.Error as e:
        raise ParseFailureError(DetectedFormat.CSV.value, str(e), text) from e

    if not rows:
        raise ParseFailureError(DetectedFormat.CSV.value, "no header row", text)

    headers = [cell.strip() for cell in rows[0][1]]
    return _rows_to_records(DetectedFormat.CSV.value, headers, rows[1:], pad=False)


def parse_markdown_table(text: str) -> CanonicalValue:
    """
    Parse the first markdown table into a sequence of row mappings.

    Rows run from the line after the separator to the first line without a pipe.
    Short rows are padded with None; cells beyond the header width are ignored.
    """
    lines = text.splitlines()
    header_index = find_table_header(lines)
    if header_index is None:
        raise ParseFailureError(
            DetectedFormat.MARKDOWN_TABLE.value, "no header/separator row pair", text
        )

    headers = split_table_row(lines[header_index])

    rows = []
    for line_number, line in enumerate(lines[header_index + 2 :], header_index + 3):
        if "|" not in line:
            break
        rows.append((line_number, split_table_row(line)))

    return _rows_to_records(DetectedFormat.MARKDOWN_TABLE.value, headers, rows, pad=True)


PARSERS: Dict[DetectedFormat, Callable[[str], CanonicalValue]] = {
    DetectedFormat.JSON: parse_json,
    DetectedFormat.NDJSON: parse_ndjson,
    DetectedFormat.YAML: parse_yaml,
    DetectedFormat.TOML: parse_toml,
    DetectedFormat.CSV: parse_csv,
    DetectedFormat.MARKDOWN_TABLE: parse_markdown_table,
}


def parse_text(text: str, detected: DetectedFormat) -> CanonicalValue:
    """
    Parse text with the parser for the detected format.

    Args:
        text: Fence-stripped input text
        detected: Format chosen by detect_format()

    Returns:
        Canonical value

    Raises:
        DetectionInconclusiveError: If detected is UNKNOWN
        ParseFailureError: If the parser rejects the text
    """
    if detected is DetectedFormat.UNKNOWN:
        raise DetectionInconclusiveError("No parser for unknown format", snippet=text)

    parser = PARSERS[detected]
    try:
        return parser(text)
    except TypeError as e:
        # canonicalize() met a value with no canonical equivalent
        raise ParseFailureError(detected.value, str(e)) from e
