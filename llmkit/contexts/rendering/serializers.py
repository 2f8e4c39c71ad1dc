"""
Format serializers for the Rendering context.

Each serializer turns a canonical value into a string. JSON and YAML accept
every canonical value. TOML and CSV have narrower type systems and raise
NarrowingFailureError instead of silently dropping or flattening data:

- TOML: the document must be a mapping; null mapping values are omitted
  (TOML has no null), a null inside an array cannot be represented.
- CSV: the value must be a sequence of mappings with scalar values.
"""

import csv
import io
import json
from typing import Any, Dict, List

import tomli_w
import yaml

from llmkit.utils.canonical import CanonicalValue, ValueKind, describe, kind_of
from llmkit.utils.exceptions import NarrowingFailureError
from llmkit.utils.scalars import ScalarRuleDumper


def render_json_pretty(value: CanonicalValue) -> str:
    """
    Pretty JSON with two-space indentation. Non-ASCII text is kept verbatim.

    Strict JSON only: NaN and Infinity raise ValueError (canonical values never hold them).
    """
    return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)


def render_json_compact(value: CanonicalValue) -> str:
    """Single-line JSON without whitespace between tokens."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def render_yaml(value: CanonicalValue) -> str:
    """
    Block-style YAML with key order preserved.

    Strings that a YAML loader would read back as another type (e.g., "007",
    "1e10", "yes", "null") are quoted by the dumper.
    """
    return yaml.dump(
        value,
        Dumper=ScalarRuleDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
    )


def _drop_nulls(value: Any, path: str) -> Any:
    """
    Prepare a canonical tree for TOML.

    Null mapping values are omitted. Nulls inside sequences raise, since removing
    them would shift positions.
    """
    kind = kind_of(value)
    if kind is ValueKind.MAPPING:
        return {
            key: _drop_nulls(item, f"{path}.{key}" if path else key)
            for key, item in value.items()
            if item is not None
        }
    if kind is ValueKind.SEQUENCE:
        for index, item in enumerate(value):
            if item is None:
                raise NarrowingFailureError("toml", f"null at {path}[{index}] has no TOML form")
        return [_drop_nulls(item, f"{path}[{index}]") for index, item in enumerate(value)]
    return value


def render_toml(value: CanonicalValue) -> str:
    """
    TOML document from a canonical mapping.

    Raises:
        NarrowingFailureError: If value is not a mapping, or holds a null inside an array
    """
    if kind_of(value) is not ValueKind.MAPPING:
        raise NarrowingFailureError("toml", f"TOML documents must be tables, got {describe(value)}")

    try:
        return tomli_w.dumps(_drop_nulls(value, ""))
    except (TypeError, ValueError) as e:
        raise NarrowingFailureError("toml", str(e)) from e


def _csv_cell(value: Any) -> str:
    """Text for one CSV cell: null is empty, booleans are lowercase."""
    kind = kind_of(value)
    if kind is ValueKind.NULL:
        return ""
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind in (ValueKind.INTEGER, ValueKind.FLOAT):
        return json.dumps(value)
    return value


def render_csv(value: CanonicalValue) -> str:
    """
    CSV table from a sequence of flat mappings.

    The header is the union of all row keys in first-seen order; a row without
    a column gets an empty cell. Lines end with a bare newline.

    Raises:
        NarrowingFailureError: If value is not a sequence of mappings, or a cell is nested
    """
    if kind_of(value) is not ValueKind.SEQUENCE:
        raise NarrowingFailureError(
            "csv", f"CSV requires a sequence of mappings, got {describe(value)}"
        )

    headers: Dict[str, None] = {}
    for index, row in enumerate(value):
        if kind_of(row) is not ValueKind.MAPPING:
            raise NarrowingFailureError(
                "csv", f"CSV requires a sequence of mappings, item {index} is {describe(row)}"
            )
        for key, cell in row.items():
            if not kind_of(cell).is_scalar:
                raise NarrowingFailureError(
                    "csv", f"row {index} column '{key}' is a nested {kind_of(cell).value}"
                )
            headers.setdefault(key, None)

    columns: List[str] = list(headers)
    if not columns:
        return ""

    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(columns)
    for row in value:
        writer.writerow([_csv_cell(row.get(column)) for column in columns])
    return output.getvalue()
