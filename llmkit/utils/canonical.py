"""
Canonical Value

The single intermediate representation shared by every parser and serializer.

A canonical value is a plain JSON-compatible Python tree:
- None (null)
- bool
- int / finite float (kept distinct)
- str
- list (ordered sequence)
- dict with str keys (ordered mapping, insertion order preserved)

Parsers pass their raw output through canonicalize(); serializers dispatch on
kind_of() and never need to know which parser produced the value.
"""

import math
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, List, Union

CanonicalValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


class ValueKind(str, Enum):
    """Variant tag of a canonical value."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"

    @property
    def is_scalar(self) -> bool:
        return self not in (ValueKind.SEQUENCE, ValueKind.MAPPING)


def kind_of(value: Any) -> ValueKind:
    """
    Return the variant tag of a canonical value.

    Raises:
        TypeError: If value is not part of the canonical model
    """
    # bool before int: bool is an int subclass
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.SEQUENCE
    if isinstance(value, dict):
        return ValueKind.MAPPING
    raise TypeError(f"Not a canonical value: {type(value).__name__}")


def _canonical_key(key: Any) -> str:
    """Mapping keys are always strings; render other scalars the way JSON would."""
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (int, float)):
        return str(key)
    if isinstance(key, (datetime, date, time)):
        return key.isoformat()
    raise TypeError(f"Unsupported mapping key type: {type(key).__name__}")


def canonicalize(value: Any) -> CanonicalValue:
    """
    Normalize parser output into the canonical model.

    - tuples become lists
    - mapping keys become strings
    - date/datetime/time objects (TOML) become ISO 8601 strings
    - NaN and infinities (TOML inf/nan) are rejected

    Args:
        value: Output of a format library (json, yaml, tomllib, csv)

    Returns:
        A new canonical tree

    Raises:
        TypeError: If a value has no canonical equivalent
    """
    if isinstance(value, float) and not math.isfinite(value):
        raise TypeError(f"Non-finite float has no JSON form: {value}")
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {_canonical_key(k): canonicalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


def describe(value: Any) -> str:
    """Short human-readable shape of a value, for error messages."""
    kind = kind_of(value)
    if kind is ValueKind.SEQUENCE:
        return f"sequence of {len(value)} items"
    if kind is ValueKind.MAPPING:
        return f"mapping with {len(value)} keys"
    return kind.value
