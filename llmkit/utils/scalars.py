"""
Scalar resolution rule shared by the YAML, CSV and markdown table parsers.

Untyped text cells are promoted opportunistically:

    ""  ~  null  Null  NULL          -> None
    true  True  TRUE  false  ...     -> bool
    42  -7  +3  0                    -> int   ("007" stays a string)
    1.5  -0.25  1e10  2.5E-3         -> float (".5", "1.", "inf", "nan", "1e400" stay strings)
    anything else                    -> str

The YAML loader below uses the same patterns as its implicit resolvers, so a
value in a YAML document and the same value in a CSV cell resolve identically.
YAML-1.1 extras (yes/no/on/off, octal, sexagesimal, timestamps) are not resolved.
The YAML dumper quotes any string that either rule would read back as another type.
"""

import math
import re
from typing import Union

import yaml

NULL_PATTERN = re.compile(r"^(?:~|null|Null|NULL|)$")
BOOL_PATTERN = re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$")
INT_PATTERN = re.compile(r"^[-+]?(?:0|[1-9][0-9]*)$")
FLOAT_PATTERN = re.compile(
    r"^[-+]?(?:0|[1-9][0-9]*)(?:\.[0-9]+(?:[eE][-+]?[0-9]+)?|[eE][-+]?[0-9]+)$"
)

Scalar = Union[None, bool, int, float, str]

# (tag, pattern, first characters) for each typed scalar
_IMPLICIT_RESOLVERS = [
    ("tag:yaml.org,2002:null", NULL_PATTERN, ["~", "n", "N", ""]),
    ("tag:yaml.org,2002:bool", BOOL_PATTERN, list("tTfF")),
    ("tag:yaml.org,2002:int", INT_PATTERN, list("-+0123456789")),
    ("tag:yaml.org,2002:float", FLOAT_PATTERN, list("-+0123456789")),
]


def coerce_scalar(text: str) -> Scalar:
    """
    Resolve an untyped text cell to a scalar.

    Args:
        text: Cell content (callers trim surrounding whitespace first)

    Returns:
        None, bool, int, float or the original string

    Examples:
        coerce_scalar("30")     # 30
        coerce_scalar("007")    # "007"
        coerce_scalar("1e10")   # 10000000000.0
        coerce_scalar("1e400")  # "1e400" (overflows to inf)
        coerce_scalar("TRUE")   # True
        coerce_scalar("")       # None
    """
    if NULL_PATTERN.match(text):
        return None
    if BOOL_PATTERN.match(text):
        return text.lower() == "true"
    if INT_PATTERN.match(text):
        return int(text)
    if FLOAT_PATTERN.match(text):
        value = float(text)
        return value if math.isfinite(value) else text
    return text


class ScalarRuleLoader(yaml.SafeLoader):
    """SafeLoader whose implicit scalar typing follows coerce_scalar()."""


def _construct_finite_float(loader: ScalarRuleLoader, node: yaml.ScalarNode) -> Scalar:
    value = loader.construct_yaml_float(node)
    if math.isfinite(value):
        return value
    return loader.construct_scalar(node)


# Replace the inherited YAML 1.1 resolvers wholesale
ScalarRuleLoader.yaml_implicit_resolvers = {}
for _tag, _pattern, _first in _IMPLICIT_RESOLVERS:
    ScalarRuleLoader.add_implicit_resolver(_tag, _pattern, _first)
# Keep "<<" merge keys working
ScalarRuleLoader.add_implicit_resolver("tag:yaml.org,2002:merge", re.compile(r"^(?:<<)$"), ["<"])
ScalarRuleLoader.add_constructor("tag:yaml.org,2002:float", _construct_finite_float)


class ScalarRuleDumper(yaml.SafeDumper):
    """
    SafeDumper that quotes strings coerce_scalar() would retype.

    The YAML 1.1 resolvers stay in place as well, so output remains
    unambiguous for other YAML loaders ("yes", "007" are quoted too).
    """


for _tag, _pattern, _first in _IMPLICIT_RESOLVERS:
    ScalarRuleDumper.add_implicit_resolver(_tag, _pattern, _first)
