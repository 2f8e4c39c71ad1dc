"""
Conversion orchestrator.

Runs one input through the pipeline:

    Received -> Extracted -> Detected -> Parsed -> Rendered -> Done

- Received:  requested targets are resolved (ConfigurationError before any parsing)
- Extracted: bytes decoded, byte budget applied, code fence stripped
- Detected:  format classified (UNKNOWN -> DetectionInconclusiveError)
- Parsed:    detected format parsed to a canonical value (failure -> ParseFailureError)
- Rendered:  Beautified/normal JSON plus each requested target; a target that
             cannot hold the value is skipped and recorded, never fatal
- Done:      immutable ConversionBundle returned

Each call is independent and keeps no state between invocations.
"""

import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from llmkit.contexts.conversion.logger import (
    log_conversion_failure,
    log_conversion_result,
    log_conversion_start,
    log_parse_result,
)
from llmkit.contexts.conversion.parsers import parse_text
from llmkit.contexts.intake.detector import DetectedFormat, detect_format
from llmkit.contexts.intake.fence import decode_input, extract_fenced_block
from llmkit.contexts.rendering.serializers import render_json_compact, render_json_pretty
from llmkit.contexts.rendering.targets import render_targets, resolve_targets
from llmkit.utils.canonical import CanonicalValue, describe
from llmkit.utils.exceptions import ConversionError, DetectionInconclusiveError
from llmkit.utils.settings import ConversionSettings, get_settings


def _frozen(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ConversionBundle:
    """
    Result of one conversion.

    Attributes:
        format: Detected input format
        original: Input text after decoding and fence stripping
        beautified: Pretty (2-space) JSON rendering
        normal: Compact single-line JSON rendering
        renderings: Target name -> rendered text, for every target that succeeded
        skipped: Target name -> reason, for requested targets that could not hold the value
        value: The canonical value all renderings came from
    """

    format: DetectedFormat
    original: str
    beautified: str
    normal: str
    renderings: Mapping[str, str] = field(default_factory=dict)
    skipped: Mapping[str, str] = field(default_factory=dict)
    value: CanonicalValue = None

    def __post_init__(self):
        object.__setattr__(self, "renderings", _frozen(self.renderings))
        object.__setattr__(self, "skipped", _frozen(self.skipped))

    def as_dict(self) -> Dict[str, Any]:
        """
        Bundle as a plain mapping.

        Keys: Format, Original, Beautified, normal, plus one key per rendered target.
        """
        result = {
            "Format": self.format.value,
            "Original": self.original,
            "Beautified": self.beautified,
            "normal": self.normal,
        }
        result.update(self.renderings)
        return result


def convert(
    raw: Union[bytes, str],
    targets: Optional[Iterable[str]] = None,
    permissive: bool = False,
    max_bytes: Optional[int] = None,
    settings: Optional[ConversionSettings] = None,
) -> ConversionBundle:
    """
    Detect, parse and re-render structured text.

    Args:
        raw: Input bytes (or str)
        targets: Target names (json, yaml, toml, csv); None for every enabled target
        permissive: Reserved; accepted and ignored
        max_bytes: Byte budget for the input (defaults to settings.max_bytes)
        settings: Conversion settings (defaults to get_settings())

    Returns:
        ConversionBundle

    Raises:
        ConfigurationError: A requested target is unknown or disabled
        DetectionInconclusiveError: No format detection rule matched
        ParseFailureError: The detected format's parser rejected the input

    Example:
        bundle = convert(b'{"a":1,"b":"x"}', targets=["yaml"])
        bundle.format            # DetectedFormat.JSON
        bundle.renderings["yaml"]  # 'a: 1\\nb: x\\n'
    """
    start_time = time.time()
    settings = settings or get_settings()
    if max_bytes is None:
        max_bytes = settings.max_bytes
    permissive = permissive or settings.permissive

    try:
        # Received
        target_names = resolve_targets(targets, settings)
        log_conversion_start(len(raw), target_names, permissive)

        # Extracted
        original = extract_fenced_block(decode_input(raw, max_bytes))

        # Detected
        detected = detect_format(original)
        if detected is DetectedFormat.UNKNOWN:
            raise DetectionInconclusiveError(
                "Input does not match any supported format", snippet=original
            )

        # Parsed
        value = parse_text(original, detected)
        log_parse_result(detected.value, describe(value))

        # Rendered
        renderings, skipped = render_targets(value, target_names)
    except ConversionError as e:
        log_conversion_failure(e)
        raise

    bundle = ConversionBundle(
        format=detected,
        original=original,
        beautified=render_json_pretty(value),
        normal=render_json_compact(value),
        renderings=renderings,
        skipped=skipped,
        value=value,
    )
    log_conversion_result(bundle, time.time() - start_time)
    return bundle


def convert_map(
    raw: Union[bytes, str],
    targets: Optional[Iterable[str]] = None,
    allow_permissive: bool = False,
    max_bytes: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Convert and return the bundle as a plain mapping.

    Same arguments and errors as convert(); see ConversionBundle.as_dict() for keys.

    Example:
        convert_map(b'{"a":1}', targets=["toml"])
        # {'Format': 'json', 'Original': '{"a":1}', 'Beautified': '{\\n  "a": 1\\n}',
        #  'normal': '{"a":1}', 'toml': 'a = 1\\n'}
    """
    return convert(raw, targets, allow_permissive, max_bytes).as_dict()
