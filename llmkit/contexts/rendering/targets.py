"""
Target registry for the Rendering context.

Maps target names to serializers, resolves a caller's requested targets against
the targets enabled in settings, and renders each target independently so one
narrowing failure never affects its siblings.
"""

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from llmkit.contexts.rendering.logger import log_target_rendered, log_target_skipped
from llmkit.contexts.rendering.serializers import (
    render_csv,
    render_json_pretty,
    render_toml,
    render_yaml,
)
from llmkit.utils.canonical import CanonicalValue
from llmkit.utils.exceptions import ConfigurationError, NarrowingFailureError
from llmkit.utils.settings import ALL_TARGETS, ConversionSettings

TARGET_RENDERERS: Dict[str, Callable[[CanonicalValue], str]] = {
    "json": render_json_pretty,
    "yaml": render_yaml,
    "toml": render_toml,
    "csv": render_csv,
}

# Recognized as formats but only ever parsed, never rendered
PARSE_ONLY_FORMATS = {"markdown_table", "md", "ndjson"}


def resolve_targets(
    requested: Optional[Iterable[str]], settings: ConversionSettings
) -> List[str]:
    """
    Normalize requested target names and check they can be rendered.

    Names are trimmed and lower-cased; blanks and duplicates are dropped
    (first occurrence keeps its position).

    Args:
        requested: Target names, or None for every enabled target
        settings: Settings listing the enabled targets

    Returns:
        Ordered list of target names

    Raises:
        ConfigurationError: If a name is unknown, parse-only, or disabled in settings
    """
    if requested is None:
        return [name for name in ALL_TARGETS if settings.is_enabled(name)]
    if isinstance(requested, str):
        requested = requested.split(",")

    targets: List[str] = []
    for raw_name in requested:
        name = raw_name.strip().lower()
        if not name or name in targets:
            continue
        if name in PARSE_ONLY_FORMATS:
            raise ConfigurationError(f"'{name}' can be parsed but not generated", name)
        if name not in TARGET_RENDERERS:
            raise ConfigurationError(
                f"Unknown target '{name}'. Available targets: {list(TARGET_RENDERERS)}", name
            )
        if not settings.is_enabled(name):
            raise ConfigurationError(f"Target '{name}' is disabled in settings", name)
        targets.append(name)
    return targets


def render_targets(
    value: CanonicalValue, targets: Iterable[str]
) -> Tuple[Dict[str, str], Dict[str, str]]:
    """
    Render a canonical value into each target independently.

    Args:
        value: Canonical value
        targets: Target names from resolve_targets()

    Returns:
        (renderings, skipped): target -> rendered text, and target -> reason for
        each target whose format cannot represent the value
    """
    renderings: Dict[str, str] = {}
    skipped: Dict[str, str] = {}

    for target in targets:
        try:
            rendered = TARGET_RENDERERS[target](value)
        except NarrowingFailureError as e:
            skipped[target] = e.reason
            log_target_skipped(target, e.reason)
            continue
        renderings[target] = rendered
        log_target_rendered(target, len(rendered))

    return renderings, skipped
