"""
Rendering Context

Responsibilities:
- Serializes canonical values to JSON (pretty and compact), YAML, TOML and CSV
- Reports narrowing failures when a target cannot represent a value
- Resolves requested target names against enabled targets

Owns: Serializers, target registry
Never: Inspects the input text or knows which parser produced a value
"""

from llmkit.contexts.rendering.serializers import (
    render_csv,
    render_json_compact,
    render_json_pretty,
    render_toml,
    render_yaml,
)
from llmkit.contexts.rendering.targets import TARGET_RENDERERS, render_targets, resolve_targets

__all__ = [
    "render_csv",
    "render_json_compact",
    "render_json_pretty",
    "render_toml",
    "render_yaml",
    "TARGET_RENDERERS",
    "render_targets",
    "resolve_targets",
]
