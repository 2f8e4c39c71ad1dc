"""
Conversion settings.

Resolution order (later wins):
1. Built-in defaults (all targets enabled, no byte budget)
2. Optional YAML settings file (LLMKIT_CONFIG_PATH or explicit path), loaded with OmegaConf
3. Environment variables (LLMKIT_DISABLED_TARGETS, LLMKIT_MAX_BYTES)

Example settings file:

    targets:
      yaml: true
      toml: false
      csv: true
    max_bytes: 1048576
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

# Targets that can be switched off. "json" is always available.
TOGGLEABLE_TARGETS = ("yaml", "toml", "csv")
ALL_TARGETS = ("json",) + TOGGLEABLE_TARGETS

DEFAULT_SETTINGS = {
    "targets": {name: True for name in TOGGLEABLE_TARGETS},
    "max_bytes": None,
    "permissive": False,
}


@dataclass(frozen=True)
class ConversionSettings:
    """Resolved settings for a conversion run."""

    enabled_targets: Tuple[str, ...] = ALL_TARGETS
    max_bytes: Optional[int] = None
    permissive: bool = False

    def is_enabled(self, target: str) -> bool:
        return target in self.enabled_targets


def _split_names(value: str) -> list[str]:
    return [name.strip().lower() for name in value.split(",") if name.strip()]


def load_settings(config_path: Path = None) -> ConversionSettings:
    """
    Load conversion settings from defaults, an optional YAML file and the environment.

    Args:
        config_path: Optional settings file (defaults to LLMKIT_CONFIG_PATH env variable)

    Returns:
        ConversionSettings

    Raises:
        ValueError: If the file names an unknown target or a value has the wrong type
        OSError: If the settings file cannot be read (e.g., FileNotFoundError)
    """
    merged = OmegaConf.create(DEFAULT_SETTINGS)

    if config_path is None and os.getenv("LLMKIT_CONFIG_PATH"):
        config_path = Path(os.getenv("LLMKIT_CONFIG_PATH"))

    if config_path is not None:
        merged = OmegaConf.merge(merged, OmegaConf.load(config_path))

    config = OmegaConf.to_container(merged, resolve=True)

    toggles = config.get("targets") or {}
    unknown = set(toggles) - set(TOGGLEABLE_TARGETS)
    if unknown:
        raise ValueError(
            f"Unknown target(s) in settings: {sorted(unknown)}. "
            f"Toggleable targets: {list(TOGGLEABLE_TARGETS)}"
        )

    disabled = {name for name, enabled in toggles.items() if not enabled}

    env_disabled = set(_split_names(os.getenv("LLMKIT_DISABLED_TARGETS", "")))
    if env_disabled - set(TOGGLEABLE_TARGETS):
        raise ValueError(
            f"LLMKIT_DISABLED_TARGETS may only name {list(TOGGLEABLE_TARGETS)}, "
            f"got: {sorted(env_disabled)}"
        )
    disabled.update(env_disabled)

    max_bytes = config.get("max_bytes")
    if os.getenv("LLMKIT_MAX_BYTES"):
        max_bytes = os.getenv("LLMKIT_MAX_BYTES")
    if max_bytes is not None:
        max_bytes = int(max_bytes)
        if max_bytes < 0:
            raise ValueError(f"max_bytes must be non-negative, got: {max_bytes}")

    return ConversionSettings(
        enabled_targets=tuple(name for name in ALL_TARGETS if name not in disabled),
        max_bytes=max_bytes,
        permissive=bool(config.get("permissive", False)),
    )


@lru_cache(maxsize=1)
def get_settings() -> ConversionSettings:
    """Default settings, loaded once per process."""
    return load_settings()
