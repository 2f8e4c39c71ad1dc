"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def log_target_rendered(target: str, length: int) -> None:
    """Log a successful target rendering."""
    _log_debug(f"Rendered {target} ({length} chars)")


def log_target_skipped(target: str, reason: str) -> None:
    """Log a target omitted from the bundle because its format cannot hold the value."""
    _log_warning(f"Skipped {target}: {reason}")
