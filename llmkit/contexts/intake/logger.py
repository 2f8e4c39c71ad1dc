"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def log_fence_stripped(language: str, inner_length: int) -> None:
    """Log removal of a surrounding code fence."""
    label = f"'{language}' " if language else ""
    _log_debug(f"Stripped {label}code fence ({inner_length} chars inside)")


def log_truncated(original_bytes: int, max_bytes: int) -> None:
    """Log input truncation to the byte budget."""
    _log_warning(f"Input truncated from {original_bytes} to {max_bytes} bytes")


def log_detection(format_name: str, rule_index: int, text_length: int) -> None:
    """Log which detection rule matched."""
    _log_debug(f"Detected {format_name} (rule {rule_index}, {text_length} chars)")
