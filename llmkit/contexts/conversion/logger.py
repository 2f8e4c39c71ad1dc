"""
Conversion context logger.

Provides logging interface for conversion context with automatic [convert] prefix.
All conversion modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from llmkit.utils.logger import setup_logger as _setup_logger
from llmkit.utils.timestamp import now_exact

CONTEXT_PREFIX = "[convert]"


def setup_conversion_logger(
    log_dir: Optional[Path] = None, targets: Optional[str] = None, verbose: bool = False
) -> Optional[Path]:
    """
    Setup logger for conversion context.

    Args:
        log_dir: Directory for this conversion session (console only if None)
        targets: Requested targets, recorded in the provenance header
        verbose: Show DEBUG messages on the console

    Returns:
        Path to log file, or None

    Example:
        from llmkit.contexts.conversion.logger import setup_conversion_logger

        log_file = setup_conversion_logger(Path("outs/logs/convert_20251114_123456"))
    """
    return _setup_logger(
        context_name="convert",
        log_dir=log_dir,
        extra_provenance={"Started": now_exact(), "Targets": targets or "all"},
        console_level="DEBUG" if verbose else "WARNING",
    )


# Wrapper functions with automatic [convert] prefix


def _log_info(message: str) -> None:
    """Log info message with [convert] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [convert] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [convert] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [convert] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level conversion logging helpers


def log_conversion_start(input_bytes: int, targets: list[str], permissive: bool) -> None:
    """Log start of a conversion with its request parameters."""
    _log_info(f"Converting {input_bytes} bytes -> targets: {', '.join(targets) or '(none)'}")
    if permissive:
        _log_debug("Permissive parsing requested (reserved, no effect)")


def log_parse_result(format_name: str, kind: str) -> None:
    """Log the shape of the canonical value a parser produced."""
    _log_debug(f"Parsed {format_name} into {kind}")


def log_conversion_result(bundle, elapsed_time: float) -> None:
    """
    Log conversion result.

    Args:
        bundle: ConversionBundle from convert()
        elapsed_time: Time taken in seconds
    """
    rendered = ", ".join(bundle.renderings) or "(none)"
    _log_success(f"{bundle.format.value}: rendered {rendered} ({elapsed_time:.3f}s)")
    for target, reason in bundle.skipped.items():
        _log_info(f"  Skipped {target}: {reason}")


def log_conversion_failure(error: Exception) -> None:
    """Log a fatal pipeline failure with its stage."""
    stage = getattr(error, "stage", None)
    where = f" at stage '{stage.value}'" if stage is not None else ""
    _log_error(f"Conversion failed{where}: {error}")
