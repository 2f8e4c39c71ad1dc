"""Exceptions raised by the conversion pipeline, tagged with the stage that failed."""

from enum import Enum
from typing import Optional


class PipelineStage(str, Enum):
    """Stages a conversion passes through, in order."""

    RECEIVED = "received"
    EXTRACTED = "extracted"
    DETECTED = "detected"
    PARSED = "parsed"
    RENDERED = "rendered"
    DONE = "done"


class ConversionError(Exception):
    """
    Base class for pipeline failures.

    Attributes:
        message: Error description
        stage: Pipeline stage at which the failure happened
        format_name: Responsible input format or target format, when there is one
        snippet: Offending input text, if useful for diagnosis
    """

    stage: PipelineStage = PipelineStage.RECEIVED

    def __init__(
        self,
        message: str,
        format_name: Optional[str] = None,
        snippet: Optional[str] = None,
    ):
        self.message = message
        self.format_name = format_name
        self.snippet = snippet

        # Build enhanced error message
        parts = [message]

        if snippet:
            # Truncate snippet if too long
            snippet = snippet[:200] + "..." if len(snippet) > 200 else snippet
            parts.append(f"\nInput:\n{snippet}")

        super().__init__("\n".join(parts))


class DetectionInconclusiveError(ConversionError):
    """Raised when no detection rule matched the input (format is unknown)."""

    stage = PipelineStage.DETECTED


class ParseFailureError(ConversionError):
    """
    Raised when the parser for the detected format rejects the input.

    There is no fallback to another format: a mismatch between detection and
    parsing is reported as-is.
    """

    stage = PipelineStage.PARSED

    def __init__(self, format_name: str, message: str, snippet: Optional[str] = None):
        super().__init__(f"Failed to parse input as {format_name}: {message}", format_name, snippet)


class NarrowingFailureError(ConversionError):
    """
    Raised when a target format cannot represent the canonical value.

    Non-fatal: the orchestrator omits the target from the bundle and records the reason.
    """

    stage = PipelineStage.RENDERED

    def __init__(self, target: str, reason: str):
        self.reason = reason
        super().__init__(f"Cannot render {target}: {reason}", target)

    @property
    def target(self) -> str:
        return self.format_name


class ConfigurationError(ConversionError, ValueError):
    """Raised before any parsing when a requested target is unknown or disabled."""

    stage = PipelineStage.RECEIVED
