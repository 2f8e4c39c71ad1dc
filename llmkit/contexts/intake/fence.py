"""
Raw input handling for the Intake context.

Turns caller-supplied bytes into text and strips the markdown code fence models
often wrap around structured output. Runs before format detection.
"""

import codecs
import re
from typing import Optional, Union

from llmkit.contexts.intake.logger import log_fence_stripped, log_truncated
from llmkit.contexts.intake.patterns import FencePatterns

_FENCED_BLOCK = re.compile(FencePatterns.FENCED_BLOCK, re.MULTILINE | re.DOTALL)
_INLINE_SPAN = re.compile(FencePatterns.INLINE_SPAN)


def decode_input(raw: Union[bytes, str], max_bytes: Optional[int] = None) -> str:
    """
    Decode raw input as UTF-8, applying an optional byte budget.

    Truncation happens on the encoded bytes. A multi-byte character cut in half
    by the budget is dropped rather than replaced. A leading BOM is removed;
    other invalid bytes become U+FFFD.

    Args:
        raw: Input bytes (str is accepted and encoded as UTF-8)
        max_bytes: Maximum number of bytes to keep (None for no limit)

    Returns:
        Decoded text
    """
    data = raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)

    if max_bytes is not None and len(data) > max_bytes:
        log_truncated(len(data), max_bytes)
        # Incremental decoder holds back an incomplete trailing sequence
        decoder = codecs.getincrementaldecoder("utf-8-sig")(errors="replace")
        return decoder.decode(data[:max_bytes], final=False)

    return data.decode("utf-8-sig", errors="replace")


def extract_fenced_block(text: str) -> str:
    """
    Return the content of the first fenced code block, or the text unchanged.

    Recognizes ``` and ~~~ fences of three or more characters with an optional
    language tag, closed by a line carrying the same marker. Text around the
    block (e.g., "Here is the JSON:") is discarded. An input that is a single
    inline code span (`...`) is unwrapped as well.

    Never fails: no fence is not an error.

    Args:
        text: Decoded input

    Returns:
        Inner content of the fence without its final line break, or the input as-is

    Example:
        extract_fenced_block('```json\\n{"a":1}\\n```')  # '{"a":1}'
    """
    match = _FENCED_BLOCK.search(text)
    if match:
        body = match.group("body")
        if body.endswith("\n"):
            body = body[:-1]
        if body.endswith("\r"):
            body = body[:-1]
        log_fence_stripped(match.group("lang"), len(body))
        return body

    inline = _INLINE_SPAN.match(text)
    if inline:
        body = inline.group("body")
        log_fence_stripped("", len(body))
        return body

    return text
