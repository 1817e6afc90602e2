"""Recover the JSON object embedded in raw provider text."""

import json
import logging
import re
from typing import Any

from scorecard_mcp.analysis.errors import PayloadParseError
from scorecard_mcp.utils.sanitize import sanitize_text

logger = logging.getLogger(__name__)

# Optional language-tagged opening fence (```json, ```JSON, ```) and closing fence
_OPENING_FENCE = re.compile(r"\A\s*```[A-Za-z0-9_+-]*[ \t]*\r?\n?")
_CLOSING_FENCE = re.compile(r"\r?\n?```\s*\Z")


def strip_fences(raw: str) -> str:
    """
    Remove a leading/trailing code fence and surrounding whitespace.

    Only the outermost fence pair is removed. Fences embedded elsewhere in
    the text are left in place and will fail the parse.

    Args:
        raw: Raw provider text

    Returns:
        Text with fences removed, stripped of whitespace
    """
    text = _OPENING_FENCE.sub("", raw, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def _reject_constant(name: str) -> Any:
    # json accepts NaN/Infinity by default; they are not valid JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


def extract_payload(raw: str | None) -> dict[str, Any]:
    """
    Parse the provider text into an object tree.

    No partial recovery is attempted: either the whole (fence-stripped) text
    is one JSON object, or the call fails.

    Args:
        raw: Raw provider text, possibly fenced

    Returns:
        Parsed JSON object

    Raises:
        PayloadParseError: If the text is not a single JSON object
    """
    raw_text = raw or ""
    candidate = strip_fences(raw_text)

    if not candidate:
        logger.error("Provider returned an empty analysis response")
        raise PayloadParseError("Provider response is empty", raw_text=raw_text)

    try:
        parsed = json.loads(candidate, parse_constant=_reject_constant)
    except ValueError as e:
        logger.error(
            f"Failed to parse JSON from provider output: {e}. "
            f"Raw text: {sanitize_text(raw_text, max_length=300)}"
        )
        raise PayloadParseError(f"Provider response is not valid JSON: {e}", raw_text=raw_text) from e

    if not isinstance(parsed, dict):
        logger.error(f"Provider output parsed to {type(parsed).__name__}, expected an object")
        raise PayloadParseError(
            f"Provider response is a JSON {type(parsed).__name__}, expected an object",
            raw_text=raw_text,
        )

    return parsed
