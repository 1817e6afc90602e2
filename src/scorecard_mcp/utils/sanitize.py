"""Sanitization of untrusted text bound for log lines and the analysis prompt."""

import re

# Line breaks and tabs; folded to a single space
_LINE_CONTROLS = re.compile(r"[\t\n\r\x0b\x0c]+")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")

# Could close the quoted query slot or open a code fence in the prompt
_PROMPT_BREAKERS = re.compile(r"[\"`“”„]")


def sanitize_text(text: str | None, max_length: int = 500) -> str | None:
    """
    Flatten untrusted text onto one line for logging.

    Line breaks and tabs become spaces, other control characters are
    removed, and the result is truncated to max_length (plus "...").
    Apply to: raw provider output in log lines.

    Args:
        text: Text to sanitize (may be None)
        max_length: Maximum length before truncation

    Returns:
        Sanitized text or None if input was None
    """
    if text is None:
        return None

    text = _LINE_CONTROLS.sub(" ", text)
    text = _CONTROL_CHARS.sub("", text)

    if len(text) > max_length:
        text = text[:max_length] + "..."

    return text.strip()


def sanitize_query(text: str) -> str:
    """
    Clean a company query before it is quoted inside the analysis prompt.

    Drops control characters, straight/typographic double quotes and
    backticks, and collapses whitespace. Never truncates: the caller checks
    length on the cleaned text.
    """
    text = _LINE_CONTROLS.sub(" ", text)
    text = _CONTROL_CHARS.sub("", text)
    text = _PROMPT_BREAKERS.sub("", text)
    return " ".join(text.split())
