"""Utility functions for user text handling."""

import re


_WHITESPACE_RE = re.compile(r'\s+')


def clean_text(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim the result."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def count_characters(text: str) -> int:
    return len(text) if text else 0


def is_within_char_limit(text: str, limit: int) -> bool:
    """Check whether text fits in the given character limit."""
    return count_characters(text) <= limit


def truncate_text(text: str, length: int = 100) -> str:
    """
    Truncate text to a specific length with an ellipsis.

    Args:
        text: Text to truncate
        length: Maximum length before the ellipsis

    Returns:
        The original text if short enough, else the first `length`
        characters followed by "..."
    """
    if not text:
        return ""
    if len(text) <= length:
        return text

    return text[:length] + "..."
