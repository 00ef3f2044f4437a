"""
Input sanitization utilities.

Shared sanitization functions to prevent prompt injection attacks.
This module has no dependencies on models or services to avoid circular imports.
"""

import re

from core.constants import MAX_PREFERENCE_LENGTH


def sanitize_user_input(value: str, max_length: int = MAX_PREFERENCE_LENGTH) -> str:
    """
    Sanitize user input by removing control characters and limiting length.

    This function is designed to prevent prompt injection attacks by:
    - Removing newlines, carriage returns, tabs, and control characters
    - Collapsing multiple spaces into one
    - Stripping leading/trailing whitespace
    - Truncating to a maximum length

    Args:
        value: Raw user-provided string
        max_length: Maximum allowed length (default: MAX_PREFERENCE_LENGTH)

    Returns:
        Sanitized string safe for prompt inclusion
    """
    sanitized = re.sub(r"[\n\r\t\x00-\x1f\x7f-\x9f]", " ", value)
    sanitized = re.sub(r" +", " ", sanitized)
    sanitized = sanitized.strip()
    return sanitized[:max_length]


def sanitize_optional(value: str | None, max_length: int = MAX_PREFERENCE_LENGTH) -> str | None:
    """Sanitize a value that may be missing; empty results collapse to None."""
    if value is None:
        return None
    clean = sanitize_user_input(value, max_length=max_length)
    return clean or None
