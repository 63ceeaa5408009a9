"""Reusable field checks for request schemas.

Each helper raises ``ValueError`` with the exact user-visible message, so
the first failing field of a request produces a single readable error.
Strings are trimmed before they are measured.
"""

from __future__ import annotations

from typing import Any

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

_http_url = TypeAdapter(AnyHttpUrl)

# Largest value a signed 64-bit INTEGER column can hold
MAX_SQL_INTEGER = 2**63 - 1


def trimmed(value: Any) -> str | None:
    """Return ``value`` stripped of surrounding whitespace, or None if it is not text."""
    if isinstance(value, str):
        return value.strip()
    return None


def check_length(value: Any, message: str, *, min_length: int = 0, max_length: int | None = None) -> str:
    """Ensure ``value`` is text whose trimmed length lies within the bounds."""
    text = trimmed(value)
    if text is None or len(text) < min_length:
        raise ValueError(message)
    if max_length is not None and len(text) > max_length:
        raise ValueError(message)
    return text


def parse_count(value: Any) -> int | None:
    """Return a non-negative integer from a JSON number or ASCII decimal string.

    Returns None for anything else, including values too large to store.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    else:
        text = trimmed(value)
        if not text or not (text.isascii() and text.isdigit()):
            return None
        number = int(text)
    if number < 0 or number > MAX_SQL_INTEGER:
        return None
    return number


def check_id(value: Any, message: str) -> int:
    """Coerce a JSON number or decimal string into a positive integer identifier."""
    identifier = parse_count(value)
    if not identifier:
        raise ValueError(message)
    return identifier


def check_url(value: Any, message: str) -> str:
    """Ensure ``value`` is an absolute http(s) URL."""
    text = trimmed(value)
    if not text:
        raise ValueError(message)
    try:
        _http_url.validate_python(text)
    except ValidationError as err:
        raise ValueError(message) from err
    return text


def starts_with_digit(value: str) -> bool:
    """Return True if the first character is an ASCII digit."""
    return bool(value) and "0" <= value[0] <= "9"
