"""Validation and normalization helpers for student fields.

All functions are pure. ``None`` is treated as invalid input by the ``is_valid_*``
checks and passed through unchanged by the ``normalize_*`` transforms.
"""

from __future__ import annotations

import re
from datetime import date

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,6}")

# [^\W\d_] is "any Unicode letter"
NAME_PATTERN = re.compile(r"(?:[^\W\d_]|[ .'-]){2,50}")

PHONE_PATTERN = re.compile(r"\+?[0-9]{7,15}")

_PHONE_NOISE = re.compile(r"[\s\-()]")

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def is_valid_email(email: str | None) -> bool:
    """Check an email address against the standard address grammar."""
    return email is not None and EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_phone(phone: str | None) -> bool:
    """Check a phone number after normalizing it.

    The normalized form must be an optional ``+`` followed by 7 to 15 digits.
    """
    if phone is None:
        return False
    return PHONE_PATTERN.fullmatch(normalize_phone(phone)) is not None


def is_valid_name(name: str | None) -> bool:
    """Check a person name: 2-50 letters, spaces, periods, apostrophes or hyphens."""
    return name is not None and NAME_PATTERN.fullmatch(name) is not None


def parse_date(text: str | None) -> date | None:
    """Parse a strict ``yyyy-MM-dd`` date.

    Args:
        text: The date string to parse.

    Returns:
        The parsed date, or None if the text is missing, malformed or names a
        day that does not exist. Never raises.
    """
    if text is None or _ISO_DATE.fullmatch(text) is None:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def normalize_phone(phone: str | None) -> str | None:
    """Strip whitespace, hyphens and parentheses from a phone number."""
    if phone is None:
        return None
    return _PHONE_NOISE.sub("", phone)


def normalize_email(email: str | None) -> str | None:
    """Trim and lower-case an email address."""
    if email is None:
        return None
    return email.strip().lower()
