"""Normalization helpers applied identically on the client and the server."""

import re
from datetime import date

_NON_DIGITS = re.compile(r"\D")


def normalize_contact_number(raw: str) -> str:
    """Canonicalize a Philippine mobile number to the 11-digit ``09`` form.

    Non-digits are stripped, a missing leading ``0`` is added, a ``63``
    country code is rewritten to ``0`` and the result is truncated to 11
    characters.

    >>> normalize_contact_number("+63 917 123 4567")
    '09171234567'
    >>> normalize_contact_number("9171234567")
    '09171234567'
    """
    cleaned = _NON_DIGITS.sub("", raw or "")
    if not cleaned:
        return ""
    if not cleaned.startswith("0") and not cleaned.startswith("63"):
        cleaned = "0" + cleaned
    if cleaned.startswith("63") and len(cleaned) >= 12:
        cleaned = "0" + cleaned[2:]
    return cleaned[:11]


def coerce_date(value: date | str) -> date:
    """Return ``value`` as a date, parsing ``YYYY-MM-DD`` strings."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def calculate_age(date_of_birth: date | str, today: date) -> int:
    """Whole years between ``date_of_birth`` and ``today``.

    One year is subtracted while this year's birthday has not happened yet,
    so a 29 February birthday counts as reached on 1 March in common years.
    """
    dob = coerce_date(date_of_birth)
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age


def build_full_name(
    first_name: str,
    middle_name: str,
    last_name: str,
    suffix: str,
) -> str:
    parts = [first_name, middle_name, last_name, suffix]
    return " ".join(part.strip() for part in parts if part and part.strip())
