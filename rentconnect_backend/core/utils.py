"""Common utilities for the RentConnect backend."""

import re
from datetime import date, datetime, timezone

_PHONE_SEPARATORS = re.compile(r"[\s-]")


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def today() -> date:
    """Get the current UTC date."""
    return utc_now().date()


def add_years(value: date, years: int) -> date:
    """Shift a date by whole years, mapping Feb 29 to Feb 28 when needed."""
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        return value.replace(year=value.year + years, day=28)


def calculate_age(dob: date | None, on: date | None = None) -> int | None:
    """Age in completed years as of ``on`` (defaults to today)."""
    if dob is None:
        return None
    on = on or today()
    age = on.year - dob.year
    if (on.month, on.day) < (dob.month, dob.day):
        age -= 1
    return age


def normalize_email(value: str | None) -> str:
    """Lower-cased, stripped email used for comparisons."""
    return (value or "").strip().lower()


def normalize_phone(value: str | None) -> str:
    """Phone number with spaces and dashes removed."""
    return _PHONE_SEPARATORS.sub("", value or "")


def sanitize_string(value: str | None, max_length: int = 255) -> str | None:
    """Sanitize a string value by stripping whitespace and truncating."""
    if value is None:
        return None
    value = value.strip()
    if len(value) > max_length:
        return value[:max_length]
    return value
