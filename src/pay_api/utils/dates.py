"""Date helpers for date of birth handling."""

import re
from datetime import date, datetime

import arrow

from pay_api.constants import DATE_OF_BIRTH_FORMAT, DATE_OF_BIRTH_PATTERN

_DATE_OF_BIRTH_RE = re.compile(DATE_OF_BIRTH_PATTERN)


def parse_ddmmyyyy(value: str) -> date | None:
    """Parse a ``DD-MM-YYYY`` string into a date.

    Both the shape (two-digit day and month, four-digit year, dash separated)
    and the calendar date itself must be valid, so ``1990-03-15``, ``1-3-1990``
    and ``31-02-1990`` are all rejected.

    Args:
        value: The string to parse

    Returns:
        The parsed date, or None if the string is not a valid DD-MM-YYYY date
    """
    if not isinstance(value, str) or not _DATE_OF_BIRTH_RE.match(value):
        return None
    try:
        return datetime.strptime(value, DATE_OF_BIRTH_FORMAT).date()
    except ValueError:
        return None


def is_ddmmyyyy(value: str) -> bool:
    """Return True if ``value`` is a valid ``DD-MM-YYYY`` date."""
    return parse_ddmmyyyy(value) is not None


def calculate_age(born: date, today: date) -> int:
    """Calculate age in whole calendar years.

    A birthday counts as reached on the day itself; someone born on
    February 29 turns a year older on March 1 in non-leap years.

    Args:
        born: Date of birth
        today: Reference date

    Returns:
        Number of full years elapsed between ``born`` and ``today``
    """
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


def utc_today() -> date:
    """Return the current date in UTC."""
    return arrow.utcnow().date()
