"""Utility functions for the pay API."""

from pay_api.utils.dates import calculate_age, is_ddmmyyyy, parse_ddmmyyyy, utc_today

__all__ = [
    "calculate_age",
    "is_ddmmyyyy",
    "parse_ddmmyyyy",
    "utc_today",
]
