"""Core utility functions for Fahrtenbuch Tools.

Parsing helpers turn the loosely typed values coming from forms and exported
files into comparable ``date``/``datetime`` values. They never raise for bad
input; callers get ``None`` and decide how to report it.
"""

from __future__ import annotations

import math
import numbers
from datetime import date, datetime, time
from typing import Any, Optional

_DATE_FORMAT = "%Y-%m-%d"
_TIME_FORMATS = ("%H:%M", "%H:%M:%S")


def is_blank(value: Any) -> bool:
    """Return True for None, NaN and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO calendar date (``YYYY-MM-DD``).

    Args:
        value: A ``date``/``datetime`` instance or an ISO date string.

    Returns:
        The parsed date, or None if the value is blank or malformed.

    Examples:
        >>> parse_date("2024-03-01")
        datetime.date(2024, 3, 1)
        >>> parse_date("01.03.2024") is None
        True
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if is_blank(value) or not isinstance(value, str):
        return None
    text = value.strip()
    # Extended form only; "20240301" is rejected.
    if len(text) != 10:
        return None
    try:
        return datetime.strptime(text, _DATE_FORMAT).date()
    except ValueError:
        return None


def parse_time(value: Any) -> Optional[time]:
    """Parse a 24h time of day (``HH:MM`` or ``HH:MM:SS``).

    Examples:
        >>> parse_time("08:30")
        datetime.time(8, 30)
        >>> parse_time("25:00") is None
        True
    """
    if isinstance(value, time):
        return value
    if is_blank(value) or not isinstance(value, str):
        return None
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt).time()
        except ValueError:
            continue
    return None


def combine_instant(date_value: Any, time_value: Any) -> Optional[datetime]:
    """Combine a date and a time of day into one comparable instant.

    Returns None if either part is missing or does not parse.
    """
    parsed_date = parse_date(date_value)
    parsed_time = parse_time(time_value)
    if parsed_date is None or parsed_time is None:
        return None
    return datetime.combine(parsed_date, parsed_time)


def as_reading(value: Any) -> Optional[int]:
    """Coerce an odometer reading to an int.

    Booleans, NaN, blank and non-numeric values yield None. Integral floats
    (as produced by pandas for numeric columns) are accepted.

    Examples:
        >>> as_reading(150)
        150
        >>> as_reading(150.0)
        150
        >>> as_reading("abc") is None
        True
    """
    if isinstance(value, bool) or is_blank(value):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, float):
        if math.isinf(value) or not value.is_integer():
            return None
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def format_distance(distance: float) -> str:
    """Format a distance in km with German thousands separators.

    Examples:
        >>> format_distance(12345)
        '12.345 km'
    """
    return f"{distance:,.0f}".replace(",", ".") + " km"
