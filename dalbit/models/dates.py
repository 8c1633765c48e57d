"""
Calendar date parsing shared by the models and the service boundary.
"""
import re
from datetime import date, datetime
from typing import Any

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

def to_calendar_date(value: Any) -> date:
    """
    Convert a date-like value to a calendar date.

    Accepts dates, datetimes (truncated to their date) and ``YYYY-MM-DD``
    strings. Numbers, booleans and other ISO 8601 forms such as week dates,
    basic format or date-times are rejected.

    Raises:
        ValueError: If the value is not an accepted date form
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if not ISO_DATE_PATTERN.match(value):
            raise ValueError(f"Invalid ISO date: {value!r}, expected YYYY-MM-DD")
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise ValueError(f"Invalid ISO date: {value!r}") from None
    raise ValueError(f"Expected a date or ISO date string, got {type(value).__name__}")
