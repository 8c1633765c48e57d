"""
Shared utility functions for cycle-related services.

These utilities sit at the boundary of every public service function: they
turn raw records and date strings into validated models and dates, and reject
anything that violates the input contract before statistics are computed.
"""
from typing import Any, Iterable, List, Union
from datetime import date, datetime, timedelta

from pydantic import ValidationError

from dalbit.models.dates import to_calendar_date
from dalbit.models.period import Period
from dalbit.models.symptom import Symptom
from dalbit.services.exceptions import InvalidInputError
from dalbit.utils.logging import format_validation_errors, log_rejected_record, logger

DateLike = Union[date, datetime, str]

def parse_date(value: DateLike) -> date:
    """
    Normalize a date-like value to a calendar date.

    Datetimes are truncated to their date (start of day). Strings must be
    ISO ``YYYY-MM-DD``.

    Args:
        value: Date, datetime or ISO date string

    Returns:
        Calendar date

    Raises:
        InvalidInputError: If the value is not a date or an ISO date string

    Example:
        >>> parse_date("2025-01-31")
        datetime.date(2025, 1, 31)
    """
    try:
        return to_calendar_date(value)
    except ValueError as e:
        raise InvalidInputError(str(e)) from None

def coerce_periods(records: Iterable[Any]) -> List[Period]:
    """
    Validate period records, accepting models or plain mappings.

    Raises:
        InvalidInputError: If any record fails validation
    """
    return [_coerce(record, Period) for record in records or []]

def coerce_symptoms(records: Iterable[Any]) -> List[Symptom]:
    """
    Validate symptom records, accepting models or plain mappings.

    Raises:
        InvalidInputError: If any record fails validation
    """
    return [_coerce(record, Symptom) for record in records or []]

def _coerce(record: Any, model):
    if isinstance(record, model):
        return record
    try:
        if isinstance(record, dict):
            return model.model_validate(record)
        return model.model_validate(record, from_attributes=True)
    except ValidationError as e:
        name = model.__name__.lower()
        log_rejected_record(logger, name, e)
        raise InvalidInputError(f"Invalid {name} record: {format_validation_errors(e)}") from e

def get_active_periods(periods: Iterable[Period]) -> List[Period]:
    """Drop soft-deleted periods."""
    return [p for p in periods if p.is_active]

def sort_periods(periods: Iterable[Period], reverse: bool = False) -> List[Period]:
    """
    Sort periods by start date.

    Args:
        periods: Periods to sort
        reverse: Whether to sort newest first

    Returns:
        New list sorted by start date
    """
    return sorted(periods, key=lambda p: p.start_date, reverse=reverse)

def days_between(later: date, earlier: date) -> int:
    """Whole days from ``earlier`` to ``later``."""
    return (later - earlier).days

def add_days(start: date, days: int) -> date:
    """Shift a date by a number of days."""
    return start + timedelta(days=days)

def is_within(target: date, start: date, end: date) -> bool:
    """Inclusive interval containment."""
    return start <= target <= end
