"""
Service module for calendar range queries.

These predicates answer whether a date falls in a recorded period, a
predicted period, the fertile window or on a predicted ovulation day, and
build the month grid shown on the calendar.
"""
import calendar
from typing import Iterable, List, Optional
from datetime import date

from dalbit.models.calendar import CalendarDay
from dalbit.models.period import Period
from dalbit.models.prediction import CyclePrediction
from dalbit.services.constants import DEFAULT_PERIOD_LENGTH, FLOW_COLORS, MIN_PERIOD_LENGTH
from dalbit.services.cycle import get_flow_for_date
from dalbit.services.utils import (
    DateLike,
    add_days,
    coerce_periods,
    coerce_symptoms,
    get_active_periods,
    is_within,
    parse_date
)

def get_period_end(period: Period) -> date:
    """
    Get the last day of a period.

    A period without an end date is assumed to span five days.
    """
    if period.end_date is not None:
        return period.end_date
    return add_days(period.start_date, DEFAULT_PERIOD_LENGTH - 1)

def is_date_in_period(target_date: DateLike, periods: Iterable) -> Optional[Period]:
    """
    Find the recorded period containing a date.

    Periods are assumed not to overlap; the first match is returned.
    Soft-deleted periods never match.

    Args:
        target_date: Date or ISO date string to test
        periods: Period records

    Returns:
        Matching Period, or None

    Raises:
        InvalidInputError: If the date or any record is invalid
    """
    day = parse_date(target_date)
    for period in get_active_periods(coerce_periods(periods)):
        if is_within(day, period.start_date, get_period_end(period)):
            return period
    return None

def is_date_in_predicted_period(
    target_date: DateLike,
    prediction: Optional[CyclePrediction],
    avg_period_length: int = DEFAULT_PERIOD_LENGTH
) -> bool:
    """
    Check if a date falls in any predicted period.

    Projected cycles are checked first; the next period of the current cycle
    is kept as a fallback for predictions without projections.
    """
    if prediction is None:
        return False
    day = parse_date(target_date)

    for cycle in prediction.future_cycles:
        if is_within(day, cycle.period_start, cycle.period_end):
            return True

    start = prediction.next_period_date
    period_length = max(MIN_PERIOD_LENGTH, avg_period_length)
    return is_within(day, start, add_days(start, period_length - 1))

def is_date_in_fertile_window(target_date: DateLike, prediction: Optional[CyclePrediction]) -> bool:
    """Check if a date falls in the current or any projected fertile window."""
    if prediction is None:
        return False
    day = parse_date(target_date)

    if is_within(day, prediction.fertile_window_start, prediction.fertile_window_end):
        return True
    return any(
        is_within(day, cycle.fertile_window_start, cycle.fertile_window_end)
        for cycle in prediction.future_cycles
    )

def is_ovulation_day(target_date: DateLike, prediction: Optional[CyclePrediction]) -> bool:
    """Check if a date is the current or any projected ovulation day."""
    if prediction is None:
        return False
    day = parse_date(target_date)

    if day == prediction.ovulation_date:
        return True
    return any(day == cycle.ovulation_date for cycle in prediction.future_cycles)

def build_calendar_month(
    year: int,
    month: int,
    periods: Iterable,
    symptoms: Iterable = (),
    prediction: Optional[CyclePrediction] = None,
    today: Optional[DateLike] = None,
    avg_period_length: int = DEFAULT_PERIOD_LENGTH
) -> List[CalendarDay]:
    """
    Build the calendar grid for a month.

    The grid runs from the Sunday on or before the first of the month to the
    Saturday on or after its last day. Predicted periods are not marked on
    days that already belong to a recorded period.

    Args:
        year: Calendar year
        month: Calendar month (1-12)
        periods: Period records
        symptoms: Symptom records
        prediction: Current prediction, if any
        today: Reference date, defaults to the current date
        avg_period_length: Days of bleeding assumed for predicted periods

    Returns:
        List of CalendarDay, a whole number of weeks long
    """
    active = get_active_periods(coerce_periods(periods))
    symptom_records = coerce_symptoms(symptoms)
    reference = parse_date(today) if today is not None else date.today()

    symptoms_by_date = {}
    for symptom in symptom_records:
        symptoms_by_date.setdefault(symptom.date, []).append(symptom)

    month_calendar = calendar.Calendar(firstweekday=calendar.SUNDAY)
    days = []
    for day in month_calendar.itermonthdates(year, month):
        period = is_date_in_period(day, active)
        flow = get_flow_for_date(period, day)
        days.append(CalendarDay(
            date=day,
            is_period=period is not None,
            is_predicted_period=(
                period is None
                and is_date_in_predicted_period(day, prediction, avg_period_length)
            ),
            is_fertile=is_date_in_fertile_window(day, prediction),
            is_ovulation=is_ovulation_day(day, prediction),
            is_today=day == reference,
            is_current_month=day.month == month,
            symptoms=symptoms_by_date.get(day, []),
            flow_intensity=flow,
            flow_color=FLOW_COLORS[flow] if flow else None
        ))
    return days
