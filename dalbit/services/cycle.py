"""
Service module for cycle position and phase calculations.

This module translates a period history and a reference "today" into a
position in the cycle: the 1-based cycle day, the phase that day falls in and
the display details of that phase. All functions are pure; the reference date
is always passed explicitly or defaults to the current date.

Typical usage:
    status = analyze_cycle(periods, today=date(2025, 3, 10))
    print(f"Day {status.cycle_day}: {status.phase_info.label}")
"""
from typing import Iterable, Optional
from datetime import date

from aws_lambda_powertools import Logger

from dalbit.models.period import FlowIntensity, Period
from dalbit.models.phase import CyclePhase, CyclePhaseInfo
from dalbit.models.prediction import CycleStatus
from dalbit.models.settings import UserSettings
from dalbit.services.constants import (
    DEFAULT_CYCLE_LENGTH,
    FERTILE_DAYS_AFTER_OVULATION,
    FERTILE_DAYS_BEFORE_OVULATION,
    LUTEAL_PHASE_LENGTH,
    MENSTRUAL_PHASE_DAYS,
    PHASE_INFO
)
from dalbit.services.prediction import calculate_cycle_prediction
from dalbit.services.utils import (
    DateLike,
    coerce_periods,
    days_between,
    get_active_periods,
    parse_date,
    sort_periods
)

logger = Logger()

def calculate_cycle_day(last_period_start: DateLike, today: Optional[DateLike] = None) -> int:
    """
    Calculate the 1-based day of the cycle.

    Dates before the period start are clamped to day 1 rather than rejected.

    Args:
        last_period_start: Start date of the most recent period
        today: Reference date, defaults to the current date

    Returns:
        Cycle day, never less than 1

    Example:
        >>> calculate_cycle_day(date(2025, 1, 1), date(2025, 1, 3))
        3
    """
    target = parse_date(today) if today is not None else date.today()
    start = parse_date(last_period_start)
    return max(1, days_between(target, start) + 1)

def determine_phase(cycle_day: int, avg_cycle_length: int = DEFAULT_CYCLE_LENGTH) -> CyclePhase:
    """
    Classify a cycle day into one of the four phases.

    Boundaries derive from ``ovulation_day = avg_cycle_length - 14``:
    days 1-5 are menstrual, up to ``ovulation_day - 5`` follicular,
    up to ``ovulation_day + 1`` ovulation, and everything after luteal.

    Example:
        >>> determine_phase(14, 28)
        <CyclePhase.OVULATION: 'ovulation'>
    """
    ovulation_day = avg_cycle_length - LUTEAL_PHASE_LENGTH

    if cycle_day <= MENSTRUAL_PHASE_DAYS:
        return CyclePhase.MENSTRUAL
    if cycle_day <= ovulation_day - FERTILE_DAYS_BEFORE_OVULATION:
        return CyclePhase.FOLLICULAR
    if cycle_day <= ovulation_day + FERTILE_DAYS_AFTER_OVULATION:
        return CyclePhase.OVULATION
    return CyclePhase.LUTEAL

def get_cycle_phase_info(
    cycle_day: int,
    avg_cycle_length: int = DEFAULT_CYCLE_LENGTH
) -> CyclePhaseInfo:
    """
    Get the phase of a cycle day with its label, description, partner tip and color.
    """
    phase = determine_phase(cycle_day, avg_cycle_length)
    return CyclePhaseInfo(phase=phase, **PHASE_INFO[phase])

def get_flow_for_date(period: Optional[Period], target_date: DateLike) -> Optional[FlowIntensity]:
    """
    Get the flow intensity for one day of a period.

    The per-day override wins; otherwise the period-level default is used.
    """
    if period is None:
        return None
    day = parse_date(target_date)
    if period.flow_intensities and day in period.flow_intensities:
        return period.flow_intensities[day]
    return period.flow_intensity

def analyze_cycle(
    periods: Iterable,
    today: Optional[DateLike] = None,
    settings: Optional[UserSettings] = None
) -> CycleStatus:
    """
    Determine the current cycle position from period history.

    Args:
        periods: Period records in any order
        today: Reference date, defaults to the current date
        settings: Optional user settings for the prediction horizon

    Returns:
        CycleStatus; every field is None when no periods are recorded

    Raises:
        InvalidInputError: If any record fails validation
    """
    active = get_active_periods(coerce_periods(periods))
    if not active:
        return CycleStatus()

    settings = settings or UserSettings()
    last_period = sort_periods(active, reverse=True)[0]
    prediction = calculate_cycle_prediction(
        active,
        prediction_months=settings.prediction_months,
        avg_period_length=settings.average_period_length
    )
    avg_cycle_length = prediction.average_cycle_length if prediction else DEFAULT_CYCLE_LENGTH

    cycle_day = calculate_cycle_day(last_period.start_date, today)
    phase_info = get_cycle_phase_info(cycle_day, avg_cycle_length)

    logger.debug(
        "Analyzed cycle position",
        extra={
            "last_period_start": str(last_period.start_date),
            "cycle_day": cycle_day,
            "phase": phase_info.phase.value
        }
    )

    return CycleStatus(
        prediction=prediction,
        cycle_day=cycle_day,
        phase_info=phase_info,
        last_period=last_period
    )
