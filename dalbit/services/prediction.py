"""
Service module for menstrual cycle predictions.

This module infers the average cycle length from the most recent period
starts and projects the next period, ovulation and fertile window, plus a
short horizon of self-contained future cycles.

Typical usage:
    prediction = calculate_cycle_prediction(periods, prediction_months=3)
    if prediction:
        print(f"Next period expected on {prediction.next_period_date}")
"""
from typing import Iterable, List, Optional
from datetime import date

from aws_lambda_powertools import Logger

from dalbit.models.prediction import Confidence, CyclePrediction, FutureCycle
from dalbit.services.constants import (
    DEFAULT_PERIOD_LENGTH,
    DEFAULT_PREDICTION_MONTHS,
    FERTILE_DAYS_AFTER_OVULATION,
    FERTILE_DAYS_BEFORE_OVULATION,
    HIGH_CONFIDENCE_PERIODS,
    LUTEAL_PHASE_LENGTH,
    MAX_PREDICTION_MONTHS,
    MEDIUM_CONFIDENCE_PERIODS,
    MIN_PERIOD_LENGTH,
    MIN_PREDICTION_MONTHS,
    PREDICTION_INTERVALS
)
from dalbit.services.statistics import (
    calculate_average_cycle_length,
    calculate_cycle_intervals
)
from dalbit.services.utils import add_days, coerce_periods, get_active_periods, sort_periods

logger = Logger()

def determine_confidence(total_periods: int) -> Confidence:
    """
    Map the number of recorded periods to a confidence tier.

    This is a count heuristic, not a statistical confidence interval.
    """
    if total_periods >= HIGH_CONFIDENCE_PERIODS:
        return Confidence.HIGH
    if total_periods >= MEDIUM_CONFIDENCE_PERIODS:
        return Confidence.MEDIUM
    return Confidence.LOW

def project_future_cycles(
    last_period_start: date,
    avg_cycle_length: int,
    prediction_months: int = DEFAULT_PREDICTION_MONTHS,
    avg_period_length: int = DEFAULT_PERIOD_LENGTH
) -> List[FutureCycle]:
    """
    Project upcoming cycles from the last period start.

    Each projected cycle derives its ovulation and fertile window from its own
    start date. The horizon is clamped to 1-5 cycles and projected periods
    last at least one day.
    """
    count = max(MIN_PREDICTION_MONTHS, min(prediction_months, MAX_PREDICTION_MONTHS))
    period_length = max(MIN_PERIOD_LENGTH, avg_period_length)
    ovulation_offset = avg_cycle_length - LUTEAL_PHASE_LENGTH

    cycles = []
    for i in range(1, count + 1):
        period_start = add_days(last_period_start, i * avg_cycle_length)
        ovulation_date = add_days(period_start, ovulation_offset)
        cycles.append(FutureCycle(
            cycle_number=i,
            period_start=period_start,
            period_end=add_days(period_start, period_length - 1),
            ovulation_date=ovulation_date,
            fertile_window_start=add_days(ovulation_date, -FERTILE_DAYS_BEFORE_OVULATION),
            fertile_window_end=add_days(ovulation_date, FERTILE_DAYS_AFTER_OVULATION)
        ))
    return cycles

def calculate_cycle_prediction(
    periods: Iterable,
    prediction_months: int = DEFAULT_PREDICTION_MONTHS,
    avg_period_length: int = DEFAULT_PERIOD_LENGTH
) -> Optional[CyclePrediction]:
    """
    Calculate the cycle prediction from period history.

    Uses the rounded mean of up to the three most recent start-to-start
    intervals (calendar method), defaulting to 28 days.

    Args:
        periods: Period records in any order
        prediction_months: Number of future cycles to project (clamped to 1-5)
        avg_period_length: Days of bleeding assumed for projected periods

    Returns:
        CyclePrediction, or None if there are no active periods

    Raises:
        InvalidInputError: If any record fails validation

    Example:
        >>> prediction = calculate_cycle_prediction([{"start_date": "2025-01-01"}])
        >>> prediction.next_period_date
        datetime.date(2025, 1, 29)
    """
    active = get_active_periods(coerce_periods(periods))
    if not active:
        return None

    ordered = sort_periods(active, reverse=True)
    last_start = ordered[0].start_date

    intervals = calculate_cycle_intervals(ordered, max_pairs=PREDICTION_INTERVALS)
    avg_cycle_length = calculate_average_cycle_length(intervals)
    confidence = determine_confidence(len(ordered))

    ovulation_date = add_days(last_start, avg_cycle_length - LUTEAL_PHASE_LENGTH)

    logger.debug(
        "Calculated cycle prediction",
        extra={
            "last_period_start": str(last_start),
            "intervals": intervals,
            "average_cycle_length": avg_cycle_length,
            "confidence": confidence.value
        }
    )

    return CyclePrediction(
        next_period_date=add_days(last_start, avg_cycle_length),
        ovulation_date=ovulation_date,
        fertile_window_start=add_days(ovulation_date, -FERTILE_DAYS_BEFORE_OVULATION),
        fertile_window_end=add_days(ovulation_date, FERTILE_DAYS_AFTER_OVULATION),
        confidence=confidence,
        average_cycle_length=avg_cycle_length,
        future_cycles=project_future_cycles(
            last_start, avg_cycle_length, prediction_months, avg_period_length
        )
    )
