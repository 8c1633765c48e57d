"""
Statistics calculation service for cycle tracking data.

This module provides the start-to-start interval arithmetic shared by the
predictor, the pattern analyzer and the insight generator, plus the aggregate
summary used by the cycle report.
"""
import math
from typing import Dict, Iterable, List, Optional
from statistics import mean, pstdev
from aws_lambda_powertools import Logger

from dalbit.models.period import Period
from dalbit.models.symptom import Symptom, SymptomType
from dalbit.models.summary import CycleSummary, PeriodRow, SymptomSummary
from dalbit.services.constants import (
    DEFAULT_CYCLE_LENGTH,
    MAX_VALID_CYCLE_LENGTH,
    REPORT_PERIOD_ROWS,
    REPORT_TOP_SYMPTOMS
)
from dalbit.services.utils import (
    coerce_periods,
    coerce_symptoms,
    days_between,
    get_active_periods,
    sort_periods
)

logger = Logger()

def is_valid_cycle_length(days: int) -> bool:
    """
    Check whether a start-to-start interval is plausible.

    Intervals outside (0, 60) days are treated as data-entry noise and are
    silently excluded from every average, never reported as errors.
    """
    return 0 < days < MAX_VALID_CYCLE_LENGTH

def calculate_cycle_intervals(
    periods: Iterable[Period],
    max_pairs: Optional[int] = None
) -> List[int]:
    """
    Calculate valid start-to-start intervals, most recent first.

    Args:
        periods: Periods in any order
        max_pairs: Number of most recent consecutive pairs to inspect;
            invalid pairs still count against this limit

    Returns:
        Interval lengths in days, newest pair first

    Example:
        >>> calculate_cycle_intervals(periods, max_pairs=3)
        [28, 31, 29]
    """
    ordered = sort_periods(periods, reverse=True)
    pair_count = len(ordered) - 1
    if max_pairs is not None:
        pair_count = min(pair_count, max_pairs)

    intervals = []
    for i in range(max(pair_count, 0)):
        diff = days_between(ordered[i].start_date, ordered[i + 1].start_date)
        if is_valid_cycle_length(diff):
            intervals.append(diff)
        else:
            logger.debug(
                "Skipping implausible cycle interval",
                extra={
                    "start_date": str(ordered[i + 1].start_date),
                    "next_start_date": str(ordered[i].start_date),
                    "days": diff
                }
            )
    return intervals

def calculate_average_cycle_length(
    intervals: List[int],
    default: int = DEFAULT_CYCLE_LENGTH
) -> int:
    """
    Round the mean interval to whole days, halves rounding up.

    Falls back to ``default`` when there are no valid intervals.
    """
    if not intervals:
        return default
    return math.floor(mean(intervals) + 0.5)

def calculate_cycle_regularity(intervals: List[int]) -> Optional[float]:
    """
    Population standard deviation of cycle intervals.

    Returns:
        Standard deviation in days, or None with fewer than two intervals
    """
    if len(intervals) < 2:
        return None
    return pstdev(intervals)

def calculate_symptom_frequencies(symptoms: Iterable[Symptom]) -> List[SymptomSummary]:
    """
    Count symptoms by type with their mean severity, most frequent first.

    Ties keep the order in which the symptom type was first seen.
    """
    counts: Dict[SymptomType, List[int]] = {}
    for symptom in symptoms:
        counts.setdefault(symptom.symptom_type, []).append(symptom.severity)

    summaries = [
        SymptomSummary(
            symptom_type=symptom_type,
            count=len(severities),
            average_severity=round(mean(severities), 2)
        )
        for symptom_type, severities in counts.items()
    ]
    return sorted(summaries, key=lambda s: s.count, reverse=True)

def calculate_cycle_summary(periods: Iterable, symptoms: Iterable = ()) -> CycleSummary:
    """
    Calculate overall statistics for the cycle report.

    Args:
        periods: Period records (models or mappings)
        symptoms: Symptom records (models or mappings)

    Returns:
        CycleSummary with:
        - average, minimum and maximum valid cycle length over all history
        - total number of active periods
        - up to 12 most recent periods with period and cycle lengths
        - up to 8 most frequent symptom types

    Raises:
        InvalidInputError: If any record fails validation
    """
    active = get_active_periods(coerce_periods(periods))
    symptom_records = coerce_symptoms(symptoms)

    ordered = sort_periods(active, reverse=True)
    cycle_lengths = calculate_cycle_intervals(ordered)

    rows = []
    for i, period in enumerate(ordered[:REPORT_PERIOD_ROWS]):
        cycle_length = None
        if i + 1 < len(ordered):
            diff = days_between(period.start_date, ordered[i + 1].start_date)
            cycle_length = diff if is_valid_cycle_length(diff) else None
        period_length = None
        if period.end_date is not None:
            period_length = days_between(period.end_date, period.start_date) + 1
        rows.append(PeriodRow(
            start_date=period.start_date,
            end_date=period.end_date,
            period_length=period_length,
            cycle_length=cycle_length,
            flow_intensity=period.flow_intensity
        ))

    logger.info(
        "Calculated cycle summary",
        extra={
            "total_periods": len(ordered),
            "valid_cycles": len(cycle_lengths),
            "symptom_records": len(symptom_records)
        }
    )

    return CycleSummary(
        average_cycle_length=(
            calculate_average_cycle_length(cycle_lengths) if cycle_lengths else None
        ),
        min_cycle_length=min(cycle_lengths) if cycle_lengths else None,
        max_cycle_length=max(cycle_lengths) if cycle_lengths else None,
        total_periods=len(ordered),
        recent_periods=rows,
        top_symptoms=calculate_symptom_frequencies(symptom_records)[:REPORT_TOP_SYMPTOMS]
    )
