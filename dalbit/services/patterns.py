"""
Symptom pattern analysis service.

Detects symptom types that are over-represented in a cycle phase. Each daily
rate is smoothed with a Beta(1, 1) prior, ``p = (k + 1) / (n + 2)``, so a
symptom seen once in a three-day phase does not report 100% prevalence. The
phase rate is compared with the symptom's baseline rate across all observed
days; the ratio is the lift.

Typical usage:
    insights = analyze_symptom_patterns(periods, symptoms)
    for insight in insights:
        print(f"{insight.symptom_type.value} in {insight.phase.value}: x{insight.lift:.1f}")
"""
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple
from datetime import date

from aws_lambda_powertools import Logger

from dalbit.models.insight import SymptomInsight
from dalbit.models.period import Period
from dalbit.models.phase import CyclePhase
from dalbit.models.symptom import SymptomType
from dalbit.services.constants import (
    MIN_PATTERN_CYCLES,
    MIN_PATTERN_DAYS,
    MIN_PATTERN_LIFT,
    MIN_PATTERN_PERIODS,
    MIN_PATTERN_SYMPTOMS
)
from dalbit.services.cycle import determine_phase
from dalbit.services.statistics import is_valid_cycle_length
from dalbit.services.utils import (
    add_days,
    coerce_periods,
    coerce_symptoms,
    days_between,
    get_active_periods,
    sort_periods
)

logger = Logger()

@dataclass
class CycleWindow:
    """One observed cycle, from a period start up to the next period start."""
    start: date
    end: date
    length: int

def build_cycle_windows(periods: Iterable[Period]) -> List[CycleWindow]:
    """
    Build consecutive cycle windows in chronological order.

    Windows with implausible lengths are dropped.
    """
    ordered = sort_periods(periods)
    windows = []
    for current, following in zip(ordered, ordered[1:]):
        length = days_between(following.start_date, current.start_date)
        if is_valid_cycle_length(length):
            windows.append(CycleWindow(current.start_date, following.start_date, length))
    return windows

def smoothed_rate(occurrences: int, days: int) -> float:
    """Laplace-smoothed daily rate."""
    return (occurrences + 1) / (days + 2)

def analyze_symptom_patterns(
    periods: Iterable,
    symptoms: Iterable,
    min_lift: float = MIN_PATTERN_LIFT
) -> List[SymptomInsight]:
    """
    Find symptom types that cluster in a particular cycle phase.

    Every day of every valid cycle is classified with the cycle's own length,
    and symptom occurrences are tallied per phase. An empty list is returned
    when there is too little data: fewer than 3 periods, 10 symptom records,
    3 valid cycles or 10 observed days.

    Args:
        periods: Period records in any order
        symptoms: Symptom records in any order
        min_lift: Minimum phase rate to baseline rate ratio to report

    Returns:
        SymptomInsight list sorted by lift, highest first

    Raises:
        InvalidInputError: If any record fails validation
    """
    active = get_active_periods(coerce_periods(periods))
    symptom_records = coerce_symptoms(symptoms)

    if len(active) < MIN_PATTERN_PERIODS or len(symptom_records) < MIN_PATTERN_SYMPTOMS:
        return []

    windows = build_cycle_windows(active)
    if len(windows) < MIN_PATTERN_CYCLES:
        logger.debug("Not enough valid cycles for pattern analysis", extra={"cycles": len(windows)})
        return []

    symptoms_by_date: Dict[date, List[SymptomType]] = {}
    for symptom in symptom_records:
        symptoms_by_date.setdefault(symptom.date, []).append(symptom.symptom_type)

    phase_days: Counter = Counter()
    phase_occurrences: Dict[Tuple[SymptomType, CyclePhase], int] = Counter()
    total_occurrences: Dict[SymptomType, int] = Counter()
    total_days = 0

    for window in windows:
        for offset in range(window.length):
            phase = determine_phase(offset + 1, window.length)
            phase_days[phase] += 1
            total_days += 1

            for symptom_type in symptoms_by_date.get(add_days(window.start, offset), []):
                phase_occurrences[(symptom_type, phase)] += 1
                total_occurrences[symptom_type] += 1

    if total_days < MIN_PATTERN_DAYS:
        return []

    insights = []
    for symptom_type, occurrences in total_occurrences.items():
        baseline = smoothed_rate(occurrences, total_days)

        for phase in CyclePhase:
            n = phase_days[phase]
            if n == 0:
                continue
            probability = smoothed_rate(phase_occurrences[(symptom_type, phase)], n)
            lift = probability / baseline

            if lift >= min_lift:
                insights.append(SymptomInsight(
                    symptom_type=symptom_type,
                    phase=phase,
                    probability=probability,
                    baseline=baseline,
                    lift=lift,
                    sample_days=total_days,
                    cycle_count=len(windows)
                ))

    insights.sort(key=lambda i: i.lift, reverse=True)

    logger.info(
        "Analyzed symptom patterns",
        extra={
            "cycles": len(windows),
            "observed_days": total_days,
            "patterns": len(insights)
        }
    )
    return insights
