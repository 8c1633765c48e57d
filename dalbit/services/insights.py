"""
Rule-based insight generation service.

Six rules are evaluated on every call, in priority order: cycle regularity,
pre-period symptom pattern, phase tip, recording streak, severity trend and
data encouragement. Their results are concatenated in that order and the
first three are returned; the order itself is the ranking.

Typical usage:
    status = analyze_cycle(periods, today)
    insights = generate_insights(periods, symptoms, status.prediction, status.cycle_day, today)
"""
from collections import Counter
from typing import Iterable, List, Optional
from datetime import date
from statistics import mean

from aws_lambda_powertools import Logger

from dalbit.models.insight import Insight, InsightType
from dalbit.models.period import Period
from dalbit.models.phase import CyclePhase
from dalbit.models.prediction import CyclePrediction
from dalbit.models.symptom import Symptom
from dalbit.services.constants import (
    FERTILE_DAYS_AFTER_OVULATION,
    IRREGULAR_STDDEV_MIN,
    LATE_LUTEAL_DAYS,
    LUTEAL_PHASE_LENGTH,
    MAX_INSIGHTS,
    MIN_PERIODS_FOR_ANALYSIS,
    OVULATION_TIP_EXTRA_DAYS,
    PREPERIOD_MAX_DAYS_BEFORE,
    PREPERIOD_MIN_DAYS_BEFORE,
    PREPERIOD_MIN_OCCURRENCES,
    PREPERIOD_RECENT_PERIODS,
    REGULAR_STDDEV_MAX,
    REGULARITY_INTERVALS,
    SEVERITY_TREND_DELTA,
    SEVERITY_TREND_MIN_SYMPTOMS,
    STREAK_LOOKBACK_DAYS,
    STREAK_MIN_DAYS,
    SYMPTOM_LABELS
)
from dalbit.services.cycle import determine_phase
from dalbit.services.statistics import calculate_cycle_intervals, calculate_cycle_regularity
from dalbit.services.utils import (
    DateLike,
    add_days,
    coerce_periods,
    coerce_symptoms,
    days_between,
    get_active_periods,
    parse_date,
    sort_periods
)

logger = Logger()

PHASE_TIPS = {
    CyclePhase.MENSTRUAL: Insight(
        id="phase-tip",
        icon="🫖",
        title="Self-care during your period",
        description=(
            "Warm drinks and plenty of rest help. Try iron-rich foods "
            "such as spinach or red meat."
        ),
        type=InsightType.NEUTRAL
    ),
    CyclePhase.FOLLICULAR: Insight(
        id="phase-tip",
        icon="💪",
        title="Time to recharge",
        description=(
            "Estrogen is rising in the follicular phase. "
            "This is the best time for exercise and new challenges."
        ),
        type=InsightType.POSITIVE
    ),
    CyclePhase.OVULATION: Insight(
        id="phase-tip",
        icon="🥚",
        title="Ovulation window",
        description=(
            "You are around ovulation. This is the fertile window, "
            "keep it in mind if you are planning a pregnancy."
        ),
        type=InsightType.INFO
    ),
    CyclePhase.LUTEAL: Insight(
        id="phase-tip",
        icon="🧘",
        title="Self-care time",
        description=(
            "Your period is coming up. Managing stress and sleeping well "
            "can ease PMS."
        ),
        type=InsightType.NEUTRAL
    ),
}

def check_regularity(periods: List[Period]) -> List[Insight]:
    """Flag very regular or irregular recent cycles."""
    if len(periods) < MIN_PERIODS_FOR_ANALYSIS:
        return []

    intervals = calculate_cycle_intervals(periods, max_pairs=REGULARITY_INTERVALS)
    std_dev = calculate_cycle_regularity(intervals)
    if std_dev is None:
        return []

    if std_dev <= REGULAR_STDDEV_MAX:
        return [Insight(
            id="cycle-regular",
            icon="✨",
            title="Regular cycle",
            description=(
                f"Your last {len(intervals)} cycles were very regular "
                f"(deviation {std_dev:.1f} days). Predictions should be accurate."
            ),
            type=InsightType.POSITIVE
        )]
    if std_dev > IRREGULAR_STDDEV_MIN:
        return [Insight(
            id="cycle-irregular",
            icon="📋",
            title="Your cycle varies",
            description=(
                f"Recent cycles vary quite a bit (deviation {std_dev:.1f} days). "
                "Keep recording to reveal your pattern."
            ),
            type=InsightType.WARNING
        )]
    return []

def check_preperiod_pattern(periods: List[Period], symptoms: List[Symptom]) -> List[Insight]:
    """Surface the symptom that most often appears 1-3 days before a period."""
    if not symptoms or len(periods) < 2:
        return []

    counts: Counter = Counter()
    for period in sort_periods(periods, reverse=True)[:PREPERIOD_RECENT_PERIODS]:
        for symptom in symptoms:
            days_before = days_between(period.start_date, symptom.date)
            if PREPERIOD_MIN_DAYS_BEFORE <= days_before <= PREPERIOD_MAX_DAYS_BEFORE:
                counts[symptom.symptom_type] += 1

    frequent = [(t, c) for t, c in counts.items() if c >= PREPERIOD_MIN_OCCURRENCES]
    if not frequent:
        return []

    top_type, top_count = sorted(frequent, key=lambda item: item[1], reverse=True)[0]
    name = SYMPTOM_LABELS[top_type]
    return [Insight(
        id="preperiod-pattern",
        icon="🔮",
        title="Pre-period pattern detected",
        description=(
            f"'{name}' often shows up 1-3 days before your period ({top_count} times). "
            "When it appears, your period may be about to start."
        ),
        type=InsightType.INFO
    )]

def check_phase_tip(
    prediction: Optional[CyclePrediction],
    cycle_day: Optional[int]
) -> List[Insight]:
    """
    Pick the wellness tip for the current phase.

    The ovulation tip runs one day past the ovulation phase. After that only
    the last days of the luteal phase get a tip; mid-luteal days get none.
    Each call returns a fresh copy of the tip.
    """
    if cycle_day is None or prediction is None:
        return []

    cycle_length = prediction.average_cycle_length
    phase = determine_phase(cycle_day, cycle_length)
    if phase == CyclePhase.LUTEAL:
        ovulation_day = cycle_length - LUTEAL_PHASE_LENGTH
        if cycle_day == ovulation_day + FERTILE_DAYS_AFTER_OVULATION + OVULATION_TIP_EXTRA_DAYS:
            phase = CyclePhase.OVULATION
        elif cycle_day < cycle_length - LATE_LUTEAL_DAYS:
            return []
    return [PHASE_TIPS[phase].model_copy()]

def count_recording_streak(
    periods: List[Period],
    symptoms: List[Symptom],
    today: date
) -> int:
    """
    Count consecutive recorded days ending today.

    A day counts when it has a symptom or a period start. Today may still be
    empty; the streak then runs from yesterday.
    """
    recorded = {s.date for s in symptoms} | {p.start_date for p in periods}

    streak = 0
    for i in range(STREAK_LOOKBACK_DAYS):
        if add_days(today, -i) in recorded:
            streak += 1
        elif i > 0:
            break
    return streak

def check_streak(periods: List[Period], symptoms: List[Symptom], today: date) -> List[Insight]:
    """Celebrate a recording streak of a week or more."""
    if not symptoms and not periods:
        return []

    streak = count_recording_streak(periods, symptoms, today)
    if streak < STREAK_MIN_DAYS:
        return []
    return [Insight(
        id="streak",
        icon="🔥",
        title=f"{streak}-day recording streak",
        description="Consistent records make predictions more accurate. Great job!",
        type=InsightType.POSITIVE
    )]

def check_severity_trend(symptoms: List[Symptom]) -> List[Insight]:
    """Compare mean severity of the older and recent halves of the records."""
    if len(symptoms) < SEVERITY_TREND_MIN_SYMPTOMS:
        return []

    ordered = sorted(symptoms, key=lambda s: s.date)
    half = len(ordered) // 2
    older_avg = mean(s.severity for s in ordered[:half])
    recent_avg = mean(s.severity for s in ordered[half:])

    if recent_avg <= older_avg - SEVERITY_TREND_DELTA:
        return [Insight(
            id="severity-improving",
            icon="📈",
            title="Symptoms are easing",
            description=(
                "Your recent symptoms are less severe than before. "
                "That's a good sign!"
            ),
            type=InsightType.POSITIVE
        )]
    if recent_avg >= older_avg + SEVERITY_TREND_DELTA:
        return [Insight(
            id="severity-worsening",
            icon="⚠️",
            title="Symptoms are getting stronger",
            description=(
                "Your recent symptoms are more severe than before. "
                "If this continues, consider talking to a professional."
            ),
            type=InsightType.WARNING
        )]
    return []

def check_engagement(periods: List[Period]) -> List[Insight]:
    """Encourage recording until there is enough history for analysis."""
    if not periods:
        return [Insight(
            id="need-data",
            icon="📝",
            title="Start recording",
            description=(
                "Record the first day of your period to get cycle predictions "
                "and personal analysis."
            ),
            type=InsightType.INFO
        )]
    if len(periods) < MIN_PERIODS_FOR_ANALYSIS:
        remaining = MIN_PERIODS_FOR_ANALYSIS - len(periods)
        return [Insight(
            id="need-more",
            icon="📊",
            title=f"{remaining} more record{'s' if remaining > 1 else ''} to start analysis",
            description=(
                "With 3 or more records you get cycle regularity analysis "
                "and more accurate predictions."
            ),
            type=InsightType.INFO
        )]
    return []

def generate_insights(
    periods: Iterable,
    symptoms: Iterable,
    prediction: Optional[CyclePrediction],
    cycle_day: Optional[int],
    today: Optional[DateLike] = None
) -> List[Insight]:
    """
    Generate up to three personalized insights.

    Args:
        periods: Period records in any order
        symptoms: Symptom records in any order
        prediction: Current prediction, if any
        cycle_day: Current 1-based cycle day, if known
        today: Reference date for the streak rule, defaults to the current date

    Returns:
        At most three Insight objects in rule priority order

    Raises:
        InvalidInputError: If any record fails validation
    """
    period_records = get_active_periods(coerce_periods(periods))
    symptom_records = coerce_symptoms(symptoms)
    reference = parse_date(today) if today is not None else date.today()

    insights = [
        *check_regularity(period_records),
        *check_preperiod_pattern(period_records, symptom_records),
        *check_phase_tip(prediction, cycle_day),
        *check_streak(period_records, symptom_records, reference),
        *check_severity_trend(symptom_records),
        *check_engagement(period_records),
    ]

    logger.debug(
        "Generated insights",
        extra={"candidates": [i.id for i in insights], "returned": len(insights[:MAX_INSIGHTS])}
    )
    return insights[:MAX_INSIGHTS]
