"""
Constants and shared lookup data for cycle-related services.
"""
from typing import Dict

from dalbit.models.period import FlowIntensity
from dalbit.models.phase import CyclePhase
from dalbit.models.symptom import SymptomType

# Cycle arithmetic
DEFAULT_CYCLE_LENGTH = 28
DEFAULT_PERIOD_LENGTH = 5
MIN_PERIOD_LENGTH = 1
LUTEAL_PHASE_LENGTH = 14  # Ovulation day = cycle length - 14
MENSTRUAL_PHASE_DAYS = 5
FERTILE_DAYS_BEFORE_OVULATION = 5
FERTILE_DAYS_AFTER_OVULATION = 1
MAX_VALID_CYCLE_LENGTH = 60  # Intervals outside (0, 60) are treated as entry errors

# Prediction
PREDICTION_INTERVALS = 3
DEFAULT_PREDICTION_MONTHS = 3
MIN_PREDICTION_MONTHS = 1
MAX_PREDICTION_MONTHS = 5
HIGH_CONFIDENCE_PERIODS = 6
MEDIUM_CONFIDENCE_PERIODS = 3

# Symptom pattern analysis; lift threshold is a tunable policy cutoff
MIN_PATTERN_PERIODS = 3
MIN_PATTERN_SYMPTOMS = 10
MIN_PATTERN_CYCLES = 3
MIN_PATTERN_DAYS = 10
MIN_PATTERN_LIFT = 1.5

# Insight rules; std-dev bands are tunable policy values
MAX_INSIGHTS = 3
MIN_PERIODS_FOR_ANALYSIS = 3
REGULARITY_INTERVALS = 6
REGULAR_STDDEV_MAX = 2.0
IRREGULAR_STDDEV_MIN = 5.0
PREPERIOD_RECENT_PERIODS = 6
PREPERIOD_MIN_DAYS_BEFORE = 1
PREPERIOD_MAX_DAYS_BEFORE = 3
PREPERIOD_MIN_OCCURRENCES = 2
LATE_LUTEAL_DAYS = 5
OVULATION_TIP_EXTRA_DAYS = 1  # Ovulation tip is still shown the day after the ovulation phase
STREAK_LOOKBACK_DAYS = 60
STREAK_MIN_DAYS = 7
SEVERITY_TREND_MIN_SYMPTOMS = 10
SEVERITY_TREND_DELTA = 0.5

# Report
REPORT_PERIOD_ROWS = 12
REPORT_TOP_SYMPTOMS = 8

PHASE_INFO = {
    CyclePhase.MENSTRUAL: {
        "label": "Menstrual",
        "description": "Period in progress",
        "partner_tip": (
            "Warm tea and plenty of rest help. "
            "Cramps are common, so be understanding."
        ),
        "color": "var(--color-period)",
    },
    CyclePhase.FOLLICULAR: {
        "label": "Follicular",
        "description": "Energy is rising",
        "partner_tip": (
            "Energy and mood are on the way up. "
            "A good time for an active date together."
        ),
        "color": "var(--color-success)",
    },
    CyclePhase.OVULATION: {
        "label": "Ovulation",
        "description": "Ovulation window",
        "partner_tip": (
            "This is the fertile window. "
            "A good time if you are planning a pregnancy."
        ),
        "color": "var(--color-ovulation)",
    },
    CyclePhase.LUTEAL: {
        "label": "Luteal",
        "description": "Getting ready for the next period",
        "partner_tip": (
            "PMS symptoms may appear. Be patient with mood changes. "
            "Sweet cravings are common."
        ),
        "color": "var(--color-primary)",
    },
}

SYMPTOM_LABELS: Dict[SymptomType, str] = {
    SymptomType.CRAMPS: "Cramps",
    SymptomType.HEADACHE: "Headache",
    SymptomType.BACKACHE: "Backache",
    SymptomType.BLOATING: "Bloating",
    SymptomType.FATIGUE: "Fatigue",
    SymptomType.NAUSEA: "Nausea",
    SymptomType.BREAST_TENDERNESS: "Breast tenderness",
    SymptomType.MOOD_HAPPY: "Happy",
    SymptomType.MOOD_SAD: "Sad",
    SymptomType.MOOD_IRRITABLE: "Irritable",
    SymptomType.MOOD_ANXIOUS: "Anxious",
    SymptomType.MOOD_CALM: "Calm",
    SymptomType.ACNE: "Acne",
    SymptomType.INSOMNIA: "Insomnia",
    SymptomType.CRAVINGS: "Cravings",
}

SYMPTOM_ICONS: Dict[SymptomType, str] = {
    SymptomType.CRAMPS: "🤕",
    SymptomType.HEADACHE: "😣",
    SymptomType.BACKACHE: "💆",
    SymptomType.BLOATING: "😮‍💨",
    SymptomType.FATIGUE: "😴",
    SymptomType.NAUSEA: "🤢",
    SymptomType.BREAST_TENDERNESS: "😖",
    SymptomType.MOOD_HAPPY: "😊",
    SymptomType.MOOD_SAD: "😢",
    SymptomType.MOOD_IRRITABLE: "😤",
    SymptomType.MOOD_ANXIOUS: "😰",
    SymptomType.MOOD_CALM: "😌",
    SymptomType.ACNE: "😓",
    SymptomType.INSOMNIA: "🌙",
    SymptomType.CRAVINGS: "🍫",
}

FLOW_LABELS: Dict[FlowIntensity, str] = {
    FlowIntensity.SPOTTING: "Spotting",
    FlowIntensity.LIGHT: "Light",
    FlowIntensity.MEDIUM: "Medium",
    FlowIntensity.HEAVY: "Heavy",
}

FLOW_COLORS: Dict[FlowIntensity, str] = {
    FlowIntensity.SPOTTING: "#fda4af",
    FlowIntensity.LIGHT: "#fb7185",
    FlowIntensity.MEDIUM: "#f43f5e",
    FlowIntensity.HEAVY: "#e11d48",
}
