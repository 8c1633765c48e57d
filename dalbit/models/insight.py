"""
Insight models produced by the pattern analyzer and the insight generator.
"""
from enum import Enum
from pydantic import BaseModel

from dalbit.models.phase import CyclePhase
from dalbit.models.symptom import SymptomType

class InsightType(str, Enum):
    """
    Severity tag attached to a human-readable insight.
    """
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    WARNING = "warning"
    INFO = "info"

class Insight(BaseModel):
    """
    Represents one human-readable observation about the user's data.
    """
    id: str
    icon: str
    title: str
    description: str
    type: InsightType

class SymptomInsight(BaseModel):
    """
    A symptom type that is over-represented in one cycle phase.

    ``probability`` and ``baseline`` are Laplace-smoothed daily rates;
    ``lift`` is their ratio. Sample sizes are kept for transparency.
    """
    symptom_type: SymptomType
    phase: CyclePhase
    probability: float
    baseline: float
    lift: float
    sample_days: int
    cycle_count: int
