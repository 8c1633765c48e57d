"""
Summary models for the cycle report.
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field

from dalbit.models.period import FlowIntensity
from dalbit.models.symptom import SymptomType

class PeriodRow(BaseModel):
    """
    One row of the recent period table.
    """
    start_date: date
    end_date: Optional[date] = None
    period_length: Optional[int] = None
    cycle_length: Optional[int] = None  # Days since the previous period started
    flow_intensity: Optional[FlowIntensity] = None

class SymptomSummary(BaseModel):
    """
    Occurrence count and mean severity of one symptom type.
    """
    symptom_type: SymptomType
    count: int
    average_severity: float

class CycleSummary(BaseModel):
    """
    Aggregate statistics over the whole recorded history.
    """
    average_cycle_length: Optional[int] = None
    min_cycle_length: Optional[int] = None
    max_cycle_length: Optional[int] = None
    total_periods: int = 0
    recent_periods: List[PeriodRow] = Field(default_factory=list)
    top_symptoms: List[SymptomSummary] = Field(default_factory=list)
