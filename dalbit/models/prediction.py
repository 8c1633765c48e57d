"""
Prediction models derived from period history.
"""
from enum import Enum
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field

from dalbit.models.period import Period
from dalbit.models.phase import CyclePhaseInfo

class Confidence(str, Enum):
    """
    Coarse confidence tier based on how many periods back a prediction.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class FutureCycle(BaseModel):
    """
    One projected cycle, computed from its own start date.
    """
    cycle_number: int = Field(..., ge=1)
    period_start: date
    period_end: date
    ovulation_date: date
    fertile_window_start: date
    fertile_window_end: date

class CyclePrediction(BaseModel):
    """
    Snapshot prediction for the current cycle plus projected future cycles.

    Regenerated from period history on every call; never persisted.
    """
    next_period_date: date
    ovulation_date: date
    fertile_window_start: date
    fertile_window_end: date
    confidence: Confidence
    average_cycle_length: int
    future_cycles: List[FutureCycle] = Field(default_factory=list)

class CycleStatus(BaseModel):
    """
    Current cycle position: latest period, prediction, cycle day and phase.
    """
    prediction: Optional[CyclePrediction] = None
    cycle_day: Optional[int] = None
    phase_info: Optional[CyclePhaseInfo] = None
    last_period: Optional[Period] = None
