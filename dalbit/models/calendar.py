"""
Calendar model definition for month grid rendering.
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field

from dalbit.models.period import FlowIntensity
from dalbit.models.symptom import Symptom

class CalendarDay(BaseModel):
    """
    Represents one cell of a month calendar with its cycle markers.
    """
    date: date
    is_period: bool = False
    is_predicted_period: bool = False
    is_fertile: bool = False
    is_ovulation: bool = False
    is_today: bool = False
    is_current_month: bool = False
    symptoms: List[Symptom] = Field(default_factory=list)
    flow_intensity: Optional[FlowIntensity] = None
    flow_color: Optional[str] = None  # Display color of the flow intensity

    @property
    def date_str(self) -> str:
        """ISO formatted date used as the calendar key."""
        return self.date.isoformat()
