"""
Period model definition for recorded menstrual periods.
"""
from enum import Enum
from datetime import date, datetime
from typing import Dict, Optional
from pydantic import BaseModel, field_validator, model_validator

from dalbit.models.dates import to_calendar_date

class FlowIntensity(str, Enum):
    """
    Flow intensity recorded for a period or a single period day.
    """
    SPOTTING = "spotting"
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"

class Period(BaseModel):
    """
    Represents one recorded period, anchored on its start date.

    A missing end date means the period is ongoing or was never closed.
    Records are never removed; ``deleted_at`` marks a soft delete.
    """
    id: Optional[str] = None
    user_id: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    flow_intensity: Optional[FlowIntensity] = None
    flow_intensities: Optional[Dict[date, FlowIntensity]] = None  # Per-day overrides
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_calendar_date(cls, value):
        """Accept only dates, datetimes and YYYY-MM-DD strings."""
        if value is None:
            return value
        return to_calendar_date(value)

    @field_validator("flow_intensities", mode="before")
    @classmethod
    def parse_override_dates(cls, value):
        """Apply the same date rules to the per-day override keys."""
        if isinstance(value, dict):
            return {to_calendar_date(day): flow for day, flow in value.items()}
        return value

    @model_validator(mode="after")
    def check_end_after_start(self) -> "Period":
        """Reject periods that end before they start."""
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(
                f"end_date {self.end_date} is before start_date {self.start_date}"
            )
        return self

    @property
    def is_active(self) -> bool:
        """Check if the period has not been soft-deleted."""
        return self.deleted_at is None
