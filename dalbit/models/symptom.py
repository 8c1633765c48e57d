"""
Symptom model definition for daily symptom observations.
"""
from enum import Enum
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from dalbit.models.dates import to_calendar_date

class SymptomType(str, Enum):
    """
    Closed set of symptom types a user can record.
    """
    CRAMPS = "cramps"
    HEADACHE = "headache"
    BACKACHE = "backache"
    BLOATING = "bloating"
    FATIGUE = "fatigue"
    NAUSEA = "nausea"
    BREAST_TENDERNESS = "breast_tenderness"
    MOOD_HAPPY = "mood_happy"
    MOOD_SAD = "mood_sad"
    MOOD_IRRITABLE = "mood_irritable"
    MOOD_ANXIOUS = "mood_anxious"
    MOOD_CALM = "mood_calm"
    ACNE = "acne"
    INSOMNIA = "insomnia"
    CRAVINGS = "cravings"

class Symptom(BaseModel):
    """
    Represents one symptom observation with its severity on a given day.
    """
    id: Optional[str] = None
    user_id: Optional[str] = None
    date: date
    symptom_type: SymptomType
    severity: int = Field(..., ge=1, le=5, strict=True)
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_calendar_date(cls, value):
        """Accept only dates, datetimes and YYYY-MM-DD strings."""
        return to_calendar_date(value)
