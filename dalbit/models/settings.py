"""
User settings model for prediction parameters.
"""
from pydantic import BaseModel, Field

class UserSettings(BaseModel):
    """
    Per-user parameters fed into prediction and calendar queries.
    """
    average_period_length: int = Field(5, ge=1, le=14)
    prediction_months: int = Field(3, ge=1, le=5)
