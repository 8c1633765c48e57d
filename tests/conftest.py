"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date, timedelta
from typing import List

from dalbit.models.period import FlowIntensity, Period
from dalbit.models.symptom import Symptom, SymptomType

@pytest.fixture
def regular_periods() -> List[Period]:
    """Create five periods exactly 28 days apart, starting 2025-01-01."""
    return [
        Period(
            id=f"p{i}",
            user_id="123",
            start_date=date(2025, 1, 1) + timedelta(days=i * 28),
            end_date=date(2025, 1, 5) + timedelta(days=i * 28),
            flow_intensity=FlowIntensity.MEDIUM
        )
        for i in range(5)
    ]

@pytest.fixture
def irregular_periods() -> List[Period]:
    """Create periods with 20, 35, 22 and 40 day cycles."""
    return [
        Period(user_id="123", start_date=date(2025, 1, 1)),
        Period(user_id="123", start_date=date(2025, 1, 21)),   # 20 days
        Period(user_id="123", start_date=date(2025, 2, 25)),   # 35 days
        Period(user_id="123", start_date=date(2025, 3, 19)),   # 22 days
        Period(user_id="123", start_date=date(2025, 4, 28)),   # 40 days
    ]

@pytest.fixture
def three_cycle_periods() -> List[Period]:
    """Create four period starts giving three complete 28-day cycles."""
    return [
        Period(start_date=date(2025, 1, 1)),
        Period(start_date=date(2025, 1, 29)),
        Period(start_date=date(2025, 2, 26)),
        Period(start_date=date(2025, 3, 26)),
    ]

@pytest.fixture
def menstrual_cramps() -> List[Symptom]:
    """Cramps on days 1-3 of each of three cycles plus one luteal headache."""
    cramps = [
        Symptom(date=start + timedelta(days=offset), symptom_type=SymptomType.CRAMPS, severity=3)
        for start in (date(2025, 1, 1), date(2025, 1, 29), date(2025, 2, 26))
        for offset in range(3)
    ]
    headache = Symptom(date=date(2025, 1, 20), symptom_type=SymptomType.HEADACHE, severity=2)
    return cramps + [headache]
