"""
Phase model definition for menstrual cycle phases.
"""
from enum import Enum
from pydantic import BaseModel

class CyclePhase(str, Enum):
    """
    Four-way partition of the menstrual cycle.
    """
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATION = "ovulation"
    LUTEAL = "luteal"

class CyclePhaseInfo(BaseModel):
    """
    Display information for a cycle phase, including the partner-facing tip.
    """
    phase: CyclePhase
    label: str
    description: str
    partner_tip: str
    color: str
