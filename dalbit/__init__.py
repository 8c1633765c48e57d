"""
Cycle prediction and symptom insight engine for the Dalbit period tracker.
"""
__version__ = "0.1.0"
