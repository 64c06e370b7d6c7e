"""
Financial Calculation Engine

Pure calculators for personal finance planning. Every calculator returns
None instead of raising when its inputs are insufficient.
"""

from finplanner.calculations import (
    emi,
    formatting,
    goal,
    growth,
    household,
    recurring,
    sip,
)

__all__ = ["emi", "formatting", "goal", "growth", "household", "recurring", "sip"]
