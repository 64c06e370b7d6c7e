"""
Request and response contracts shared by the API and the plan service.
"""

from finplanner.schemas.plan import (
    AllocationShare,
    AssetAllocation,
    InvestmentPlan,
    Suggestion,
)
from finplanner.schemas.profile import (
    Expenses,
    FinancialProfile,
    InsuranceHolding,
    InvestmentHolding,
    Investments,
    LoanDetails,
)

__all__ = [
    "AllocationShare",
    "AssetAllocation",
    "InvestmentPlan",
    "Suggestion",
    "Expenses",
    "FinancialProfile",
    "InsuranceHolding",
    "InvestmentHolding",
    "Investments",
    "LoanDetails",
]
