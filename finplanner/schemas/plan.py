"""
Investment plan returned to the dashboard, whichever generator produced it.
"""

from typing import List

from pydantic import Field, model_validator

from finplanner.schemas.profile import CamelModel

ALLOCATION_TOLERANCE = 0.5


class AllocationShare(CamelModel):
    percentage: float = Field(ge=0, le=100)


class AssetAllocation(CamelModel):
    """Percentage split of the monthly investable amount."""

    stocks: AllocationShare
    bonds: AllocationShare
    mutual_funds: AllocationShare
    real_estate: AllocationShare
    other: AllocationShare

    @property
    def total(self) -> float:
        return sum(
            share.percentage
            for share in (
                self.stocks,
                self.bonds,
                self.mutual_funds,
                self.real_estate,
                self.other,
            )
        )

    @model_validator(mode="after")
    def ensure_total(self) -> "AssetAllocation":
        if abs(self.total - 100) > ALLOCATION_TOLERANCE:
            raise ValueError(f"asset allocation must sum to 100, got {self.total:g}")
        return self


class Suggestion(CamelModel):
    category: str
    description: str
    suggested_amount: str


class InvestmentPlan(CamelModel):
    asset_allocation: AssetAllocation
    suggestions: List[Suggestion] = Field(default_factory=list)
    reasoning: str = ""
