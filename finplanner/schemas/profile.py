"""
Financial profile submitted by the dashboard.

Field names are camelCase on the wire. Amounts arrive as numbers or as the
strings typed into the forms; blank values count as zero.
"""

from datetime import date
from typing import Annotated, Any, List, Literal, Optional

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from finplanner.calculations.household import (
    ExpenseSet,
    HouseholdSummary,
    InsurancePremium,
    Loan,
    summarize_household,
)


def _blank_as_zero(value: Any) -> Any:
    if value is None:
        return 0.0
    if isinstance(value, str) and not value.strip():
        return 0.0
    return value


def _blank_as_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _blank_as_yearly(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return "yearly"
    return value


Amount = Annotated[float, BeforeValidator(_blank_as_zero), Field(ge=0)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Expenses(CamelModel):
    rent: Amount = 0.0
    utilities: Amount = 0.0
    transport: Amount = 0.0
    food: Amount = 0.0
    entertainment: Amount = 0.0
    healthcare: Amount = 0.0
    other: Amount = 0.0


class LoanDetails(CamelModel):
    id: Optional[int] = None
    type: str = ""
    amount: Amount = 0.0
    emi: Amount = 0.0
    rate: Amount = 0.0
    tenure: Amount = 0.0


class InvestmentHolding(CamelModel):
    invested: Literal["yes", "no"] = "no"
    amount: Amount = 0.0


class InsuranceHolding(InvestmentHolding):
    frequency: Annotated[
        Literal["monthly", "quarterly", "half-yearly", "yearly"],
        BeforeValidator(_blank_as_yearly),
    ] = "yearly"

    def to_premium(self) -> InsurancePremium:
        return InsurancePremium(
            invested=self.invested == "yes",
            amount=self.amount,
            frequency=self.frequency,
        )


class Investments(CamelModel):
    stocks: InvestmentHolding = Field(default_factory=InvestmentHolding)
    mutual_funds: InvestmentHolding = Field(default_factory=InvestmentHolding)
    bonds: InvestmentHolding = Field(default_factory=InvestmentHolding)
    real_estate: InvestmentHolding = Field(default_factory=InvestmentHolding)
    commodities: InvestmentHolding = Field(default_factory=InvestmentHolding)
    other: InvestmentHolding = Field(default_factory=InvestmentHolding)
    term_insurance: InsuranceHolding = Field(default_factory=InsuranceHolding)
    health_insurance: InsuranceHolding = Field(default_factory=InsuranceHolding)


class FinancialProfile(CamelModel):
    """A user's financial situation."""

    name: str = ""
    dob: Annotated[Optional[date], BeforeValidator(_blank_as_none)] = None
    risk_percentage: Annotated[float, BeforeValidator(_blank_as_zero), Field(ge=0, le=100)] = 0.0
    monthly_income: Amount = 0.0
    annual_income: Amount = 0.0
    expenses: Expenses = Field(default_factory=Expenses)
    loans: List[LoanDetails] = Field(default_factory=list)
    investments: Investments = Field(default_factory=Investments)

    def age(self, on: Optional[date] = None) -> Optional[int]:
        """Age in whole years, or None without a date of birth."""
        if self.dob is None:
            return None
        return relativedelta(on or date.today(), self.dob).years

    def household_summary(self) -> HouseholdSummary:
        """Monthly cashflow figures for this profile."""
        return summarize_household(
            monthly_income=self.monthly_income,
            annual_income=self.annual_income,
            expenses=ExpenseSet(**self.expenses.model_dump()),
            loans=[
                Loan(
                    principal=loan.amount,
                    emi=loan.emi,
                    annual_rate=loan.rate,
                    tenure_years=loan.tenure,
                    loan_type=loan.type,
                )
                for loan in self.loans
            ],
            health_insurance=self.investments.health_insurance.to_premium(),
            term_insurance=self.investments.term_insurance.to_premium(),
        )
