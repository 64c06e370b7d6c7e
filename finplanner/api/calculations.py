"""
Financial calculator API endpoints.

These endpoints accept calculator inputs and return results for the
dashboard. Rates are percentages. A calculator that cannot compute with the
given inputs answers 400.
"""

from dataclasses import asdict
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from finplanner.calculations import emi, goal, growth, household, recurring, sip
from finplanner.config import get_settings

router = APIRouter()
settings = get_settings()


def _insufficient(calculator: str) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail=f"Insufficient input for the {calculator} calculator",
    )


class GrowthResponse(BaseModel):
    """Result of a lumpsum or SIP calculation."""

    future_value: float
    invested_amount: float
    estimated_returns: float
    inflation_adjusted_value: float


class ProjectionPointResponse(BaseModel):
    year: int
    projected_value: float
    invested_so_far: float
    inflation_adjusted_value: Optional[float] = None


class LumpsumInput(BaseModel):
    """Input for a one-time investment."""

    principal: float
    annual_rate: float
    years: float
    inflation_rate: float = Field(default_factory=lambda: settings.default_inflation_rate)
    compounding_frequency: int = 1


@router.post("/lumpsum", response_model=GrowthResponse)
async def calculate_lumpsum(inputs: LumpsumInput):
    """Future value of a one-time investment."""
    result = growth.calculate_compound_growth(
        principal=inputs.principal,
        annual_rate=inputs.annual_rate,
        years=inputs.years,
        inflation_rate=inputs.inflation_rate,
        compounding_frequency=inputs.compounding_frequency,
    )
    if result is None:
        raise _insufficient("lumpsum")
    return GrowthResponse(**asdict(result))


class SipInput(BaseModel):
    """Input for a monthly SIP."""

    monthly_investment: float
    annual_rate: float
    years: float
    inflation_rate: float = Field(default_factory=lambda: settings.default_inflation_rate)


@router.post("/sip", response_model=GrowthResponse)
async def calculate_sip(inputs: SipInput):
    """Maturity value of a monthly SIP."""
    result = sip.calculate_sip(
        monthly_investment=inputs.monthly_investment,
        annual_rate=inputs.annual_rate,
        years=inputs.years,
        inflation_rate=inputs.inflation_rate,
    )
    if result is None:
        raise _insufficient("SIP")
    return GrowthResponse(**asdict(result))


class RecurringInput(BaseModel):
    """Input for a lumpsum with recurring reinvestments."""

    initial_lumpsum: float
    recurring_amount: float = 0.0
    frequency: recurring.ReinvestmentFrequency = recurring.ReinvestmentFrequency.yearly
    annual_rate: float
    years: int
    inflation_rate: float = Field(default_factory=lambda: settings.default_inflation_rate)


class RecurringResponse(BaseModel):
    schedule: List[ProjectionPointResponse]
    total_value: float
    total_investment: float
    estimated_returns: float
    inflation_adjusted_total_value: float


@router.post("/recurring", response_model=RecurringResponse)
async def calculate_recurring(inputs: RecurringInput):
    """Year-by-year value of a lumpsum plus recurring investments."""
    result = recurring.calculate_recurring_investment(
        initial_lumpsum=inputs.initial_lumpsum,
        recurring_amount=inputs.recurring_amount,
        annual_rate=inputs.annual_rate,
        years=inputs.years,
        inflation_rate=inputs.inflation_rate,
        frequency=inputs.frequency,
    )
    if result is None:
        raise _insufficient("recurring investment")

    return RecurringResponse(
        schedule=[ProjectionPointResponse(**asdict(point)) for point in result.schedule],
        total_value=result.total_value,
        total_investment=result.total_investment,
        estimated_returns=result.estimated_returns,
        inflation_adjusted_total_value=result.inflation_adjusted_total_value,
    )


class InvestmentEntryInput(BaseModel):
    amount: float
    start_year: int = 0
    inflation_rate: float = 0.0


class GoalInput(BaseModel):
    """Input for a goal projection over irregular investments."""

    investments: List[InvestmentEntryInput]
    annual_rate: float
    total_years: int


class GoalResponse(BaseModel):
    schedule: List[ProjectionPointResponse]
    total_value: float
    total_invested: float
    inflation_adjusted_total_value: float


@router.post("/goal", response_model=GoalResponse)
async def calculate_goal(inputs: GoalInput):
    """Project irregular investments up to the goal horizon."""
    result = goal.project_goal(
        entries=[goal.InvestmentEntry(**entry.model_dump()) for entry in inputs.investments],
        annual_rate=inputs.annual_rate,
        total_years=inputs.total_years,
    )
    if result is None:
        raise _insufficient("goal")

    return GoalResponse(
        schedule=[ProjectionPointResponse(**asdict(point)) for point in result.schedule],
        total_value=result.total_value,
        total_invested=result.total_invested,
        inflation_adjusted_total_value=result.inflation_adjusted_total_value,
    )


class EmiInput(BaseModel):
    """Input for the EMI calculator."""

    principal: float
    annual_rate: float
    tenure_years: float
    interest_model: emi.InterestModel = emi.InterestModel.reducing
    start_date: Optional[date] = None


class AmortizationRowResponse(BaseModel):
    year: int
    emi_paid: float
    principal_paid: float
    interest_paid: float
    ending_balance: float
    last_payment_date: Optional[date] = None


class EmiResponse(BaseModel):
    monthly_emi: float
    total_interest: float
    total_payment: float
    principal_amount: float
    interest_model: emi.InterestModel
    schedule: List[AmortizationRowResponse]
    payoff_date: Optional[date] = None


@router.post("/emi", response_model=EmiResponse)
async def calculate_emi(inputs: EmiInput):
    """Generate the EMI and yearly amortization schedule."""
    result = emi.calculate_emi(
        principal=inputs.principal,
        annual_rate=inputs.annual_rate,
        tenure_years=inputs.tenure_years,
        interest_model=inputs.interest_model,
        start_date=inputs.start_date,
    )
    if result is None:
        raise _insufficient("EMI")
    return EmiResponse(**asdict(result))


class ExpenseInput(BaseModel):
    rent: float = Field(0.0, ge=0)
    utilities: float = Field(0.0, ge=0)
    transport: float = Field(0.0, ge=0)
    food: float = Field(0.0, ge=0)
    entertainment: float = Field(0.0, ge=0)
    healthcare: float = Field(0.0, ge=0)
    other: float = Field(0.0, ge=0)


class LoanInput(BaseModel):
    principal: float = Field(0.0, ge=0)
    emi: float = Field(0.0, ge=0)
    annual_rate: float = Field(0.0, ge=0)
    tenure_years: float = Field(0.0, ge=0)
    loan_type: str = ""


class InsuranceInput(BaseModel):
    invested: bool = False
    amount: float = Field(0.0, ge=0)
    frequency: str = "yearly"


class HouseholdInput(BaseModel):
    """Input for the household cashflow summary."""

    monthly_income: float = Field(0.0, ge=0)
    annual_income: float = Field(0.0, ge=0)
    expenses: ExpenseInput = Field(default_factory=ExpenseInput)
    loans: List[LoanInput] = []
    health_insurance: Optional[InsuranceInput] = None
    term_insurance: Optional[InsuranceInput] = None
    monthly_sip: float = Field(0.0, ge=0)
    emergency_fund_balance: Optional[float] = Field(None, ge=0)


class BudgetResponse(BaseModel):
    expense_pct: float
    emi_pct: float
    investment_pct: float
    expense_on_track: bool
    emi_on_track: bool
    investment_on_track: bool


class EmergencyFundResponse(BaseModel):
    balance: float
    minimum: float
    maximum: float
    status: household.EmergencyFundStatus


class HouseholdResponse(BaseModel):
    total_monthly_income: float
    total_monthly_expenses: float
    total_monthly_emi: float
    total_monthly_insurance: float
    monthly_sip: float
    net_monthly_cashflow: float
    total_outstanding_loans: float
    has_surplus: bool
    budget: Optional[BudgetResponse] = None
    emergency_fund: Optional[EmergencyFundResponse] = None


@router.post("/household", response_model=HouseholdResponse)
async def calculate_household(inputs: HouseholdInput):
    """Net monthly cashflow, budget ratios and emergency fund check."""

    def premium(policy: Optional[InsuranceInput]):
        if policy is None:
            return None
        return household.InsurancePremium(**policy.model_dump())

    summary = household.summarize_household(
        monthly_income=inputs.monthly_income,
        annual_income=inputs.annual_income,
        expenses=household.ExpenseSet(**inputs.expenses.model_dump()),
        loans=[household.Loan(**loan.model_dump()) for loan in inputs.loans],
        health_insurance=premium(inputs.health_insurance),
        term_insurance=premium(inputs.term_insurance),
        monthly_sip=inputs.monthly_sip,
        emergency_fund_balance=inputs.emergency_fund_balance,
    )

    budget = None
    if summary.budget is not None:
        budget = BudgetResponse(
            expense_pct=summary.budget.expense_pct,
            emi_pct=summary.budget.emi_pct,
            investment_pct=summary.budget.investment_pct,
            expense_on_track=summary.budget.expense_on_track,
            emi_on_track=summary.budget.emi_on_track,
            investment_on_track=summary.budget.investment_on_track,
        )

    emergency_fund = None
    if summary.emergency_fund is not None:
        emergency_fund = EmergencyFundResponse(**asdict(summary.emergency_fund))

    return HouseholdResponse(
        total_monthly_income=summary.total_monthly_income,
        total_monthly_expenses=summary.total_monthly_expenses,
        total_monthly_emi=summary.total_monthly_emi,
        total_monthly_insurance=summary.total_monthly_insurance,
        monthly_sip=summary.monthly_sip,
        net_monthly_cashflow=summary.net_monthly_cashflow,
        total_outstanding_loans=summary.total_outstanding_loans,
        has_surplus=summary.has_surplus,
        budget=budget,
        emergency_fund=emergency_fund,
    )
