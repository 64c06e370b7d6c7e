"""
Household Cashflow Calculations

Combines income, itemized expenses, loan EMIs and insurance premiums into a
net monthly cashflow, 50-30-20 budget ratios and an emergency fund check.
"""

import enum
from dataclasses import dataclass, fields
from typing import Iterable, Optional

# 50-30-20 rule thresholds (percent of monthly income)
EXPENSE_LIMIT_PCT = 50.0
EMI_LIMIT_PCT = 30.0
INVESTMENT_TARGET_PCT = 20.0

# Emergency fund band, in months of income
EMERGENCY_FUND_MIN_MONTHS = 6
EMERGENCY_FUND_MAX_MONTHS = 18

PREMIUM_MONTHS = {
    "monthly": 1,
    "quarterly": 3,
    "half-yearly": 6,
    "yearly": 12,
}


@dataclass
class ExpenseSet:
    """Monthly spending by category."""

    rent: float = 0.0
    utilities: float = 0.0
    transport: float = 0.0
    food: float = 0.0
    entertainment: float = 0.0
    healthcare: float = 0.0
    other: float = 0.0

    @property
    def total(self) -> float:
        return sum(getattr(self, f.name) for f in fields(self))


@dataclass
class Loan:
    """An existing loan; only the EMI feeds the monthly cashflow."""

    principal: float = 0.0
    emi: float = 0.0
    annual_rate: float = 0.0
    tenure_years: float = 0.0
    loan_type: str = ""


@dataclass
class InsurancePremium:
    """An insurance policy and its premium schedule."""

    invested: bool = False
    amount: float = 0.0
    frequency: str = "yearly"

    def monthly_amount(self) -> float:
        """Premium normalized to a monthly figure."""
        if not self.invested or not self.amount:
            return 0.0
        months = PREMIUM_MONTHS.get(self.frequency)
        if months is None:
            return 0.0
        return self.amount / months


@dataclass
class BudgetRatios:
    """Shares of monthly income, each computed independently."""

    expense_pct: float
    emi_pct: float
    investment_pct: float

    @property
    def expense_on_track(self) -> bool:
        return self.expense_pct <= EXPENSE_LIMIT_PCT

    @property
    def emi_on_track(self) -> bool:
        return self.emi_pct <= EMI_LIMIT_PCT

    @property
    def investment_on_track(self) -> bool:
        return self.investment_pct >= INVESTMENT_TARGET_PCT


class EmergencyFundStatus(str, enum.Enum):
    low = "low"
    good = "good"
    high = "high"


@dataclass
class EmergencyFundCheck:
    balance: float
    minimum: float
    maximum: float
    status: EmergencyFundStatus


@dataclass
class HouseholdSummary:
    """Monthly figures derived from one profile snapshot."""

    total_monthly_income: float
    total_monthly_expenses: float
    total_monthly_emi: float
    total_monthly_insurance: float
    monthly_sip: float
    net_monthly_cashflow: float
    total_outstanding_loans: float
    budget: Optional[BudgetRatios] = None
    emergency_fund: Optional[EmergencyFundCheck] = None

    @property
    def has_surplus(self) -> bool:
        return self.net_monthly_cashflow > 0


def normalize_premium(amount: float, frequency: str) -> float:
    """Convert a premium paid at the given frequency to a monthly amount."""
    return InsurancePremium(invested=True, amount=amount, frequency=frequency).monthly_amount()


def calculate_budget_ratios(
    total_monthly_income: float,
    total_monthly_expenses: float,
    total_monthly_emi: float,
    monthly_investment: float,
) -> Optional[BudgetRatios]:
    """50-30-20 percentages; None without income to divide by."""
    if total_monthly_income <= 0:
        return None

    return BudgetRatios(
        expense_pct=total_monthly_expenses / total_monthly_income * 100,
        emi_pct=total_monthly_emi / total_monthly_income * 100,
        investment_pct=monthly_investment / total_monthly_income * 100,
    )


def check_emergency_fund(
    balance: float, total_monthly_income: float
) -> Optional[EmergencyFundCheck]:
    """Classify an emergency fund against 6 to 18 months of income."""
    if total_monthly_income <= 0 or balance < 0:
        return None

    minimum = total_monthly_income * EMERGENCY_FUND_MIN_MONTHS
    maximum = total_monthly_income * EMERGENCY_FUND_MAX_MONTHS

    if balance < minimum:
        status = EmergencyFundStatus.low
    elif balance > maximum:
        status = EmergencyFundStatus.high
    else:
        status = EmergencyFundStatus.good

    return EmergencyFundCheck(
        balance=balance, minimum=minimum, maximum=maximum, status=status
    )


def summarize_household(
    monthly_income: float = 0.0,
    annual_income: float = 0.0,
    expenses: Optional[ExpenseSet] = None,
    loans: Iterable[Loan] = (),
    health_insurance: Optional[InsurancePremium] = None,
    term_insurance: Optional[InsurancePremium] = None,
    monthly_sip: float = 0.0,
    emergency_fund_balance: Optional[float] = None,
) -> HouseholdSummary:
    """
    Derive the monthly cashflow picture of a household.

    Annual income is spread over 12 months. Loan EMIs are taken as given.
    When monthly_sip is non-zero it is also deducted from the net cashflow.

    Args:
        monthly_income: Salary and other monthly income
        annual_income: Income received yearly (bonus, rent, ...)
        expenses: Monthly expenses by category
        loans: Existing loans
        health_insurance: Health insurance premium
        term_insurance: Term insurance premium
        monthly_sip: Recurring monthly investment
        emergency_fund_balance: Current emergency fund, if known

    Returns:
        HouseholdSummary
    """
    expenses = expenses or ExpenseSet()
    loans = list(loans)

    total_monthly_expenses = expenses.total
    total_monthly_emi = sum(loan.emi for loan in loans)
    total_monthly_income = monthly_income + annual_income / 12
    total_monthly_insurance = sum(
        premium.monthly_amount()
        for premium in (health_insurance, term_insurance)
        if premium is not None
    )

    net_monthly_cashflow = (
        total_monthly_income
        - total_monthly_expenses
        - total_monthly_emi
        - total_monthly_insurance
        - monthly_sip
    )

    emergency_fund = None
    if emergency_fund_balance is not None:
        emergency_fund = check_emergency_fund(emergency_fund_balance, total_monthly_income)

    return HouseholdSummary(
        total_monthly_income=total_monthly_income,
        total_monthly_expenses=total_monthly_expenses,
        total_monthly_emi=total_monthly_emi,
        total_monthly_insurance=total_monthly_insurance,
        monthly_sip=monthly_sip,
        net_monthly_cashflow=net_monthly_cashflow,
        total_outstanding_loans=sum(loan.principal for loan in loans),
        budget=calculate_budget_ratios(
            total_monthly_income,
            total_monthly_expenses,
            total_monthly_emi,
            monthly_sip + total_monthly_insurance,
        ),
        emergency_fund=emergency_fund,
    )
