"""
EMI and Loan Amortization Calculations

Monthly installment and a yearly amortization schedule under either a
reducing-balance or a flat interest model. Schedule years start at 1.
"""

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple, Union

from dateutil.relativedelta import relativedelta

from finplanner.calculations.growth import MAX_YEARS, is_finite, to_decimal


class InterestModel(str, enum.Enum):
    """How interest is charged on the loan."""

    reducing = "reducing"
    flat = "flat"


@dataclass
class AmortizationRow:
    """Installments aggregated over one loan year."""

    year: int
    emi_paid: float
    principal_paid: float
    interest_paid: float
    ending_balance: float
    last_payment_date: Optional[date] = None


@dataclass
class EmiResult:
    """Installment, totals and the yearly schedule."""

    monthly_emi: float
    total_interest: float
    total_payment: float
    principal_amount: float
    interest_model: InterestModel
    schedule: List[AmortizationRow] = field(default_factory=list)
    payoff_date: Optional[date] = None


# (interest, principal) paid in one month
Installment = Tuple[float, float]


def calculate_payment(principal: float, monthly_rate: float, months: int) -> float:
    """
    Reducing-balance EMI.

    Args:
        principal: Loan principal
        monthly_rate: Monthly rate as decimal
        months: Number of installments

    Returns:
        Monthly installment
    """
    if monthly_rate == 0:
        return principal / months

    compounded = (1 + monthly_rate) ** months
    return principal * monthly_rate * compounded / (compounded - 1)


def _reducing_installments(
    principal: float, annual_rate: float, tenure_years: float, months: int
) -> Tuple[float, float, List[Installment]]:
    monthly_rate = annual_rate / 12
    emi = calculate_payment(principal, monthly_rate, months)

    installments = []
    balance = principal
    for month in range(1, months + 1):
        interest = balance * monthly_rate
        principal_part = emi - interest
        if month == months:
            # absorb floating point residue in the last installment
            principal_part = balance
        principal_part = min(principal_part, balance)
        installments.append((interest, principal_part))
        balance = max(0.0, balance - principal_part)

    total_payment = emi * months
    return emi, total_payment - principal, installments


def _flat_installments(
    principal: float, annual_rate: float, tenure_years: float, months: int
) -> Tuple[float, float, List[Installment]]:
    total_interest = principal * annual_rate * tenure_years
    emi = (principal + total_interest) / months
    installment = (total_interest / months, principal / months)
    return emi, total_interest, [installment] * months


_INSTALLMENT_BUILDERS: Dict[
    InterestModel, Callable[[float, float, float, int], Tuple[float, float, List[Installment]]]
] = {
    InterestModel.reducing: _reducing_installments,
    InterestModel.flat: _flat_installments,
}


def aggregate_yearly(
    principal: float,
    installments: List[Installment],
    start_date: Optional[date] = None,
) -> List[AmortizationRow]:
    """
    Roll monthly installments up into loan years.

    A row is flushed every 12 months and at the final installment.
    """
    rows = []
    balance = principal
    months = len(installments)
    year_interest = 0.0
    year_principal = 0.0

    for month, (interest, principal_part) in enumerate(installments, start=1):
        year_interest += interest
        year_principal += principal_part
        balance -= principal_part

        if month % 12 == 0 or month == months:
            last_payment_date = None
            if start_date is not None:
                last_payment_date = start_date + relativedelta(months=month - 1)

            rows.append(
                AmortizationRow(
                    year=(month - 1) // 12 + 1,
                    emi_paid=year_interest + year_principal,
                    principal_paid=year_principal,
                    interest_paid=year_interest,
                    ending_balance=max(0.0, balance),
                    last_payment_date=last_payment_date,
                )
            )
            year_interest = 0.0
            year_principal = 0.0

    if rows:
        rows[-1].ending_balance = 0.0

    return rows


def calculate_emi(
    principal: float,
    annual_rate: float,
    tenure_years: float,
    interest_model: Union[InterestModel, str] = InterestModel.reducing,
    start_date: Optional[date] = None,
) -> Optional[EmiResult]:
    """
    Calculate the EMI and yearly amortization schedule of a loan.

    Args:
        principal: Loan amount
        annual_rate: Annual interest rate in percent
        tenure_years: Loan tenure in years
        interest_model: "reducing" or "flat"
        start_date: Date of the first installment, used to date the schedule

    Returns:
        EmiResult, or None when the inputs are insufficient
    """
    if principal <= 0 or annual_rate <= 0 or tenure_years <= 0:
        return None
    if tenure_years > MAX_YEARS:
        return None

    try:
        interest_model = InterestModel(interest_model)
    except ValueError:
        return None

    months = int(round(tenure_years * 12))
    if months < 1:
        return None

    build = _INSTALLMENT_BUILDERS[interest_model]
    try:
        monthly_emi, total_interest, installments = build(
            principal, to_decimal(annual_rate), tenure_years, months
        )
    except OverflowError:
        return None
    if not is_finite(monthly_emi, principal + total_interest):
        return None

    payoff_date = None
    if start_date is not None:
        payoff_date = start_date + relativedelta(months=months - 1)

    return EmiResult(
        monthly_emi=monthly_emi,
        total_interest=total_interest,
        total_payment=principal + total_interest,
        principal_amount=principal,
        interest_model=interest_model,
        schedule=aggregate_yearly(principal, installments, start_date),
        payoff_date=payoff_date,
    )
