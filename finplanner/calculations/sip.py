"""
SIP (Systematic Investment Plan) Calculations

Future value of a fixed monthly contribution, invested at the start of
each month (annuity-due).
"""

from typing import Optional

from finplanner.calculations.growth import (
    MAX_YEARS,
    GrowthResult,
    discount_for_inflation,
    is_finite,
    to_decimal,
)


def annuity_due_factor(periodic_rate: float, periods: float) -> float:
    """
    Future value of 1 paid at the start of each period.

    With a zero rate the contributions simply add up, so the factor is the
    number of periods.
    """
    if periodic_rate == 0:
        return float(periods)
    return (((1 + periodic_rate) ** periods - 1) / periodic_rate) * (1 + periodic_rate)


def calculate_sip(
    monthly_investment: float,
    annual_rate: float,
    years: float,
    inflation_rate: float = 0.0,
) -> Optional[GrowthResult]:
    """
    Calculate the maturity value of a monthly SIP.

    Inflation is discounted yearly even though contributions compound
    monthly.

    Args:
        monthly_investment: Contribution per month
        annual_rate: Expected annual return in percent
        years: Investment period in years
        inflation_rate: Annual inflation in percent

    Returns:
        GrowthResult, or None when the inputs are insufficient
    """
    if monthly_investment <= 0 or annual_rate <= 0 or years <= 0:
        return None
    if inflation_rate < 0 or years > MAX_YEARS:
        return None

    monthly_rate = to_decimal(annual_rate) / 12
    months = years * 12

    invested_amount = monthly_investment * months
    try:
        future_value = monthly_investment * annuity_due_factor(monthly_rate, months)
        real_value = discount_for_inflation(
            future_value, to_decimal(inflation_rate), years
        )
    except OverflowError:
        return None
    if not is_finite(future_value, real_value, invested_amount):
        return None

    return GrowthResult(
        future_value=future_value,
        invested_amount=invested_amount,
        estimated_returns=future_value - invested_amount,
        inflation_adjusted_value=real_value,
    )
