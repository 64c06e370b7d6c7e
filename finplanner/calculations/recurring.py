"""
Lumpsum + Recurring Investment Calculations

Projects an initial lumpsum together with a fixed reinvestment made
yearly, half-yearly or quarterly. The year-by-year series starts at year 1.
"""

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Union

from finplanner.calculations.growth import (
    MAX_YEARS,
    ProjectionPoint,
    discount_for_inflation,
    is_finite,
    to_decimal,
)
from finplanner.calculations.sip import annuity_due_factor


class ReinvestmentFrequency(str, enum.Enum):
    """How often the recurring amount is reinvested."""

    yearly = "yearly"
    half_yearly = "half-yearly"
    quarterly = "quarterly"

    @property
    def periods_per_year(self) -> int:
        return {"yearly": 1, "half-yearly": 2, "quarterly": 4}[self.value]


@dataclass
class RecurringResult:
    """Year-by-year series plus final totals."""

    schedule: List[ProjectionPoint] = field(default_factory=list)
    total_value: float = 0.0
    total_investment: float = 0.0
    inflation_adjusted_total_value: float = 0.0

    @property
    def estimated_returns(self) -> float:
        return self.total_value - self.total_investment


def _recurring_future_value(amount: float, periodic_rate: float, periods: int) -> float:
    if amount == 0:
        return 0.0
    return amount * annuity_due_factor(periodic_rate, periods)


def calculate_recurring_investment(
    initial_lumpsum: float,
    recurring_amount: float,
    annual_rate: float,
    years: int,
    inflation_rate: float = 0.0,
    frequency: Union[ReinvestmentFrequency, str] = ReinvestmentFrequency.yearly,
) -> Optional[RecurringResult]:
    """
    Project a lumpsum plus recurring reinvestments.

    The lumpsum compounds annually; the recurring stream compounds at the
    annual rate split evenly across the reinvestment periods.

    Args:
        initial_lumpsum: Amount invested at the start
        recurring_amount: Amount reinvested every period
        annual_rate: Expected annual return in percent (0 allowed)
        years: Whole number of years to project
        inflation_rate: Annual inflation in percent
        frequency: Reinvestment frequency

    Returns:
        RecurringResult, or None when the inputs are insufficient
    """
    if initial_lumpsum < 0 or recurring_amount < 0:
        return None
    if initial_lumpsum + recurring_amount <= 0:
        return None
    if annual_rate < 0 or inflation_rate < 0:
        return None
    if years < 1 or years > MAX_YEARS or int(years) != years:
        return None

    try:
        frequency = ReinvestmentFrequency(frequency)
    except ValueError:
        return None

    years = int(years)
    rate = to_decimal(annual_rate)
    inflation = to_decimal(inflation_rate)
    ppy = frequency.periods_per_year
    periodic_rate = rate / ppy

    schedule = []
    try:
        for year in range(1, years + 1):
            periods_so_far = year * ppy
            value = initial_lumpsum * (1 + rate) ** year + _recurring_future_value(
                recurring_amount, periodic_rate, periods_so_far
            )
            schedule.append(
                ProjectionPoint(
                    year=year,
                    projected_value=value,
                    invested_so_far=initial_lumpsum + recurring_amount * periods_so_far,
                    inflation_adjusted_value=discount_for_inflation(value, inflation, year),
                )
            )
    except OverflowError:
        return None

    final = schedule[-1]
    if not is_finite(
        final.projected_value, final.invested_so_far, final.inflation_adjusted_value
    ):
        return None

    return RecurringResult(
        schedule=schedule,
        total_value=final.projected_value,
        total_investment=final.invested_so_far,
        inflation_adjusted_total_value=final.inflation_adjusted_value,
    )
