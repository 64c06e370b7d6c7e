"""
Compound Growth Calculations

Future value of a single principal compounded at a fixed rate.
Rates are passed as percentages (12 means 12%), matching the dashboard inputs.
"""

import math
from dataclasses import dataclass
from typing import Optional

# Longest horizon any calculator projects over; longer ones get no result.
MAX_YEARS = 100


@dataclass
class ProjectionPoint:
    """A single year of a multi-year projection."""

    year: int
    projected_value: float
    invested_so_far: float
    inflation_adjusted_value: Optional[float] = None


@dataclass
class GrowthResult:
    """Result of a single-principal or SIP projection."""

    future_value: float
    invested_amount: float
    estimated_returns: float
    inflation_adjusted_value: float


def to_decimal(rate_percent: float) -> float:
    """Convert a percentage rate (e.g. 12) to a decimal (0.12)."""
    return rate_percent / 100


def growth_factor(annual_rate: float, years: float, periods_per_year: int = 1) -> float:
    """
    Compound growth multiplier.

    Args:
        annual_rate: Annual rate as decimal
        years: Number of years
        periods_per_year: Compounding periods per year

    Returns:
        (1 + annual_rate / periods_per_year) ** (periods_per_year * years)
    """
    return (1 + annual_rate / periods_per_year) ** (periods_per_year * years)


def discount_for_inflation(value: float, inflation_rate: float, years: float) -> float:
    """Express a future value in today's money. inflation_rate is a decimal."""
    return value / ((1 + inflation_rate) ** years)


def is_finite(*values: float) -> bool:
    """True when every value is a finite number."""
    return all(math.isfinite(value) for value in values)


def calculate_compound_growth(
    principal: float,
    annual_rate: float,
    years: float,
    inflation_rate: float = 0.0,
    compounding_frequency: int = 1,
) -> Optional[GrowthResult]:
    """
    Calculate the future value of a one-time investment.

    Args:
        principal: Amount invested today
        annual_rate: Expected annual return in percent
        years: Investment period in years
        inflation_rate: Annual inflation in percent
        compounding_frequency: Compounding periods per year (1 = annual)

    Returns:
        GrowthResult, or None when the inputs are insufficient
    """
    if principal <= 0 or annual_rate <= 0 or years <= 0:
        return None
    if inflation_rate < 0 or compounding_frequency < 1 or years > MAX_YEARS:
        return None

    try:
        future_value = principal * growth_factor(
            to_decimal(annual_rate), years, compounding_frequency
        )
        real_value = discount_for_inflation(
            future_value, to_decimal(inflation_rate), years
        )
    except OverflowError:
        return None
    if not is_finite(future_value, real_value):
        return None

    return GrowthResult(
        future_value=future_value,
        invested_amount=principal,
        estimated_returns=future_value - principal,
        inflation_adjusted_value=real_value,
    )
