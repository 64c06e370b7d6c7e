"""
Goal Projection

Projects a set of irregular investments, each starting in its own year and
carrying its own inflation assumption, at one common growth rate.
The series runs from year 0 to the horizon inclusive.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from finplanner.calculations.growth import MAX_YEARS, ProjectionPoint, to_decimal


@dataclass
class InvestmentEntry:
    """A single investment made at the start of start_year."""

    amount: float
    start_year: int = 0
    inflation_rate: float = 0.0  # percent


@dataclass
class GoalProjection:
    """Projected series plus the values at the horizon."""

    schedule: List[ProjectionPoint] = field(default_factory=list)
    total_value: float = 0.0
    total_invested: float = 0.0
    inflation_adjusted_total_value: float = 0.0


def _valid_entry(entry: InvestmentEntry) -> bool:
    return (
        entry.amount >= 0
        and entry.start_year >= 0
        and int(entry.start_year) == entry.start_year
        and entry.inflation_rate >= 0
    )


def project_goal(
    entries: Sequence[InvestmentEntry],
    annual_rate: float,
    total_years: int,
) -> Optional[GoalProjection]:
    """
    Project irregular investments year by year.

    Each entry grows for (year - start_year) years once its start year is
    reached, and its real value is discounted over those same elapsed years
    with the entry's own inflation rate.

    Args:
        entries: Investments with their start years and inflation rates
        annual_rate: Common expected annual return in percent (0 allowed)
        total_years: Horizon in whole years

    Returns:
        GoalProjection, or None when the inputs are insufficient
    """
    if not entries or annual_rate < 0:
        return None
    if total_years < 1 or total_years > MAX_YEARS or int(total_years) != total_years:
        return None
    if not all(_valid_entry(entry) for entry in entries):
        return None

    rate = to_decimal(annual_rate)
    years = np.arange(int(total_years) + 1)
    amounts = np.array([entry.amount for entry in entries], dtype=float)
    starts = np.array([entry.start_year for entry in entries], dtype=int)
    inflation = np.array([to_decimal(entry.inflation_rate) for entry in entries])

    # rows are entries, columns are years
    elapsed = years[np.newaxis, :] - starts[:, np.newaxis]
    active = elapsed >= 0
    exponent = np.where(active, elapsed, 0)

    try:
        with np.errstate(over="raise", invalid="raise"):
            growth = (1 + rate) ** exponent.astype(float)
            nominal = np.where(active, amounts[:, np.newaxis] * growth, 0.0)
            deflator = (1 + inflation[:, np.newaxis]) ** exponent.astype(float)
            real = np.where(active, nominal / deflator, 0.0)
            invested = np.where(active, amounts[:, np.newaxis], 0.0)

            projected_by_year = nominal.sum(axis=0)
            real_by_year = real.sum(axis=0)
            invested_by_year = invested.sum(axis=0)
    except FloatingPointError:
        return None
    if not np.isfinite(projected_by_year).all() or not np.isfinite(invested_by_year).all():
        return None

    schedule = [
        ProjectionPoint(
            year=int(year),
            projected_value=float(projected_by_year[index]),
            invested_so_far=float(invested_by_year[index]),
            inflation_adjusted_value=float(real_by_year[index]),
        )
        for index, year in enumerate(years)
    ]

    final = schedule[-1]
    return GoalProjection(
        schedule=schedule,
        total_value=final.projected_value,
        total_invested=final.invested_so_far,
        inflation_adjusted_total_value=final.inflation_adjusted_value,
    )
