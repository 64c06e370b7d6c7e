"""
Currency and percentage formatting for display.

Amounts are Indian rupees with lakh/crore digit grouping.
"""

import re

RUPEE = "₹"
LAKH = 100_000
CRORE = 10_000_000


def format_inr(amount: float) -> str:
    """Format as whole rupees with Indian grouping, e.g. ₹11,61,695."""
    rounded = int(round(amount))
    sign = "-" if rounded < 0 else ""
    digits = f"{abs(rounded)}"
    last_three = digits[-3:]
    other = digits[:-3]
    if other:
        other = re.sub(r"(\d)(?=(\d{2})+(?!\d))", r"\1,", other)
        return f"{sign}{RUPEE}{other},{last_three}"
    return f"{sign}{RUPEE}{last_three}"


def format_inr_compact(amount: float) -> str:
    """Short form in lakhs or crores, e.g. ₹11.62 L, ₹1.25 Cr."""
    sign = "-" if amount < 0 else ""
    value = abs(amount)
    if value >= CRORE:
        return f"{sign}{RUPEE}{value / CRORE:.2f} Cr"
    if value >= LAKH:
        return f"{sign}{RUPEE}{value / LAKH:.2f} L"
    return format_inr(amount)


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a percentage number (12.5 -> '12.5%')."""
    return f"{value:.{decimals}f}%"
