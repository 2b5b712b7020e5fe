"""
Display formatting.

Locale is fixed regardless of the data: amounts are US-dollar style
("$1,234.56", "-$40.00") and dates are short month/day/year ("Jan 5, 2024").
"""

import datetime as dt
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

INVALID_DATE = "Invalid Date"

_CENT = Decimal("0.01")


def format_currency(amount: float) -> str:
    """Format an amount as US dollars, rounding half away from zero."""
    if math.isnan(amount):
        return "$NaN"
    if math.isinf(amount):
        return "-$∞" if amount < 0 else "$∞"

    # Decimal(float) is exact, so ties round the way the stored value says
    exact = Decimal(amount)
    with localcontext() as ctx:
        # Enough digits for every integer digit plus the cents
        ctx.prec = max(ctx.prec, exact.adjusted() + 3)
        cents = exact.quantize(_CENT, rounding=ROUND_HALF_UP)
        digits = f"{cents.copy_abs():,.2f}"
    sign = "-" if amount < 0 else ""
    return f"{sign}${digits}"


def format_date(value: str) -> str:
    """Format a stored ISO date as "Jan 5, 2024"."""
    try:
        parsed = dt.date.fromisoformat(value)
    except (TypeError, ValueError):
        return INVALID_DATE
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def capitalize_label(value: str) -> str:
    """Upper-case the first character only: "food" -> "Food"."""
    return value[:1].upper() + value[1:]
