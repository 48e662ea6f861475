"""
Claim amount helpers.

Amounts arrive from callers either as numbers or as the text typed into a
form. Parsing follows form semantics: the longest leading numeric prefix is
used and anything unparseable becomes NaN, which fails every comparison.
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Amount = Union[int, float, str, None]

_NUMERIC_PREFIX = re.compile(r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(amount: Amount) -> float:
    """
    Parse a claim amount into a float.

    Args:
        amount: Number or text such as "280000" or "280000.50"

    Returns:
        The parsed value, or NaN when no numeric prefix is present
    """
    if amount is None or isinstance(amount, bool):
        return math.nan
    if isinstance(amount, (int, float)):
        return float(amount)

    match = _NUMERIC_PREFIX.match(str(amount).strip())
    if not match:
        return math.nan
    return float(match.group(0))


def amount_text(amount: Amount) -> str:
    """Textual form of an amount as it would appear in a query."""
    if amount is None:
        return ""
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def round_half_up(value: float, places: int = 0) -> float:
    """Round half away from zero on the exact binary value of ``value``."""
    if math.isnan(value) or math.isinf(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_currency(amount: Optional[float]) -> str:
    """Format an amount for display, e.g. $280,000."""
    if amount is None or not math.isfinite(amount):
        return "n/a"
    return f"${amount:,.0f}"
