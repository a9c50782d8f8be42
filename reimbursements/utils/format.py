"""
Formatting Helpers

Amounts are shown with two decimals and a comma separator ("1234,56"),
dates as dd/mm/YYYY in local time.
"""

import math
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Union


# Wide enough for every finite float (up to 309 integer digits) plus cents
_WIDE_CONTEXT = Context(prec=400)

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def format_currency(amount: float) -> str:
    """
    Format an amount with two decimals and a decimal comma.

    Rounds half up on the exact binary value of the float, so
    10.999 -> "11,00" and 1.005 -> "1,00" (1.005 is stored as 1.00499...).
    """
    if not math.isfinite(amount):
        return str(amount)
    rounded = Decimal(amount).quantize(
        Decimal("0.01"),
        rounding=ROUND_HALF_UP,
        context=_WIDE_CONTEXT,
    )
    return f"{rounded:f}".replace(".", ",", 1)


def parse_currency(value: str) -> float:
    """
    Parse "34,78" or "34.78" into a float.

    The first comma is read as the decimal point, then the longest
    leading number is parsed. Returns nan when there is none.
    """
    match = _LEADING_NUMBER.match(value.replace(",", ".", 1))
    if match is None:
        return math.nan
    return float(match.group(1))


def format_date(value: Union[str, date, datetime]) -> str:
    """
    Format a date as dd/mm/YYYY.

    ISO strings and aware datetimes are converted to local time first.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%d/%m/%Y")
