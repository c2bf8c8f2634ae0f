import math
import re
from decimal import Decimal, ROUND_HALF_UP

# leading decimal literal, the way a browser parseFloat reads it
_NUMBER_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

CENTS = Decimal("0.01")


def safe_number(value):
    """
    Coerce an untrusted numeric-like value into a finite float.

    None, NaN, infinities, empty or unparseable strings all become 0.
    Negative numbers pass through; clamping is the caller's job.
    """
    if value is None:
        return 0
    if isinstance(value, str):
        match = _NUMBER_PREFIX.match(value.strip())
        if not match:
            return 0
        num = float(match.group(0))
    else:
        try:
            num = float(value)
        except (TypeError, ValueError, OverflowError):
            return 0
    if math.isnan(num) or math.isinf(num):
        return 0
    return num


def to_money(value):
    """Decimal rounded half-up to cents."""
    return Decimal(str(safe_number(value))).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_price(price):
    # en-PH currency style: ₱1,234.50 / -₱3.00
    amount = to_money(price)
    sign = "-" if amount < 0 else ""
    return f"{sign}₱{abs(amount):,.2f}"
