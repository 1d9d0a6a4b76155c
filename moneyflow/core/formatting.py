"""
Currency display helpers.

Amounts are rendered the way the fr-FR locale prints them: thousands
grouped with a narrow no-break space, a comma as decimal separator and
at most three fraction digits, followed by the currency code.
"""

from decimal import Decimal, ROUND_HALF_UP

GROUP_SEPARATOR = "\u202f"  # narrow no-break space
DECIMAL_SEPARATOR = ","
MAX_FRACTION_DIGITS = 3


def format_amount(amount) -> str:
    """Format a number with fr-FR grouping, without currency code."""
    value = Decimal(str(amount)).quantize(
        Decimal(1).scaleb(-MAX_FRACTION_DIGITS), rounding=ROUND_HALF_UP
    )
    sign = "-" if value < 0 else ""
    value = abs(value)

    whole = int(value)
    fraction = value - whole
    text = f"{whole:,}".replace(",", GROUP_SEPARATOR)

    if fraction:
        digits = f"{fraction:.{MAX_FRACTION_DIGITS}f}"[2:].rstrip("0")
        text = f"{text}{DECIMAL_SEPARATOR}{digits}"

    return f"{sign}{text}"


def format_currency(amount, currency: str = "XAF") -> str:
    """
    Render ``amount`` followed by ``currency``.

    >>> format_currency(Decimal("1500000"), "XAF")
    '1 500 000 XAF'
    """
    return f"{format_amount(amount)} {currency}"
