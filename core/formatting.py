# core/formatting.py
"""
Display formatting for money values (Indonesian Rupiah, id-ID conventions).
"""
from decimal import Decimal, ROUND_HALF_UP

CURRENCY_PREFIX = "Rp"
# id-ID puts a non-breaking space between the symbol and the amount
CURRENCY_SEPARATOR = "\u00a0"
EMPTY_PLACEHOLDER = "-"


def format_currency(amount: Decimal | int | float | None) -> str:
    """
    Format an amount as Rupiah: ``Rp 1.000.000,00`` (non-breaking space after ``Rp``).

    None and zero render as the "-" placeholder rather than ``Rp 0,00``.
    """
    if not amount:
        return EMPTY_PLACEHOLDER

    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    # Format with en-US separators, then swap to id-ID: '.' for thousands, ',' for decimals
    grouped = f"{abs(value):,.2f}"
    localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{CURRENCY_PREFIX}{CURRENCY_SEPARATOR}{localized}"
