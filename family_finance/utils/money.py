"""
Unified money formatting for the whole project.

Usage:
    from family_finance.utils.money import format_money

    format_money(15000, "KES")     -> "KES 15 000"
    format_money(1200.50, "USD")   -> "USD 1 200"
    format_money(0, "KES")         -> "KES 0"
"""
from decimal import Decimal


def format_money(amount, currency: str = "KES", decimals: int = 0) -> str:
    """
    Format an amount with space thousands separators and a currency prefix.

    Args:
        amount: int / float / Decimal / str
        currency: ISO currency code (KES, USD, EUR ...)
        decimals: digits after the decimal point

    Returns:
        "KES 15 000" / "USD 1 200"
    """
    if isinstance(amount, str):
        amount = Decimal(amount)
    fmt = f"{{:,.{decimals}f}}"
    formatted = fmt.format(amount).replace(",", " ")
    return f"{currency} {formatted}"
