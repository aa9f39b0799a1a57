"""
Display formatting helpers shared by documents and token substitution.
Rounding happens here and nowhere else.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP


CURRENCY_SYMBOLS = {
    "MXN": "MX$",
    "USD": "$",
    "GBP": "£",
    "EUR": "€",
    "CAD": "CA$",
}


def format_number(amount: Decimal | int | float) -> str:
    """Format a number with thousands separators and two decimals."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{value:,.2f}"


def format_currency(amount: Decimal | int | float, currency: str = "MXN") -> str:
    """Format an amount with the currency symbol, e.g. ``MX$1,250.00``."""
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{format_number(abs(value))}"


def format_quantity(quantity: Decimal | int | float) -> str:
    value = Decimal(str(quantity))
    if value == value.to_integral_value():
        return str(int(value))
    return format_number(value)


def format_long_date(d: date) -> str:
    """Format a date as ``July 17, 2026``."""
    return f"{d:%B} {d.day}, {d.year}"


def format_short_date(d: date) -> str:
    """Format a date as ``Jul 17, 2026``."""
    return f"{d:%b} {d.day}, {d.year}"


def format_document_id(
    prefix: str,
    event_date: date | None,
    event_number: int = 1,
    document_number: int = 1,
) -> str:
    """
    Build a document identifier.
    Format: {prefix}-{yymmdd}-{event number:02}-{document number:02}
    """
    if event_date is None:
        return f"{prefix}-UNKNOWN-{str(event_number).zfill(2)}-{str(document_number).zfill(2)}"

    return (
        f"{prefix}-{event_date:%y%m%d}-"
        f"{str(event_number).zfill(2)}-{str(document_number).zfill(2)}"
    )
