from __future__ import annotations

"""Display formatting for monetary amounts."""

from typing import Any

from ..currency.converter import parse_currency


def format_amount(amount: float) -> str:
    """en-GB decimal grouping with exactly two decimals: 1234.5 -> '1,234.50'."""
    return f"{amount:,.2f}"


def format_currency(amount: float, currency: Any) -> str:
    """Prefix the currency symbol rather than the ISO code: '£1,234.50', 'kr12.00'."""
    return f"{parse_currency(currency).symbol}{format_amount(amount)}"
