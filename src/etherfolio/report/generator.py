"""Plain-data rendering of portfolio snapshots."""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal
from typing import Any

from ..domain import PortfolioSnapshot
from ..units import exact_context

FIAT_SYMBOLS = {"usd": "$", "eur": "€", "gbp": "£", "jpy": "¥"}


def format_balance(balance: Decimal, min_digits: int = 2, max_digits: int = 4) -> str:
    """Group thousands and keep between ``min_digits`` and ``max_digits`` decimals."""
    rounded = balance.quantize(
        Decimal(1).scaleb(-max_digits), ROUND_HALF_EVEN, context=exact_context()
    )
    text = f"{rounded:,.{max_digits}f}"
    whole, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0").ljust(min_digits, "0")
    return f"{whole}.{fraction}"


def format_fiat(value: Decimal, fiat_currency: str) -> str:
    """Format a fiat amount with two decimals, e.g. ``$1,234.50``."""
    rounded = value.quantize(Decimal("0.01"), ROUND_HALF_EVEN, context=exact_context())
    sign = "-" if rounded < 0 else ""
    amount = f"{rounded.copy_abs():,.2f}"
    symbol = FIAT_SYMBOLS.get(fiat_currency.lower())
    if symbol:
        return f"{sign}{symbol}{amount}"
    return f"{sign}{amount} {fiat_currency.upper()}"


def snapshot_to_dict(snapshot: PortfolioSnapshot) -> dict[str, Any]:
    """Convert a snapshot into JSON-safe data; decimals are kept as strings."""
    return {
        "address": snapshot.address,
        "fiat_currency": snapshot.fiat_currency,
        "valuations": [
            {
                "display_name": v.display_name,
                "symbol": v.symbol,
                "balance": str(v.balance),
                "price": str(v.price) if v.price_available else None,
                "fiat_value": str(v.fiat_value),
            }
            for v in snapshot.valuations
        ],
        "total_fiat_value": str(snapshot.total_fiat_value),
    }
