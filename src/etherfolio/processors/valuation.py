from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ..domain import AssetDescriptor, AssetValuation, PriceTable, RawBalance
from ..units import exact_context, to_decimal


def lookup_price(
    price_table: PriceTable, price_id: str, fiat_currency: str
) -> Decimal | None:
    """Return the price of ``price_id`` in ``fiat_currency``, or None if absent."""
    return price_table.get(price_id, {}).get(fiat_currency.lower())


def value_asset(
    asset: AssetDescriptor,
    raw_balance: RawBalance,
    price_table: PriceTable,
    fiat_currency: str,
) -> AssetValuation:
    """Join a successful raw balance with its price.

    A missing price values the holding at zero instead of failing.
    """
    balance = to_decimal(raw_balance.integer_string, asset.decimals)
    price = lookup_price(price_table, asset.price_id, fiat_currency)
    effective_price = price if price is not None else Decimal(0)

    return AssetValuation(
        display_name=asset.display_name,
        symbol=asset.symbol,
        balance=balance,
        fiat_value=exact_context().multiply(balance, effective_price),
        price=effective_price,
        price_available=price is not None,
    )


def calculate_total_fiat_value(valuations: Iterable[AssetValuation]) -> Decimal:
    ctx = exact_context()
    total = Decimal(0)
    for valuation in valuations:
        total = ctx.add(total, valuation.fiat_value)
    return total
