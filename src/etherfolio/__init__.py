"""Wallet portfolio aggregation over Etherscan balances and CoinGecko prices."""

from __future__ import annotations

from .domain import (
    AssetDescriptor,
    AssetValuation,
    PortfolioSnapshot,
    PriceTable,
    RawBalance,
)
from .processors import AggregationError, PortfolioAggregator
from .units import to_decimal

__all__ = [
    "AggregationError",
    "AssetDescriptor",
    "AssetValuation",
    "PortfolioAggregator",
    "PortfolioSnapshot",
    "PriceTable",
    "RawBalance",
    "to_decimal",
]
