from __future__ import annotations

from .portfolio_aggregator import AggregationError, PortfolioAggregator
from .valuation import calculate_total_fiat_value, lookup_price, value_asset

__all__ = [
    "AggregationError",
    "PortfolioAggregator",
    "calculate_total_fiat_value",
    "lookup_price",
    "value_asset",
]
