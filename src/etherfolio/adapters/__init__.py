from __future__ import annotations

from .balance_sources import BaseBalanceSource, EtherscanBalanceSource
from .price_sources import BasePriceSource, CoinGeckoPriceSource

__all__ = [
    "BaseBalanceSource",
    "BasePriceSource",
    "CoinGeckoPriceSource",
    "EtherscanBalanceSource",
]
