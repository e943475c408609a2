from __future__ import annotations

from .base import BasePriceSource
from .coingecko import CoinGeckoPriceSource

__all__ = ["BasePriceSource", "CoinGeckoPriceSource"]
