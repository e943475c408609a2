from __future__ import annotations

from .coingecko import CoinGeckoClient
from .etherscan import EtherscanBalanceClient, EtherscanBalanceResponse

__all__ = ["CoinGeckoClient", "EtherscanBalanceClient", "EtherscanBalanceResponse"]
