from __future__ import annotations

from .base import BaseBalanceSource
from .etherscan import EtherscanBalanceSource

__all__ = ["BaseBalanceSource", "EtherscanBalanceSource"]
