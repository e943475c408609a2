from __future__ import annotations

from abc import ABC, abstractmethod

from ...domain import RawBalance


class BaseBalanceSource(ABC):
    """Abstract base class for balance sources."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the name of this source."""
        ...

    @abstractmethod
    async def get_native_balance(self, address: str) -> RawBalance:
        """Fetch the chain-native balance of ``address``."""
        ...

    @abstractmethod
    async def get_token_balance(
        self, address: str, contract_address: str
    ) -> RawBalance:
        """Fetch the ``contract_address`` token balance of ``address``."""
        ...
