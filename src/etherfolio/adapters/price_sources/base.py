from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Collection

from ...domain import PriceTable


class BasePriceSource(ABC):
    """Abstract base class for price sources."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the name of this source."""
        ...

    @abstractmethod
    async def get_prices(
        self, price_ids: Collection[str], fiat_currency: str
    ) -> PriceTable:
        """Fetch prices for ``price_ids`` in one batched call.

        Identifiers missing from the provider response are left out of the
        returned table; that is not an error.
        """
        ...
