from __future__ import annotations

import asyncio
from decimal import Decimal, InvalidOperation
from typing import Any, Collection

from ...clients.coingecko import CoinGeckoClient
from ...domain import PriceTable
from ...logger import get_logger
from ...settings import PortfolioSettings
from .base import BasePriceSource

logger = get_logger(__name__)


class CoinGeckoPriceSource(BasePriceSource):
    """Price source backed by the CoinGecko simple price API."""

    def __init__(self, client: CoinGeckoClient):
        self.client = client

    @classmethod
    def from_settings(cls, config: PortfolioSettings) -> "CoinGeckoPriceSource":
        api_key = (
            config.coingecko_api_key.get_secret_value()
            if config.coingecko_api_key
            else None
        )
        return cls(
            CoinGeckoClient(
                api_url=config.coingecko_api_url,
                api_key=api_key,
                request_timeout=config.request_timeout,
            )
        )

    @property
    def source_name(self) -> str:
        return "coingecko"

    async def get_prices(
        self, price_ids: Collection[str], fiat_currency: str
    ) -> PriceTable:
        fiat = fiat_currency.lower()
        payload = await asyncio.to_thread(
            self.client.get_simple_prices, price_ids, [fiat]
        )
        requested = set(price_ids)

        table: PriceTable = {}
        for price_id, quotes in payload.items():
            if price_id not in requested:
                logger.debug("Ignoring unrequested price id %s", price_id)
                continue
            if not isinstance(quotes, dict):
                logger.warning("Invalid quotes for %s: %r", price_id, quotes)
                continue

            prices: dict[str, Decimal] = {}
            for currency, raw_price in quotes.items():
                price = self._parse_price(raw_price)
                if price is None:
                    logger.warning(
                        "Invalid %s price for %s: %r, skipping",
                        currency,
                        price_id,
                        raw_price,
                    )
                    continue
                prices[currency.lower()] = price
            table[price_id] = prices

        for price_id in sorted(requested - table.keys()):
            logger.debug("No price returned for %s", price_id)

        return table

    @staticmethod
    def _parse_price(raw_price: Any) -> Decimal | None:
        """Return a finite non-negative Decimal, or None."""
        if isinstance(raw_price, bool):
            return None
        try:
            price = Decimal(str(raw_price))
        except (InvalidOperation, ValueError):
            return None
        if not price.is_finite() or price < 0:
            return None
        return price
