"""Concurrent balance and price aggregation for one wallet address."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Any, Awaitable, Iterable, TypeVar

from ..adapters.balance_sources.base import BaseBalanceSource
from ..adapters.price_sources.base import BasePriceSource
from ..domain import (
    AssetDescriptor,
    PortfolioSnapshot,
    PriceTable,
    RawBalance,
    validate_tracked_assets,
)
from ..logger import get_logger
from .valuation import calculate_total_fiat_value, value_asset

logger = get_logger(__name__)

T = TypeVar("T")


class AggregationError(Exception):
    """Raised when a balance could not be fetched for a tracked asset."""

    def __init__(self, asset: AssetDescriptor, provider_message: str):
        super().__init__(
            f"Failed to fetch balance for {asset.symbol}: {provider_message}"
        )
        self.asset = asset
        self.provider_message = provider_message


class PortfolioAggregator:
    """Builds a PortfolioSnapshot from a balance source and a price source.

    The aggregator keeps no state between calls; the sources are injected
    so tests and callers can swap transports freely.
    """

    def __init__(
        self,
        balance_source: BaseBalanceSource,
        price_source: BasePriceSource,
        *,
        fetch_timeout: float | None = None,
    ):
        """Initialize the aggregator.

        Args:
            balance_source: Source of raw per-asset balances
            price_source: Source of fiat prices
            fetch_timeout: Seconds allowed for each individual fetch; None disables
        """
        self.balance_source = balance_source
        self.price_source = price_source
        self.fetch_timeout = fetch_timeout

    async def aggregate(
        self,
        address: str,
        assets: Iterable[AssetDescriptor],
        fiat_currency: str,
    ) -> PortfolioSnapshot:
        """Value every tracked asset held by ``address``.

        One balance fetch per asset and a single batched price fetch are all
        started before any is awaited, then joined at one point. Valuations
        come back in the order of ``assets`` regardless of completion order.

        Args:
            address: Wallet address to value
            assets: Tracked assets, in display order
            fiat_currency: Fiat code to price in (e.g. ``usd``)

        Returns:
            The complete snapshot.

        Raises:
            AggregationError: If any balance fetch fails, errors or times out.
                No partial snapshot is ever returned.
            ValueError: If the tracked asset list repeats a price id or asset.
        """
        assets = list(assets)
        validate_tracked_assets(assets)
        fiat = fiat_currency.lower()

        if not assets:
            return PortfolioSnapshot(
                address=address,
                fiat_currency=fiat,
                valuations=(),
                total_fiat_value=calculate_total_fiat_value(()),
            )

        price_ids = list(dict.fromkeys(asset.price_id for asset in assets))
        logger.info(
            "Fetching %d balances and %d prices for %s...",
            len(assets),
            len(price_ids),
            address,
        )

        results = await asyncio.gather(
            *(self._bounded(self._fetch_balance(address, asset)) for asset in assets),
            self._bounded(self.price_source.get_prices(price_ids, fiat)),
            return_exceptions=True,
        )
        *balance_results, price_result = results

        price_table = self._resolve_price_table(price_result)
        raw_balances = self._resolve_balances(assets, balance_results)

        valuations = tuple(
            value_asset(asset, raw_balance, price_table, fiat)
            for asset, raw_balance in zip(assets, raw_balances)
        )
        for valuation in valuations:
            logger.debug(
                "%s: balance=%s price=%s value=%s",
                valuation.symbol,
                valuation.balance,
                valuation.price if valuation.price_available else "<N/A>",
                valuation.fiat_value,
            )

        total = calculate_total_fiat_value(valuations)
        logger.info("Portfolio total for %s: %s %s", address, total, fiat.upper())

        return PortfolioSnapshot(
            address=address,
            fiat_currency=fiat,
            valuations=valuations,
            total_fiat_value=total,
        )

    async def _fetch_balance(self, address: str, asset: AssetDescriptor) -> RawBalance:
        if asset.contract_address is None:
            return await self.balance_source.get_native_balance(address)
        return await self.balance_source.get_token_balance(
            address, asset.contract_address
        )

    async def _bounded(self, awaitable: Awaitable[T]) -> T:
        if self.fetch_timeout is None:
            return await awaitable
        async with asyncio.timeout(self.fetch_timeout):
            return await awaitable

    def _describe_failure(self, exc: BaseException) -> str:
        if isinstance(exc, TimeoutError):
            return f"request timed out after {self.fetch_timeout}s"
        return str(exc) or type(exc).__name__

    def _resolve_price_table(self, result: Any) -> PriceTable:
        if isinstance(result, BaseException):
            logger.warning(
                "Price fetch failed, assets will be valued at 0: %s",
                self._describe_failure(result),
            )
            return {}
        return result

    def _resolve_balances(
        self, assets: list[AssetDescriptor], results: list[Any]
    ) -> list[RawBalance]:
        """Index balance results back to their assets, failing on the first bad one.

        Raises:
            AggregationError: For the first failed asset in list order
        """
        failures: list[tuple[AssetDescriptor, str, BaseException | None]] = []
        raw_balances: list[RawBalance] = []

        for index, (asset, result) in enumerate(zip(assets, results)):
            if isinstance(result, BaseException):
                message = self._describe_failure(result)
                logger.error("Balance fetch for %s raised: %s", asset.symbol, message)
                failures.append((asset, message, result))
            elif not result.success:
                logger.error(
                    "Balance fetch for %s failed: %s",
                    asset.symbol,
                    result.provider_message,
                )
                failures.append((asset, result.provider_message, None))
            else:
                raw_balances.append(dataclasses.replace(result, asset_index=index))

        if failures:
            asset, message, cause = failures[0]
            raise AggregationError(asset, message) from cause

        return raw_balances
