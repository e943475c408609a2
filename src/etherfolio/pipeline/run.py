"""High-level pipeline orchestration."""

from __future__ import annotations

import asyncio

from ..adapters import CoinGeckoPriceSource, EtherscanBalanceSource
from ..domain import PortfolioSnapshot
from ..processors import PortfolioAggregator
from ..state import AppState
from .preflight import run_preflight


def build_aggregator(state: AppState) -> PortfolioAggregator:
    """Wire the provider-backed sources configured in settings."""
    s = state.settings
    return PortfolioAggregator(
        EtherscanBalanceSource.from_settings(s),
        CoinGeckoPriceSource.from_settings(s),
        fetch_timeout=s.fetch_timeout,
    )


async def run_portfolio(
    state: AppState,
    address: str,
    aggregator: PortfolioAggregator | None = None,
) -> PortfolioSnapshot:
    """Validate input, then aggregate the portfolio of ``address``.

    Args:
        state: Application state containing settings and logger
        address: Wallet address to value
        aggregator: Optional pre-built aggregator (defaults to settings wiring)

    Returns:
        The portfolio snapshot.

    Raises:
        PreflightError: If the address or configuration is invalid
        AggregationError: If any balance fetch fails
        asyncio.TimeoutError: If the whole run exceeds ``global_timeout_seconds``
    """
    s = state.settings
    log = state.logger

    checksummed = run_preflight(state, address)
    if aggregator is None:
        aggregator = build_aggregator(state)

    log.info(
        "Starting portfolio run",
        extra={"address": checksummed, "fiat": s.fiat_currency},
    )

    timeout_s = s.global_timeout_seconds

    async def _run() -> PortfolioSnapshot:
        return await aggregator.aggregate(checksummed, s.assets, s.fiat_currency)

    try:
        if timeout_s is None or timeout_s <= 0:
            snapshot = await _run()
        else:
            async with asyncio.timeout(timeout_s):
                snapshot = await _run()
    except asyncio.TimeoutError as exc:
        log.error(
            "Portfolio run timed out",
            extra={"address": checksummed, "timeout_seconds": timeout_s},
        )
        raise asyncio.TimeoutError(
            f"Portfolio run exceeded global timeout {timeout_s}s "
            f"(address={checksummed})\n N.B. This can be changed via "
            "`global_timeout_seconds` or CLI flag `--global-timeout-seconds`."
        ) from exc

    log.info("Portfolio run completed", extra={"address": checksummed})
    return snapshot
