import asyncio
import logging
from decimal import Decimal

import pytest

from etherfolio.adapters import CoinGeckoPriceSource, EtherscanBalanceSource
from etherfolio.domain import PortfolioSnapshot
from etherfolio.pipeline import run as pipeline_run
from etherfolio.pipeline.preflight import PreflightError
from etherfolio.settings import PortfolioSettings
from etherfolio.state import AppState

WALLET = "0x000000000000000000000000000000000000dEaD"


class RecordingAggregator:
    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.calls = []

    async def aggregate(self, address, assets, fiat_currency):
        self.calls.append((address, list(assets), fiat_currency))
        await asyncio.sleep(self.delay)
        return PortfolioSnapshot(
            address=address,
            fiat_currency=fiat_currency,
            valuations=(),
            total_fiat_value=Decimal(0),
        )


@pytest.fixture
def make_state(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("ETHERFOLIO_CONFIG", raising=False)

    def _make(**overrides):
        settings = PortfolioSettings(etherscan_api_key="key", **overrides)
        return AppState(settings=settings, logger=logging.getLogger("test"))

    return _make


@pytest.mark.asyncio
async def test_run_portfolio_uses_settings(make_state):
    state = make_state(fiat_currency="eur")
    aggregator = RecordingAggregator()

    snapshot = await pipeline_run.run_portfolio(
        state, WALLET.lower(), aggregator=aggregator
    )

    assert snapshot.address == WALLET
    [(address, assets, fiat)] = aggregator.calls
    assert address == WALLET
    assert [a.symbol for a in assets] == ["ETH", "weETH", "eETH"]
    assert fiat == "eur"


@pytest.mark.asyncio
async def test_run_portfolio_completes_within_timeout(make_state):
    state = make_state(global_timeout_seconds=0.5)

    snapshot = await pipeline_run.run_portfolio(
        state, WALLET, aggregator=RecordingAggregator(delay=0.01)
    )

    assert snapshot.valuations == ()


@pytest.mark.asyncio
async def test_run_portfolio_raises_timeout(make_state):
    state = make_state(global_timeout_seconds=0.05)

    with pytest.raises(asyncio.TimeoutError, match="exceeded global timeout"):
        await pipeline_run.run_portfolio(
            state, WALLET, aggregator=RecordingAggregator(delay=0.5)
        )


@pytest.mark.asyncio
async def test_run_portfolio_timeout_can_be_disabled(make_state):
    state = make_state(global_timeout_seconds=0)

    snapshot = await pipeline_run.run_portfolio(
        state, WALLET, aggregator=RecordingAggregator(delay=0.01)
    )

    assert snapshot.address == WALLET


@pytest.mark.asyncio
async def test_run_portfolio_preflight_blocks_network(make_state):
    state = make_state()
    aggregator = RecordingAggregator()

    with pytest.raises(PreflightError):
        await pipeline_run.run_portfolio(state, "0x1234", aggregator=aggregator)

    assert aggregator.calls == []


def test_build_aggregator_wires_provider_sources(make_state):
    state = make_state(fetch_timeout=7.0)

    aggregator = pipeline_run.build_aggregator(state)

    assert isinstance(aggregator.balance_source, EtherscanBalanceSource)
    assert isinstance(aggregator.price_source, CoinGeckoPriceSource)
    assert aggregator.fetch_timeout == 7.0
