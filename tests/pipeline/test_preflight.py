import logging

import pytest

from etherfolio.pipeline.preflight import PreflightError, run_preflight
from etherfolio.settings import PortfolioSettings
from etherfolio.state import AppState


@pytest.fixture
def state(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("ETHERFOLIO_CONFIG", raising=False)
    settings = PortfolioSettings(etherscan_api_key="key")
    return AppState(settings=settings, logger=logging.getLogger("test"))


def test_preflight_returns_checksummed_address(state):
    address = "0x000000000000000000000000000000000000dead"

    assert run_preflight(state, f"  {address} ") == (
        "0x000000000000000000000000000000000000dEaD"
    )


def test_preflight_rejects_malformed_address(state):
    with pytest.raises(PreflightError, match="'0xnope' is not a valid wallet address"):
        run_preflight(state, "0xnope")


def test_preflight_requires_etherscan_key(state):
    state.settings.etherscan_api_key = None

    with pytest.raises(PreflightError, match="etherscan_api_key is not configured"):
        run_preflight(state, "0x000000000000000000000000000000000000dEaD")


def test_preflight_reports_every_problem(state):
    state.settings.etherscan_api_key = None

    with pytest.raises(PreflightError) as exc_info:
        run_preflight(state, "not-an-address")

    message = str(exc_info.value)
    assert "not a valid wallet address" in message
    assert "etherscan_api_key is not configured" in message


def test_preflight_error_is_a_value_error():
    assert issubclass(PreflightError, ValueError)
