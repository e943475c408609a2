from __future__ import annotations

from decimal import Decimal
from unittest.mock import Mock

import pytest
import requests

from etherfolio.clients.coingecko import CoinGeckoClient


def _json_response(body: bytes, status_code: int = 200) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.encoding = "utf-8"
    response.url = "https://api.coingecko.com/api/v3/simple/price"
    return response


@pytest.fixture
def session():
    session = Mock(spec=requests.Session)
    session.headers = {}
    return session


def test_prices_decode_as_decimal(session):
    session.get.return_value = _json_response(
        b'{"ethereum": {"usd": 3000.1}, "ether-fi": {"usd": 5}}'
    )
    client = CoinGeckoClient(session=session)

    payload = client.get_simple_prices(["ethereum", "ether-fi"], ["usd"])

    assert payload["ethereum"]["usd"] == Decimal("3000.1")
    assert isinstance(payload["ethereum"]["usd"], Decimal)
    assert payload["ether-fi"]["usd"] == 5


def test_query_is_batched_and_sorted(session):
    session.get.return_value = _json_response(b"{}")
    client = CoinGeckoClient(
        api_url="https://example.test/api/v3/", session=session, request_timeout=3
    )

    client.get_simple_prices(["ethereum", "ether-fi", "ethereum"], ["USD"])

    session.get.assert_called_once_with(
        "https://example.test/api/v3/simple/price",
        params={"ids": "ether-fi,ethereum", "vs_currencies": "usd"},
        timeout=3,
    )


def test_api_key_is_sent_as_header(session):
    CoinGeckoClient(api_key="demo-key", session=session)

    assert session.headers["x-cg-demo-api-key"] == "demo-key"


def test_http_error_raises(session):
    session.get.return_value = _json_response(b"{}", status_code=429)
    client = CoinGeckoClient(session=session)

    with pytest.raises(requests.HTTPError):
        client.get_simple_prices(["ethereum"], ["usd"])


def test_non_object_payload_raises(session):
    session.get.return_value = _json_response(b"[1, 2]")
    client = CoinGeckoClient(session=session)

    with pytest.raises(ValueError, match="Unexpected CoinGecko payload format"):
        client.get_simple_prices(["ethereum"], ["usd"])
