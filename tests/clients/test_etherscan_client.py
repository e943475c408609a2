from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from etherfolio.clients.etherscan import EtherscanBalanceClient

WALLET = "0x000000000000000000000000000000000000dEaD"
TOKEN = "0x35fA164735182de50811E8e2E824cFb9B6118ac2"


def _response(payload, status_code: int = 200) -> Mock:
    response = Mock()
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Server Error"
        )
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


def test_get_balance_sends_native_query(session):
    session.get.return_value = _response(
        {"status": "1", "message": "OK", "result": "1000000000000000000"}
    )
    client = EtherscanBalanceClient(
        "key", 1, session=session, request_timeout=7.5, api_url="https://x/api"
    )

    payload = client.get_balance(WALLET)

    assert payload == {"status": "1", "message": "OK", "result": "1000000000000000000"}
    session.get.assert_called_once_with(
        "https://x/api",
        params={
            "chainid": "1",
            "module": "account",
            "action": "balance",
            "address": WALLET,
            "tag": "latest",
            "apikey": "key",
        },
        timeout=7.5,
    )


def test_get_token_balance_sends_contract_address(session):
    session.get.return_value = _response(
        {"status": "1", "message": "OK", "result": "42"}
    )
    client = EtherscanBalanceClient("key", 10, session=session)

    client.get_token_balance(WALLET, TOKEN)

    params = session.get.call_args.kwargs["params"]
    assert params["action"] == "tokenbalance"
    assert params["contractaddress"] == TOKEN
    assert params["address"] == WALLET
    assert params["chainid"] == "10"


def test_provider_failure_is_returned_not_raised(session):
    session.get.return_value = _response(
        {"status": "0", "message": "NOTOK", "result": "Invalid API Key"}
    )
    client = EtherscanBalanceClient("bad", session=session)

    payload = client.get_balance(WALLET)

    assert payload["status"] == "0"
    assert payload["result"] == "Invalid API Key"


def test_http_error_raises(session):
    session.get.return_value = _response({}, status_code=502)
    client = EtherscanBalanceClient("key", session=session)

    with pytest.raises(requests.HTTPError):
        client.get_balance(WALLET)


def test_non_object_payload_raises(session):
    session.get.return_value = _response(["unexpected"])
    client = EtherscanBalanceClient("key", session=session)

    with pytest.raises(ValueError, match="Unexpected Etherscan payload format"):
        client.get_balance(WALLET)


def test_missing_fields_are_normalized_to_strings(session):
    session.get.return_value = _response({"status": 1, "result": 5})
    client = EtherscanBalanceClient("key", session=session)

    payload = client.get_balance(WALLET)

    assert payload == {"status": "1", "message": "", "result": "5"}
