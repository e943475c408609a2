"""Etherscan API v2 client for account balance queries.

Covers the two ``module=account`` actions the portfolio needs: the native
balance (``action=balance``) and an ERC-20 balance (``action=tokenbalance``).
"""

from typing import Any, TypedDict

import requests

from ..constants import ETHERSCAN_API_V2_URL, MAINNET_CHAIN_ID
from ..logger import get_logger

logger = get_logger(__name__)


class EtherscanBalanceResponse(TypedDict):
    """Etherscan balance envelope; ``result`` is the balance in smallest units."""

    status: str
    message: str
    result: str


class EtherscanBalanceClient:
    """Blocking client for the Etherscan account balance endpoints.

    A single request per call and no retries. The provider status is
    returned to the caller untouched; only transport failures and
    malformed payloads raise.
    """

    def __init__(
        self,
        api_key: str,
        chain_id: int = MAINNET_CHAIN_ID,
        *,
        api_url: str = ETHERSCAN_API_V2_URL,
        request_timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        """Initialize the Etherscan balance client.

        Args:
            api_key: Etherscan API key
            chain_id: Chain ID for the network (1 for mainnet, etc.)
            api_url: Base API URL (defaults to Etherscan v2 API)
            request_timeout: HTTP request timeout in seconds
            session: Optional pre-configured requests session
        """
        self._api_key = api_key
        self._chain_id = chain_id
        self._api_url = api_url
        self._request_timeout = request_timeout
        self._session = session or requests.Session()

    def get_balance(self, address: str) -> EtherscanBalanceResponse:
        """Native balance of ``address`` in wei."""
        return self._call({"action": "balance", "address": address})

    def get_token_balance(
        self, address: str, contract_address: str
    ) -> EtherscanBalanceResponse:
        """ERC-20 balance of ``address`` for ``contract_address``."""
        return self._call(
            {
                "action": "tokenbalance",
                "contractaddress": contract_address,
                "address": address,
            }
        )

    def close(self) -> None:
        self._session.close()

    def _call(self, query: dict[str, str]) -> EtherscanBalanceResponse:
        params: dict[str, Any] = {
            "chainid": str(self._chain_id),
            "module": "account",
            **query,
            "tag": "latest",
            "apikey": self._api_key,
        }

        response = self._session.get(
            self._api_url,
            params=params,
            timeout=self._request_timeout,
        )
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Unexpected Etherscan payload format")

        envelope: EtherscanBalanceResponse = {
            "status": str(payload.get("status", "")).strip(),
            "message": str(payload.get("message", "")).strip(),
            "result": str(payload.get("result", "")).strip(),
        }
        logger.debug(
            "Etherscan %s for %s — status=%s message=%s",
            query["action"],
            query.get("contractaddress", "native"),
            envelope["status"],
            envelope["message"],
        )
        return envelope
