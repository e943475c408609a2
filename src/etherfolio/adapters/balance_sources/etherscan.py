from __future__ import annotations

import asyncio

from ...clients.etherscan import EtherscanBalanceClient, EtherscanBalanceResponse
from ...domain import RawBalance
from ...logger import get_logger
from ...settings import PortfolioSettings
from .base import BaseBalanceSource

logger = get_logger(__name__)

SUCCESS_STATUS = "1"


class EtherscanBalanceSource(BaseBalanceSource):
    """Balance source backed by the Etherscan account API.

    A ``status != "1"`` envelope is returned as a failed RawBalance rather
    than raised, so provider rejections reach the aggregator even when the
    HTTP call itself succeeded.
    """

    def __init__(self, client: EtherscanBalanceClient):
        self.client = client

    @classmethod
    def from_settings(cls, config: PortfolioSettings) -> "EtherscanBalanceSource":
        return cls(
            EtherscanBalanceClient(
                config.etherscan_api_key_required,
                config.chain_id,
                api_url=config.etherscan_api_url,
                request_timeout=config.request_timeout,
            )
        )

    @property
    def source_name(self) -> str:
        return "etherscan"

    async def get_native_balance(self, address: str) -> RawBalance:
        payload = await asyncio.to_thread(self.client.get_balance, address)
        return self._to_raw_balance(payload, None)

    async def get_token_balance(
        self, address: str, contract_address: str
    ) -> RawBalance:
        payload = await asyncio.to_thread(
            self.client.get_token_balance, address, contract_address
        )
        return self._to_raw_balance(payload, contract_address)

    @staticmethod
    def _to_raw_balance(
        payload: EtherscanBalanceResponse, contract_address: str | None
    ) -> RawBalance:
        success = payload["status"] == SUCCESS_STATUS
        if success:
            message = payload["message"]
        else:
            # Etherscan puts the useful error text in ``result`` on failure
            message = payload["result"] or payload["message"]
            logger.warning(
                "Etherscan rejected balance query for %s: %s",
                contract_address or "native asset",
                message,
            )
        return RawBalance(
            contract_address=contract_address,
            integer_string=payload["result"] if success else "",
            success=success,
            provider_message=message,
        )
