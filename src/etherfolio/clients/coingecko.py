"""CoinGecko simple price client."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

import requests

from ..constants import COINGECKO_API_URL
from ..logger import get_logger

logger = get_logger(__name__)


class CoinGeckoClient:
    """Blocking client for ``/simple/price``.

    Prices are decoded straight into ``Decimal`` so that no value goes
    through a binary float.
    """

    def __init__(
        self,
        *,
        api_url: str = COINGECKO_API_URL,
        api_key: str | None = None,
        request_timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self._api_url = api_url.rstrip("/")
        self._request_timeout = request_timeout
        self._session = session or requests.Session()
        if api_key:
            self._session.headers["x-cg-demo-api-key"] = api_key

    def get_simple_prices(
        self, ids: Iterable[str], vs_currencies: Iterable[str]
    ) -> dict[str, Any]:
        """Return the raw ``{id: {currency: price}}`` mapping.

        Raises:
            requests.RequestException: On transport or HTTP errors
            ValueError: If the payload is not a JSON object
        """
        id_list = sorted(set(ids))
        params = {
            "ids": ",".join(id_list),
            "vs_currencies": ",".join(sorted({c.lower() for c in vs_currencies})),
        }
        response = self._session.get(
            f"{self._api_url}/simple/price",
            params=params,
            timeout=self._request_timeout,
        )
        response.raise_for_status()

        payload = response.json(parse_float=Decimal)
        if not isinstance(payload, dict):
            raise ValueError(f"Unexpected CoinGecko payload format: {payload!r}")

        logger.debug(
            "CoinGecko returned prices for %d of %d ids",
            len(payload),
            len(id_list),
        )
        return payload

    def close(self) -> None:
        self._session.close()
