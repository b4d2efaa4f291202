"""Alpaca market data REST provider."""

import logging
from typing import Any, Optional

import httpx

from brokerage_assistant.core.exceptions import ExternalFetchError

logger = logging.getLogger(__name__)


class AlpacaMarketDataProvider:
    """
    Fetches quotes, bars and snapshots from the Alpaca data API.

    Transport errors and non-2xx responses become ExternalFetchError so the
    cache never stores a failed fetch.
    """

    name = "Alpaca"

    def __init__(
        self,
        api_key: str,
        secret_key: str,
        base_url: str = "https://data.alpaca.markets",
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self._client = client or httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={
                "APCA-API-KEY-ID": api_key,
                "APCA-API-SECRET-KEY": secret_key,
            },
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def fetch_quote(self, symbol: str) -> dict[str, Any]:
        return self._get(f"/v2/stocks/{symbol}/quotes/latest")

    def fetch_bars(
        self,
        symbol: str,
        timeframe: str = "1Day",
        start: Optional[str] = None,
        end: Optional[str] = None,
        limit: int = 100,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"timeframe": timeframe, "limit": limit}
        if start:
            params["start"] = start
        if end:
            params["end"] = end
        return self._get(f"/v2/stocks/{symbol}/bars", params=params)

    def fetch_snapshot(self, symbol: str) -> dict[str, Any]:
        return self._get(f"/v2/stocks/{symbol}/snapshot")

    def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        logger.debug(f"GET {path} {params or ''}")
        try:
            response = self._client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise ExternalFetchError(
                self.name, f"{e.response.status_code} {e.response.reason_phrase} for {path}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ExternalFetchError(self.name, f"{type(e).__name__}: {e}") from e
