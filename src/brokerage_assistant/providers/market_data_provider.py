"""Market data provider protocol."""

from typing import Any, Optional, Protocol


class MarketDataProvider(Protocol):
    """
    Protocol for external quote/bar providers.

    Payloads are opaque JSON-compatible dicts passed through the cache
    unmodified. Implementations raise ExternalFetchError on failure.
    """

    def fetch_quote(self, symbol: str) -> dict[str, Any]:
        """Fetch the latest quote for a symbol."""
        ...

    def fetch_bars(
        self,
        symbol: str,
        timeframe: str = "1Day",
        start: Optional[str] = None,
        end: Optional[str] = None,
        limit: int = 100,
    ) -> dict[str, Any]:
        """Fetch historical bars for a symbol."""
        ...

    def fetch_snapshot(self, symbol: str) -> dict[str, Any]:
        """Fetch a market snapshot (latest trade, quote and daily bar)."""
        ...
