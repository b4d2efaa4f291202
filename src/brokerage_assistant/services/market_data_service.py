"""Market data service: provider calls fronted by the time-series cache."""

import logging
from typing import Any, Optional

from brokerage_assistant.core.exceptions import ValidationError
from brokerage_assistant.domain.models import CacheKey, MarketDataType
from brokerage_assistant.providers.market_data_provider import MarketDataProvider
from brokerage_assistant.repositories.protocols import BalanceRepository
from brokerage_assistant.services.time_series_cache import TimeSeriesCache

logger = logging.getLogger(__name__)


def _normalize_symbol(symbol: Optional[str]) -> str:
    normalized = (symbol or "").strip().upper()
    if not normalized:
        raise ValidationError("Symbol required")
    return normalized


def bars_sub_key(timeframe: str, start: Optional[str] = None, end: Optional[str] = None) -> str:
    """Cache sub-key for bars: the timeframe, plus the range when one is given."""
    if start or end:
        return f"{timeframe}:{start or ''}:{end or ''}"
    return timeframe


class MarketDataService:
    """
    Service for quotes, bars, snapshots and equity history.

    Owns the TTL policy (quotes and snapshots ~1 minute, bars and equity
    history ~1 hour); the cache itself is TTL-agnostic. Payloads are passed
    through unmodified.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache: TimeSeriesCache,
        balance_repo: Optional[BalanceRepository] = None,
        quote_ttl_seconds: int = 60,
        snapshot_ttl_seconds: int = 60,
        bar_ttl_seconds: int = 3600,
        equity_history_ttl_seconds: int = 3600,
    ):
        self._provider = provider
        self._cache = cache
        self._balance_repo = balance_repo
        self._quote_ttl = quote_ttl_seconds
        self._snapshot_ttl = snapshot_ttl_seconds
        self._bar_ttl = bar_ttl_seconds
        self._equity_ttl = equity_history_ttl_seconds

    def get_quote(self, symbol: str) -> dict[str, Any]:
        """Latest quote for a symbol."""
        symbol = _normalize_symbol(symbol)
        return self._cache.get(
            CacheKey(symbol, MarketDataType.QUOTE.value),
            self._quote_ttl,
            lambda: self._provider.fetch_quote(symbol),
        )

    def get_snapshot(self, symbol: str) -> dict[str, Any]:
        """Latest trade/quote/daily-bar snapshot for a symbol."""
        symbol = _normalize_symbol(symbol)
        return self._cache.get(
            CacheKey(symbol, MarketDataType.SNAPSHOT.value),
            self._snapshot_ttl,
            lambda: self._provider.fetch_snapshot(symbol),
        )

    def get_bars(
        self,
        symbol: str,
        timeframe: str = "1Day",
        start: Optional[str] = None,
        end: Optional[str] = None,
        limit: int = 100,
    ) -> dict[str, Any]:
        """Historical bars; each (timeframe, range) is cached separately."""
        symbol = _normalize_symbol(symbol)
        if limit <= 0:
            raise ValidationError("limit must be positive")
        timeframe = (timeframe or "1Day").strip()
        return self._cache.get(
            CacheKey(symbol, MarketDataType.BAR.value, bars_sub_key(timeframe, start, end)),
            self._bar_ttl,
            lambda: self._provider.fetch_bars(symbol, timeframe, start, end, limit),
        )

    def get_equity_history(self, account_id: str, days: int = 30) -> list[dict[str, Any]]:
        """
        Daily account equity for charting, oldest first.

        Built from the most recent `days` balance records.
        """
        if self._balance_repo is None:
            raise ValidationError("Equity history needs a balance store")
        if days <= 0:
            raise ValidationError("days must be positive")

        def _load() -> list[dict[str, Any]]:
            balances = self._balance_repo.list_balances(account_id, limit=days)
            return [
                {
                    "date": b.date.isoformat(),
                    "equity": float(b.account_equity),
                    "cash": float(b.cash_balance),
                }
                for b in reversed(balances)
            ]

        return self._cache.get(
            CacheKey(account_id, MarketDataType.EQUITY_HISTORY.value, str(days)),
            self._equity_ttl,
            _load,
        )
