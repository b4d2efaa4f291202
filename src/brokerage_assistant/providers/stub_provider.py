"""Stub market data provider for offline/testing use."""

import random
from datetime import timedelta
from decimal import Decimal
from typing import Any, Optional

from brokerage_assistant.core.timezone import now_eastern


# Deterministic fake prices for common symbols: (last, previous close)
_STUB_PRICES: dict[str, tuple[Decimal, Decimal]] = {
    "AAPL": (Decimal("178.25"), Decimal("176.10")),
    "GOOGL": (Decimal("139.87"), Decimal("140.50")),
    "MSFT": (Decimal("378.92"), Decimal("375.64")),
    "AMZN": (Decimal("145.63"), Decimal("143.76")),
    "TSLA": (Decimal("251.34"), Decimal("256.55")),
    "META": (Decimal("485.23"), Decimal("477.34")),
    "NVDA": (Decimal("456.78"), Decimal("444.44")),
    "JPM": (Decimal("187.45"), Decimal("188.68")),
}

_BAR_STEPS = {"1Min": timedelta(minutes=1), "5Min": timedelta(minutes=5), "1Hour": timedelta(hours=1)}


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Payloads mimic the Alpaca JSON shapes so callers can switch providers.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._seed = seed

    def _prices(self, symbol: str) -> tuple[Decimal, Decimal]:
        if symbol in _STUB_PRICES:
            return _STUB_PRICES[symbol]
        # Seeded per symbol so repeated calls agree
        rng = random.Random(f"{self._seed}:{symbol}")
        last = Decimal(str(50 + rng.random() * 200)).quantize(Decimal("0.01"))
        change = Decimal(str((rng.random() - 0.5) * 0.04))
        return last, (last / (1 + change)).quantize(Decimal("0.01"))

    def fetch_quote(self, symbol: str) -> dict[str, Any]:
        last, _ = self._prices(symbol)
        spread = Decimal("0.02")
        return {
            "symbol": symbol,
            "quote": {
                "t": now_eastern().isoformat(),
                "bp": float(last - spread),
                "ap": float(last + spread),
                "bs": 100,
                "as": 100,
            },
        }

    def fetch_bars(
        self,
        symbol: str,
        timeframe: str = "1Day",
        start: Optional[str] = None,
        end: Optional[str] = None,
        limit: int = 100,
    ) -> dict[str, Any]:
        last, _ = self._prices(symbol)
        rng = random.Random(f"{self._seed}:{symbol}:{timeframe}")
        step = _BAR_STEPS.get(timeframe, timedelta(days=1))
        now = now_eastern()
        bars = []
        price = float(last)
        for i in range(limit, 0, -1):
            open_price = price
            price = max(open_price * (1 + (rng.random() - 0.5) * 0.02), 1.0)
            bars.append({
                "t": (now - step * i).isoformat(),
                "o": round(open_price, 2),
                "h": round(max(open_price, price) * 1.005, 2),
                "l": round(min(open_price, price) * 0.995, 2),
                "c": round(price, 2),
                "v": rng.randint(500_000, 1_500_000),
            })
        return {"symbol": symbol, "bars": bars, "next_page_token": None}

    def fetch_snapshot(self, symbol: str) -> dict[str, Any]:
        last, prev_close = self._prices(symbol)
        return {
            "symbol": symbol,
            "latestTrade": {"t": now_eastern().isoformat(), "p": float(last)},
            "prevDailyBar": {"c": float(prev_close)},
        }
