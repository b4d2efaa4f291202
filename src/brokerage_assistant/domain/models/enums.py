"""Enumerations for domain models."""

from enum import Enum


class TradeSide(str, Enum):
    """Direction of a ledger trade."""

    BUY = "buy"
    SELL = "sell"

    @classmethod
    def parse(cls, value) -> "TradeSide":
        """
        Normalize a broker side code.

        Accepts "buy"/"sell" in any case and the ledger's single-letter
        codes "B"/"S". Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if text in ("b", "buy"):
            return cls.BUY
        if text in ("s", "sell"):
            return cls.SELL
        raise ValueError(f"Unknown trade side: {value!r}")


class Intent(str, Enum):
    """Intents the query router understands."""

    TRADE_HISTORY = "trade_history"
    ACCOUNT_BALANCE = "account_balance"
    FEES = "fees"
    MARKET_DATA = "market_data"
    UNKNOWN = "unknown"


class MarketDataType(str, Enum):
    """Kinds of cached external data."""

    QUOTE = "quote"
    BAR = "bar"
    SNAPSHOT = "snapshot"
    EQUITY_HISTORY = "equity_history"
