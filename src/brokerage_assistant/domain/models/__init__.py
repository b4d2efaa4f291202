"""Domain models package."""

from brokerage_assistant.domain.models.enums import TradeSide, Intent, MarketDataType
from brokerage_assistant.domain.models.trade import TradeRecord
from brokerage_assistant.domain.models.balance import BalanceRecord
from brokerage_assistant.domain.models.fee import FeeRecord
from brokerage_assistant.domain.models.cache import CacheKey, CacheEntry
from brokerage_assistant.domain.models.intent import ClassifiedIntent

__all__ = [
    "TradeSide",
    "Intent",
    "MarketDataType",
    "TradeRecord",
    "BalanceRecord",
    "FeeRecord",
    "CacheKey",
    "CacheEntry",
    "ClassifiedIntent",
]
