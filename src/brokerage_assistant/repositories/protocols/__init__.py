"""Repository protocol definitions (interfaces)."""

from brokerage_assistant.repositories.protocols.trade_repo import TradeRepository
from brokerage_assistant.repositories.protocols.balance_repo import BalanceRepository
from brokerage_assistant.repositories.protocols.fee_repo import FeeRepository
from brokerage_assistant.repositories.protocols.cache_repo import CacheRepository

__all__ = [
    "TradeRepository",
    "BalanceRepository",
    "FeeRepository",
    "CacheRepository",
]
