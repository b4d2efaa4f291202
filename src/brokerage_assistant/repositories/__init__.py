"""Repository layer - data access abstractions and implementations."""

from brokerage_assistant.repositories.protocols import (
    TradeRepository,
    BalanceRepository,
    FeeRepository,
    CacheRepository,
)

__all__ = [
    "TradeRepository",
    "BalanceRepository",
    "FeeRepository",
    "CacheRepository",
]
