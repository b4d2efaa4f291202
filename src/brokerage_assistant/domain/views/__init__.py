"""View models for service outputs."""

from brokerage_assistant.domain.views.portfolio import (
    PositionState,
    PositionView,
    PortfolioSnapshot,
    TradeSummaryView,
    QueryResult,
)

__all__ = [
    "PositionState",
    "PositionView",
    "PortfolioSnapshot",
    "TradeSummaryView",
    "QueryResult",
]
