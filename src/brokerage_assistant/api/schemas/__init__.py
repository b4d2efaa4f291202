"""Pydantic schemas for API request/response."""

from brokerage_assistant.api.schemas.portfolio import (
    PositionResponse,
    PositionsResponse,
    PortfolioSnapshotResponse,
)
from brokerage_assistant.api.schemas.trade import (
    TradeResponse,
    TradeListResponse,
    TradeSummaryResponse,
)
from brokerage_assistant.api.schemas.balance import BalanceResponse, BalanceListResponse
from brokerage_assistant.api.schemas.market import EquityPointResponse, EquityHistoryResponse
from brokerage_assistant.api.schemas.query import QueryRequest, QueryResponse

__all__ = [
    "PositionResponse",
    "PositionsResponse",
    "PortfolioSnapshotResponse",
    "TradeResponse",
    "TradeListResponse",
    "TradeSummaryResponse",
    "BalanceResponse",
    "BalanceListResponse",
    "EquityPointResponse",
    "EquityHistoryResponse",
    "QueryRequest",
    "QueryResponse",
]
