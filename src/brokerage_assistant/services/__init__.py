"""Service layer - business logic orchestration."""

from brokerage_assistant.services.ledger_service import LedgerService
from brokerage_assistant.services.position_reconstructor import reconstruct
from brokerage_assistant.services.portfolio_valuator import valuate
from brokerage_assistant.services.portfolio_service import PortfolioService
from brokerage_assistant.services.time_series_cache import TimeSeriesCache
from brokerage_assistant.services.market_data_service import MarketDataService
from brokerage_assistant.services.query_router import QueryRouter
from brokerage_assistant.services.assistant_service import AssistantService

__all__ = [
    "LedgerService",
    "reconstruct",
    "valuate",
    "PortfolioService",
    "TimeSeriesCache",
    "MarketDataService",
    "QueryRouter",
    "AssistantService",
]
