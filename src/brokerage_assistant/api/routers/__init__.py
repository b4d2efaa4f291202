"""API routers."""

from brokerage_assistant.api.routers.portfolio import router as portfolio_router
from brokerage_assistant.api.routers.trades import router as trades_router
from brokerage_assistant.api.routers.balances import router as balances_router
from brokerage_assistant.api.routers.market import router as market_router
from brokerage_assistant.api.routers.query import router as query_router

__all__ = [
    "portfolio_router",
    "trades_router",
    "balances_router",
    "market_router",
    "query_router",
]
