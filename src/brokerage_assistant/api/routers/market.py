"""Market data endpoints (cached)."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from brokerage_assistant.api.deps import get_context, get_market_data_service
from brokerage_assistant.api.schemas import EquityPointResponse, EquityHistoryResponse
from brokerage_assistant.app_context import AppContext
from brokerage_assistant.services import MarketDataService

router = APIRouter(prefix="/market", tags=["market"])


@router.get("/quote/{symbol}")
def get_quote(
    symbol: str,
    market: MarketDataService = Depends(get_market_data_service),
) -> dict[str, Any]:
    """Latest quote, as returned by the provider."""
    return market.get_quote(symbol)


@router.get("/bars/{symbol}")
def get_bars(
    symbol: str,
    timeframe: str = Query("1Day"),
    start: Optional[str] = Query(None, description="ISO date or timestamp"),
    end: Optional[str] = Query(None, description="ISO date or timestamp"),
    limit: int = Query(100, ge=1, le=10000),
    market: MarketDataService = Depends(get_market_data_service),
) -> dict[str, Any]:
    """Historical bars for one timeframe and range."""
    return market.get_bars(symbol, timeframe=timeframe, start=start, end=end, limit=limit)


@router.get("/snapshot/{symbol}")
def get_snapshot(
    symbol: str,
    market: MarketDataService = Depends(get_market_data_service),
) -> dict[str, Any]:
    """Latest trade, quote and daily bars for a symbol."""
    return market.get_snapshot(symbol)


@router.get("/equity-history", response_model=EquityHistoryResponse)
def get_equity_history(
    account_id: Optional[str] = Query(None),
    days: int = Query(30, ge=1, le=366),
    context: AppContext = Depends(get_context),
    market: MarketDataService = Depends(get_market_data_service),
) -> EquityHistoryResponse:
    """Daily account equity for charting, oldest first."""
    account = context.resolve_account(account_id)
    points = market.get_equity_history(account, days=days)
    return EquityHistoryResponse(
        account_id=account,
        points=[EquityPointResponse(**p) for p in points],
    )
