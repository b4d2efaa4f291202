"""Portfolio endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from brokerage_assistant.api.deps import get_context, get_portfolio_service
from brokerage_assistant.api.schemas import (
    PositionResponse,
    PositionsResponse,
    PortfolioSnapshotResponse,
)
from brokerage_assistant.app_context import AppContext
from brokerage_assistant.domain.views import PositionView
from brokerage_assistant.services import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


def _position_response(view: PositionView) -> PositionResponse:
    return PositionResponse(
        symbol=view.symbol,
        shares=view.shares,
        average_cost=view.average_cost,
        current_price=view.current_price,
        total_value=view.total_value,
        total_cost=view.total_cost,
        gain_loss=view.gain_loss,
        gain_loss_percent=view.gain_loss_percent,
        previous_price=view.previous_price,
    )


@router.get("", response_model=PortfolioSnapshotResponse)
def get_portfolio(
    account_id: Optional[str] = Query(None, description="Account code (configured default if empty)"),
    context: AppContext = Depends(get_context),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioSnapshotResponse:
    """Portfolio snapshot: value, day change, cash and positions."""
    account = context.resolve_account(account_id)
    snapshot = service.get_snapshot(account)
    return PortfolioSnapshotResponse(
        account_id=account,
        total_value=snapshot.total_value,
        day_change=snapshot.day_change,
        day_change_percent=snapshot.day_change_percent,
        total_cash=snapshot.total_cash,
        total_invested=snapshot.total_invested,
        positions=[_position_response(p) for p in snapshot.positions],
        as_of=snapshot.as_of,
    )


@router.get("/positions", response_model=PositionsResponse)
def get_positions(
    account_id: Optional[str] = Query(None, description="Account code (configured default if empty)"),
    context: AppContext = Depends(get_context),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PositionsResponse:
    """Current holdings reconstructed from the ledger."""
    account = context.resolve_account(account_id)
    return PositionsResponse(
        account_id=account,
        positions=[_position_response(p) for p in service.get_positions(account)],
    )
