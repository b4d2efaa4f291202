"""Trade ledger endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from brokerage_assistant.api.deps import get_context, get_ledger_service
from brokerage_assistant.api.schemas import (
    TradeResponse,
    TradeListResponse,
    TradeSummaryResponse,
)
from brokerage_assistant.app_context import AppContext
from brokerage_assistant.core.exceptions import ValidationError
from brokerage_assistant.domain.models import TradeRecord, TradeSide
from brokerage_assistant.services import LedgerService

router = APIRouter(prefix="/trades", tags=["trades"])


def _parse_side(side: Optional[str]) -> Optional[TradeSide]:
    if not side:
        return None
    try:
        return TradeSide.parse(side)
    except ValueError as e:
        raise ValidationError(str(e))


def _trade_response(trade: TradeRecord) -> TradeResponse:
    return TradeResponse(
        trade_id=trade.trade_id,
        symbol=trade.symbol,
        side=trade.side.value,
        quantity=trade.quantity,
        price=trade.price,
        trade_date=trade.trade_date,
        trade_time=trade.trade_time,
        gross_amount=trade.gross_amount,
        commission=trade.commission,
        net_amount=trade.net_amount,
    )


@router.get("", response_model=TradeListResponse)
def list_trades(
    account_id: Optional[str] = Query(None, description="Account code (configured default if empty)"),
    symbol: Optional[str] = Query(None),
    side: Optional[str] = Query(None, description="buy or sell"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    context: AppContext = Depends(get_context),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TradeListResponse:
    """List trades with optional filters, newest first by default."""
    account = context.resolve_account(account_id)
    trades = ledger.list_trades(
        account,
        descending=order == "desc",
        limit=limit,
        symbol=symbol,
        side=_parse_side(side),
        start_date=start_date,
        end_date=end_date,
    )
    return TradeListResponse(
        account_id=account,
        trades=[_trade_response(t) for t in trades],
    )


@router.get("/summary", response_model=TradeSummaryResponse)
def trade_summary(
    account_id: Optional[str] = Query(None),
    symbol: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    context: AppContext = Depends(get_context),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TradeSummaryResponse:
    """Trade counts, shares and notional split by side."""
    account = context.resolve_account(account_id)
    trades = ledger.list_trades(
        account,
        symbol=symbol,
        start_date=start_date,
        end_date=end_date,
    )
    summary = LedgerService.summarize(trades)
    return TradeSummaryResponse(
        account_id=account,
        total_trades=summary.total_trades,
        total_buys=summary.total_buys,
        total_sells=summary.total_sells,
        buy_shares=summary.buy_shares,
        sell_shares=summary.sell_shares,
        buy_notional=summary.buy_notional,
        sell_notional=summary.sell_notional,
        total_notional=summary.total_notional,
    )
