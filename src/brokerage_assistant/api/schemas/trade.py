"""Pydantic schemas for trade ledger endpoints."""

from datetime import date, time
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class TradeResponse(BaseModel):
    """Response schema for a single ledger trade."""

    trade_id: str
    symbol: str
    side: str
    quantity: Decimal
    price: Decimal
    trade_date: date
    trade_time: Optional[time] = None
    gross_amount: Optional[Decimal] = None
    commission: Optional[Decimal] = None
    net_amount: Optional[Decimal] = None


class TradeListResponse(BaseModel):
    """Response schema for trade listings."""

    account_id: str
    trades: list[TradeResponse]


class TradeSummaryResponse(BaseModel):
    """Totals by side over the filtered trades."""

    account_id: str
    total_trades: int
    total_buys: int
    total_sells: int
    buy_shares: Decimal
    sell_shares: Decimal
    buy_notional: Decimal
    sell_notional: Decimal
    total_notional: Decimal
