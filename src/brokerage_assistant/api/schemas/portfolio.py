"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class PositionResponse(BaseModel):
    """Response schema for a single valued position."""

    symbol: str
    shares: Decimal
    average_cost: Decimal
    current_price: Decimal
    total_value: Decimal
    total_cost: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal
    previous_price: Optional[Decimal] = None


class PositionsResponse(BaseModel):
    """Response schema for positions listing."""

    account_id: str
    positions: list[PositionResponse]


class PortfolioSnapshotResponse(BaseModel):
    """Response schema for the portfolio snapshot."""

    account_id: str
    total_value: Decimal
    day_change: Decimal
    day_change_percent: Decimal
    total_cash: Decimal
    total_invested: Decimal
    positions: list[PositionResponse]
    as_of: Optional[datetime] = None
