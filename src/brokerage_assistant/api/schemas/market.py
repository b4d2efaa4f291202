"""Pydantic schemas for market data endpoints."""

from pydantic import BaseModel


class EquityPointResponse(BaseModel):
    """One point of the account equity chart."""

    date: str
    equity: float
    cash: float


class EquityHistoryResponse(BaseModel):
    """Account equity series, oldest first."""

    account_id: str
    points: list[EquityPointResponse]
