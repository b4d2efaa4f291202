"""Pydantic schemas for balance endpoints."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class BalanceResponse(BaseModel):
    """Response schema for a daily balance record."""

    date: date
    cash_balance: Decimal
    account_equity: Decimal
    long_market_value: Decimal
    short_market_value: Decimal


class BalanceListResponse(BaseModel):
    """Response schema for balance listings (newest first)."""

    account_id: str
    balances: list[BalanceResponse]
