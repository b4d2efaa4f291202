"""Account balance endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from brokerage_assistant.api.deps import get_balance_repo, get_context
from brokerage_assistant.api.schemas import BalanceResponse, BalanceListResponse
from brokerage_assistant.app_context import AppContext
from brokerage_assistant.repositories.sqlalchemy import SqlAlchemyBalanceRepository

router = APIRouter(prefix="/balances", tags=["balances"])


@router.get("", response_model=BalanceListResponse)
def list_balances(
    account_id: Optional[str] = Query(None, description="Account code (configured default if empty)"),
    limit: int = Query(2, ge=1, le=366),
    context: AppContext = Depends(get_context),
    balance_repo: SqlAlchemyBalanceRepository = Depends(get_balance_repo),
) -> BalanceListResponse:
    """Most recent daily balances, newest first."""
    account = context.resolve_account(account_id)
    balances = balance_repo.list_balances(account, limit=limit)
    return BalanceListResponse(
        account_id=account,
        balances=[
            BalanceResponse(
                date=b.date,
                cash_balance=b.cash_balance,
                account_equity=b.account_equity,
                long_market_value=b.long_market_value,
                short_market_value=b.short_market_value,
            )
            for b in balances
        ],
    )
