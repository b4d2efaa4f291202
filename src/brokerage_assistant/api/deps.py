"""Dependency injection for FastAPI."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from brokerage_assistant.app_context import AppContext
from brokerage_assistant.repositories.sqlalchemy import (
    SqlAlchemyBalanceRepository,
    SqlAlchemyFeeRepository,
)
from brokerage_assistant.repositories.sqlalchemy.database import get_db
from brokerage_assistant.services import (
    AssistantService,
    LedgerService,
    MarketDataService,
    PortfolioService,
)


def get_context(request: Request) -> AppContext:
    """Provide the process-wide AppContext built at startup."""
    return request.app.state.context


def get_balance_repo(db: Session = Depends(get_db)) -> SqlAlchemyBalanceRepository:
    """Provide BalanceRepository instance."""
    return SqlAlchemyBalanceRepository(db)


def get_fee_repo(db: Session = Depends(get_db)) -> SqlAlchemyFeeRepository:
    """Provide FeeRepository instance."""
    return SqlAlchemyFeeRepository(db)


def get_ledger_service(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> LedgerService:
    """Provide LedgerService instance."""
    return context.ledger_service(db)


def get_portfolio_service(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return context.portfolio_service(db)


def get_market_data_service(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> MarketDataService:
    """Provide MarketDataService instance backed by the shared cache."""
    return context.market_data_service(db)


def get_assistant_service(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> AssistantService:
    """Provide AssistantService instance."""
    return context.assistant_service(db)
