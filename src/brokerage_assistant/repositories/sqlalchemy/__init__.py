"""SQLAlchemy repository implementations."""

from brokerage_assistant.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    reset_database,
    Base,
)
from brokerage_assistant.repositories.sqlalchemy.trade_repo import SqlAlchemyTradeRepository
from brokerage_assistant.repositories.sqlalchemy.balance_repo import SqlAlchemyBalanceRepository
from brokerage_assistant.repositories.sqlalchemy.fee_repo import SqlAlchemyFeeRepository
from brokerage_assistant.repositories.sqlalchemy.cache_repo import SqlAlchemyCacheRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyTradeRepository",
    "SqlAlchemyBalanceRepository",
    "SqlAlchemyFeeRepository",
    "SqlAlchemyCacheRepository",
]
