"""SQLAlchemy ORM model definitions."""

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Index,
    Integer,
    JSON,
    Numeric,
    String,
    UniqueConstraint,
)

from brokerage_assistant.repositories.sqlalchemy.database import Base


class TradeORM(Base):
    """Executed trade row; id is the insertion order."""

    __tablename__ = "trade_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_code = Column(String(20), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    trade_id = Column(String(20), nullable=False)
    trade_type = Column(String(20), nullable=True)  # B/S
    trade_timestamp = Column(DateTime, nullable=True)
    security_type = Column(String(10), nullable=True)  # S/O
    symbol = Column(String(30), nullable=True, index=True)
    stock_trade_price = Column(Numeric(precision=18, scale=6), nullable=True)
    stock_share_qty = Column(Numeric(precision=18, scale=6), nullable=True)
    gross_amount = Column(Numeric(precision=18, scale=2), nullable=True)
    commission = Column(Numeric(precision=18, scale=2), nullable=True)
    net_amount = Column(Numeric(precision=18, scale=2), nullable=True)

    __table_args__ = (UniqueConstraint("trade_id", "date", name="uq_trade_id_date"),)


class BalanceORM(Base):
    """Daily account balance snapshot."""

    __tablename__ = "acct_balances"

    account_code = Column(String(20), primary_key=True)
    date = Column(Date, primary_key=True)
    cash_balance = Column(Numeric(precision=18, scale=2), nullable=True)
    stock_lmv = Column(Numeric(precision=18, scale=2), nullable=True)
    stock_smv = Column(Numeric(precision=18, scale=2), nullable=True)
    options_lmv = Column(Numeric(precision=18, scale=2), nullable=True)
    options_smv = Column(Numeric(precision=18, scale=2), nullable=True)
    account_equity = Column(Numeric(precision=18, scale=2), nullable=True)


class FeeORM(Base):
    """Fee, commission or interest posting."""

    __tablename__ = "acct_fees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_code = Column(String(20), nullable=False, index=True)
    date = Column(Date, nullable=False)
    transaction_id = Column(String(20), nullable=False, unique=True)
    type = Column(String(30), nullable=True)
    symbol = Column(String(20), nullable=True)
    amount = Column(Numeric(precision=18, scale=2), nullable=True)
    details = Column(String(30), nullable=True)


class MarketDataCacheORM(Base):
    """Cached provider payload; timestamps stored as naive UTC."""

    __tablename__ = "market_data_cache"

    id = Column(Integer, primary_key=True, autoincrement=True)
    symbol = Column(String(30), nullable=False)
    data_type = Column(String(20), nullable=False)
    timeframe = Column(String(64), nullable=True)
    data = Column(JSON, nullable=False)
    timestamp = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)

    __table_args__ = (Index("idx_market_cache_symbol_type", "symbol", "data_type"),)
