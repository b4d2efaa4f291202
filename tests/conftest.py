"""
Pytest configuration and fixtures for brokerage assistant tests.

This module provides:
- In-memory SQLite database fixtures
- Factory helpers for trades, balances and fees
- Deterministic and failing market data providers
- A controllable clock for cache expiry
- Service and repository fixtures
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from brokerage_assistant.main import app
from brokerage_assistant.app_context import AppContext
from brokerage_assistant.repositories.sqlalchemy.database import Base, get_db
# Import ORM models to register them with Base before creating tables
from brokerage_assistant.repositories.sqlalchemy import orm_models  # noqa: F401
from brokerage_assistant.repositories.sqlalchemy.orm_models import (
    BalanceORM,
    FeeORM,
    TradeORM,
)
from brokerage_assistant.repositories.sqlalchemy import (
    SqlAlchemyBalanceRepository,
    SqlAlchemyCacheRepository,
    SqlAlchemyFeeRepository,
    SqlAlchemyTradeRepository,
)
from brokerage_assistant.repositories.memory import InMemoryCacheRepository
from brokerage_assistant.providers import KeywordIntentClassifier
from brokerage_assistant.services import (
    AssistantService,
    LedgerService,
    MarketDataService,
    PortfolioService,
    QueryRouter,
    TimeSeriesCache,
)
from brokerage_assistant.domain.models import BalanceRecord, TradeRecord, TradeSide
from brokerage_assistant.core.timezone import EASTERN_TZ
from brokerage_assistant.config.settings import Settings, reset_settings


ACCOUNT = "LS123456"
TODAY = date(2024, 6, 14)


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return eastern_datetime(2024, 6, 14, 14, 30, 0)


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    """Provide a controllable clock starting at fixed_now."""
    return FakeClock(fixed_now)


# =============================================================================
# DOMAIN RECORD HELPERS
# =============================================================================


def make_trade(
    side: str,
    symbol: str,
    quantity: Any,
    price: Any,
    trade_date: date = date(2024, 6, 10),
    trade_time: Optional[time] = None,
    sequence: int = 0,
    trade_id: Optional[str] = None,
    net_amount: Optional[Decimal] = None,
) -> TradeRecord:
    """Build a TradeRecord; quantity and price are converted to Decimal."""
    return TradeRecord(
        trade_id=trade_id or f"T{sequence:04d}",
        account_id=ACCOUNT,
        symbol=symbol,
        side=TradeSide.parse(side),
        quantity=Decimal(str(quantity)),
        price=Decimal(str(price)),
        trade_date=trade_date,
        trade_time=trade_time,
        sequence=sequence,
        net_amount=net_amount,
    )


def make_balance(
    day: date,
    equity: Any,
    cash: Any,
    account_id: str = ACCOUNT,
) -> BalanceRecord:
    """Build a BalanceRecord with equity and cash as Decimal."""
    return BalanceRecord(
        account_id=account_id,
        date=day,
        cash_balance=Decimal(str(cash)),
        account_equity=Decimal(str(equity)),
    )


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_factory(test_engine) -> sessionmaker:
    """Session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def test_session(session_factory) -> Session:
    """Create test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# ROW FACTORIES
# =============================================================================


@pytest.fixture
def trade_row_factory(test_session) -> Callable[..., TradeORM]:
    """Insert trade_data rows; ids follow insertion order."""
    counter = {"n": 0}

    def _create(
        side: Optional[str],
        symbol: Optional[str],
        quantity: Any,
        price: Any,
        day: date = date(2024, 6, 10),
        at: Optional[time] = None,
        account_code: str = ACCOUNT,
        net_amount: Any = None,
    ) -> TradeORM:
        counter["n"] += 1
        row = TradeORM(
            account_code=account_code,
            date=day,
            trade_id=f"T{counter['n']:05d}",
            trade_type=side,
            trade_timestamp=datetime.combine(day, at) if at else None,
            security_type="S",
            symbol=symbol,
            stock_trade_price=Decimal(str(price)) if price is not None else None,
            stock_share_qty=Decimal(str(quantity)) if quantity is not None else None,
            net_amount=Decimal(str(net_amount)) if net_amount is not None else None,
        )
        test_session.add(row)
        test_session.commit()
        return row

    return _create


@pytest.fixture
def balance_row_factory(test_session) -> Callable[..., BalanceORM]:
    """Insert acct_balances rows."""

    def _create(
        day: date,
        equity: Any,
        cash: Any,
        account_code: str = ACCOUNT,
        stock_lmv: Any = "0",
        options_lmv: Any = "0",
    ) -> BalanceORM:
        row = BalanceORM(
            account_code=account_code,
            date=day,
            cash_balance=Decimal(str(cash)),
            account_equity=Decimal(str(equity)),
            stock_lmv=Decimal(str(stock_lmv)),
            stock_smv=Decimal("0"),
            options_lmv=Decimal(str(options_lmv)),
            options_smv=Decimal("0"),
        )
        test_session.add(row)
        test_session.commit()
        return row

    return _create


@pytest.fixture
def fee_row_factory(test_session) -> Callable[..., FeeORM]:
    """Insert acct_fees rows."""
    counter = {"n": 0}

    def _create(
        day: date,
        amount: Any,
        fee_type: str = "commission",
        symbol: Optional[str] = None,
        account_code: str = ACCOUNT,
    ) -> FeeORM:
        counter["n"] += 1
        row = FeeORM(
            account_code=account_code,
            date=day,
            transaction_id=f"F{counter['n']:05d}",
            type=fee_type,
            symbol=symbol,
            amount=Decimal(str(amount)),
        )
        test_session.add(row)
        test_session.commit()
        return row

    return _create


@pytest.fixture
def sample_ledger(trade_row_factory, balance_row_factory, fee_row_factory) -> None:
    """
    Account with AAPL and MSFT holdings, two balance days and two fees.

    AAPL: buy 10 @ 100, buy 10 @ 120, sell 15 @ 150 -> 5 shares, avg 110
    MSFT: buy 4 @ 300 -> 4 shares, avg 300
    """
    trade_row_factory("B", "AAPL", "10", "100", day=date(2024, 6, 10), at=time(10, 0))
    trade_row_factory("B", "AAPL", "10", "120", day=date(2024, 6, 11), at=time(11, 0))
    trade_row_factory("S", "AAPL", "15", "150", day=date(2024, 6, 12), at=time(14, 30))
    trade_row_factory("B", "MSFT", "4", "300", day=date(2024, 6, 12), at=time(9, 45))
    balance_row_factory(date(2024, 6, 13), equity="100000", cash="98000")
    balance_row_factory(date(2024, 6, 14), equity="105000", cash="103000")
    fee_row_factory(date(2024, 6, 11), "-1.00", symbol="AAPL")
    fee_row_factory(date(2024, 6, 12), "-2.50", fee_type="interest")


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def trade_repo(test_session) -> SqlAlchemyTradeRepository:
    """Provide test TradeRepository."""
    return SqlAlchemyTradeRepository(test_session)


@pytest.fixture
def balance_repo(test_session) -> SqlAlchemyBalanceRepository:
    """Provide test BalanceRepository."""
    return SqlAlchemyBalanceRepository(test_session)


@pytest.fixture
def fee_repo(test_session) -> SqlAlchemyFeeRepository:
    """Provide test FeeRepository."""
    return SqlAlchemyFeeRepository(test_session)


@pytest.fixture
def sql_cache_repo(session_factory) -> SqlAlchemyCacheRepository:
    """Provide persistent CacheRepository on the test engine."""
    return SqlAlchemyCacheRepository(session_factory)


@pytest.fixture
def memory_cache_repo() -> InMemoryCacheRepository:
    """Provide in-memory CacheRepository."""
    return InMemoryCacheRepository()


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic market data provider for testing.

    Returns fixed payloads and counts calls per method.
    """

    FIXED_PRICES = {
        "AAPL": 185.50,
        "MSFT": 378.25,
        "TSLA": 248.75,
    }

    def __init__(self):
        self.calls: dict[str, int] = {"quote": 0, "bars": 0, "snapshot": 0}

    def fetch_quote(self, symbol: str) -> dict[str, Any]:
        self.calls["quote"] += 1
        price = self.FIXED_PRICES.get(symbol, 100.0)
        return {"symbol": symbol, "quote": {"bp": price - 0.01, "ap": price + 0.01}}

    def fetch_bars(
        self,
        symbol: str,
        timeframe: str = "1Day",
        start: Optional[str] = None,
        end: Optional[str] = None,
        limit: int = 100,
    ) -> dict[str, Any]:
        self.calls["bars"] += 1
        price = self.FIXED_PRICES.get(symbol, 100.0)
        return {
            "symbol": symbol,
            "timeframe": timeframe,
            "start": start,
            "end": end,
            "bars": [{"c": price} for _ in range(min(limit, 3))],
        }

    def fetch_snapshot(self, symbol: str) -> dict[str, Any]:
        self.calls["snapshot"] += 1
        price = self.FIXED_PRICES.get(symbol, 100.0)
        return {"symbol": symbol, "latestTrade": {"p": price}, "prevDailyBar": {"c": price - 1}}


class FailingMarketProvider:
    """Market provider that always raises an exception."""

    def __init__(self):
        self.calls = 0

    def fetch_quote(self, symbol: str) -> dict[str, Any]:
        self.calls += 1
        raise ConnectionError("Network unavailable")

    def fetch_bars(self, symbol: str, timeframe: str = "1Day", start=None, end=None, limit: int = 100):
        self.calls += 1
        raise ConnectionError("Network unavailable")

    def fetch_snapshot(self, symbol: str) -> dict[str, Any]:
        self.calls += 1
        raise ConnectionError("Network unavailable")


@pytest.fixture
def deterministic_provider() -> DeterministicMarketProvider:
    """Provide deterministic market data provider."""
    return DeterministicMarketProvider()


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def time_series_cache(memory_cache_repo, clock) -> TimeSeriesCache:
    """Provide cache over the in-memory store with the fake clock."""
    return TimeSeriesCache(repository=memory_cache_repo, clock=clock)


@pytest.fixture
def ledger_service(trade_repo) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(trade_repo=trade_repo)


@pytest.fixture
def portfolio_service(ledger_service, balance_repo) -> PortfolioService:
    """Provide test PortfolioService."""
    return PortfolioService(ledger_service=ledger_service, balance_repo=balance_repo)


@pytest.fixture
def market_data_service(deterministic_provider, time_series_cache, balance_repo) -> MarketDataService:
    """Provide test MarketDataService with deterministic provider."""
    return MarketDataService(
        provider=deterministic_provider,
        cache=time_series_cache,
        balance_repo=balance_repo,
    )


@pytest.fixture
def query_router(ledger_service, balance_repo, fee_repo, market_data_service) -> QueryRouter:
    """Provide test QueryRouter with a fixed 'today'."""
    return QueryRouter(
        ledger_service=ledger_service,
        balance_repo=balance_repo,
        fee_repo=fee_repo,
        market_data_service=market_data_service,
        fallback_limit=10,
        today=lambda: TODAY,
    )


@pytest.fixture
def assistant_service(query_router) -> AssistantService:
    """Provide test AssistantService with the keyword classifier."""
    return AssistantService(classifier=KeywordIntentClassifier(), router=query_router)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings for API tests; cache kept in memory."""
    return Settings(
        _env_file=None,
        default_account_id=ACCOUNT,
        persistent_market_cache=False,
        market_data_provider="stub",
    )


@pytest.fixture
def app_context(test_settings, session_factory, deterministic_provider) -> AppContext:
    """AppContext wired to the test database and deterministic provider."""
    return AppContext(
        settings=test_settings,
        session_factory=session_factory,
        provider=deterministic_provider,
        cache_repo=InMemoryCacheRepository(),
    )


@pytest.fixture
def client(session_factory, app_context) -> TestClient:
    """Provide FastAPI test client with test database and context."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.context = app_context
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    app.state.context = None
