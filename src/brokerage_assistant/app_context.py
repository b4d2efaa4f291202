"""Application context: process-wide collaborators and service construction.

One instance is built per process (by the FastAPI lifespan or by an
embedding caller) and passed by reference. It owns the long-lived pieces
(market data provider, intent classifier, time-series cache) and builds
request-scoped services around a database session.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.orm import Session, sessionmaker

from brokerage_assistant.config.settings import Settings, get_settings
from brokerage_assistant.core.exceptions import ValidationError
from brokerage_assistant.providers import (
    AlpacaMarketDataProvider,
    IntentClassifier,
    KeywordIntentClassifier,
    MarketDataProvider,
    StubMarketDataProvider,
)
from brokerage_assistant.repositories.memory import InMemoryCacheRepository
from brokerage_assistant.repositories.protocols import CacheRepository
from brokerage_assistant.repositories.sqlalchemy import (
    SqlAlchemyBalanceRepository,
    SqlAlchemyCacheRepository,
    SqlAlchemyFeeRepository,
    SqlAlchemyTradeRepository,
    get_session_factory,
)
from brokerage_assistant.services import (
    AssistantService,
    LedgerService,
    MarketDataService,
    PortfolioService,
    QueryRouter,
    TimeSeriesCache,
)

logger = logging.getLogger(__name__)


def build_market_data_provider(settings: Settings) -> MarketDataProvider:
    """Select the market data provider named in settings."""
    name = settings.market_data_provider.strip().lower()
    if name == "stub":
        return StubMarketDataProvider()
    if name == "alpaca":
        if not settings.alpaca_api_key or not settings.alpaca_secret_key:
            raise ValidationError("Alpaca provider needs alpaca_api_key and alpaca_secret_key")
        return AlpacaMarketDataProvider(
            api_key=settings.alpaca_api_key,
            secret_key=settings.alpaca_secret_key,
            base_url=settings.alpaca_data_url,
            timeout=settings.http_timeout_seconds,
        )
    raise ValidationError(f"Unknown market data provider: {settings.market_data_provider}")


class AppContext:
    """
    Holds injected dependencies and builds services from them.

    Request-scoped services take a Session; the cache, provider and
    classifier are shared for the life of the context.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session_factory: Optional[sessionmaker] = None,
        provider: Optional[MarketDataProvider] = None,
        classifier: Optional[IntentClassifier] = None,
        cache_repo: Optional[CacheRepository] = None,
    ):
        self.settings = settings or get_settings()
        self._session_factory = session_factory or get_session_factory()
        self.provider = provider or build_market_data_provider(self.settings)
        self.classifier = classifier or KeywordIntentClassifier()

        if cache_repo is None:
            if self.settings.persistent_market_cache:
                cache_repo = SqlAlchemyCacheRepository(self._session_factory)
            else:
                cache_repo = InMemoryCacheRepository()
        self.cache = TimeSeriesCache(
            repository=cache_repo,
            dedupe_inflight=self.settings.cache_dedupe_inflight,
            purge_interval=self.settings.cache_purge_interval_seconds,
        )
        logger.info(
            f"Context ready: provider={type(self.provider).__name__} "
            f"cache={type(cache_repo).__name__}"
        )

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Open a database session for in-process (non-HTTP) use."""
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def resolve_account(self, account_id: Optional[str]) -> str:
        """Requested account, or the configured default account."""
        return (account_id or "").strip() or self.settings.default_account_id

    # Service builders

    def ledger_service(self, db: Session) -> LedgerService:
        return LedgerService(trade_repo=SqlAlchemyTradeRepository(db))

    def portfolio_service(self, db: Session) -> PortfolioService:
        return PortfolioService(
            ledger_service=self.ledger_service(db),
            balance_repo=SqlAlchemyBalanceRepository(db),
        )

    def market_data_service(self, db: Session) -> MarketDataService:
        settings = self.settings
        return MarketDataService(
            provider=self.provider,
            cache=self.cache,
            balance_repo=SqlAlchemyBalanceRepository(db),
            quote_ttl_seconds=settings.quote_cache_ttl_seconds,
            snapshot_ttl_seconds=settings.snapshot_cache_ttl_seconds,
            bar_ttl_seconds=settings.bar_cache_ttl_seconds,
            equity_history_ttl_seconds=settings.equity_history_cache_ttl_seconds,
        )

    def query_router(self, db: Session) -> QueryRouter:
        return QueryRouter(
            ledger_service=self.ledger_service(db),
            balance_repo=SqlAlchemyBalanceRepository(db),
            fee_repo=SqlAlchemyFeeRepository(db),
            market_data_service=self.market_data_service(db),
            fallback_limit=self.settings.query_fallback_limit,
        )

    def assistant_service(self, db: Session) -> AssistantService:
        return AssistantService(classifier=self.classifier, router=self.query_router(db))

    def close(self) -> None:
        """Release provider resources."""
        close = getattr(self.provider, "close", None)
        if callable(close):
            close()
