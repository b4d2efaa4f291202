"""SQLAlchemy implementation of CacheRepository (market_data_cache table)."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from brokerage_assistant.core.exceptions import SourceUnavailableError
from brokerage_assistant.domain.models import CacheEntry, CacheKey
from brokerage_assistant.repositories.sqlalchemy.orm_models import MarketDataCacheORM


def _to_naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def _from_naive_utc(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


class SqlAlchemyCacheRepository:
    """
    SQLAlchemy-backed cache store for provider payloads.

    Lives for the whole process, so each call opens its own session from
    the factory instead of holding a request-scoped one.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get(self, key: CacheKey) -> Optional[CacheEntry]:
        """Return the newest stored entry for key."""
        try:
            with self._session_factory() as db:
                orm_entry = (
                    self._key_query(db, key)
                    .order_by(MarketDataCacheORM.timestamp.desc(), MarketDataCacheORM.id.desc())
                    .first()
                )
                return self._to_domain(orm_entry) if orm_entry else None
        except SQLAlchemyError as e:
            raise SourceUnavailableError("Market data cache", str(e)) from e

    def replace(self, entry: CacheEntry) -> None:
        """Delete rows for the entry's key and insert the new payload."""
        try:
            with self._session_factory() as db:
                self._key_query(db, entry.key).delete(synchronize_session=False)
                db.add(
                    MarketDataCacheORM(
                        symbol=entry.key.subject,
                        data_type=entry.key.kind,
                        timeframe=entry.key.sub_key,
                        data=entry.payload,
                        timestamp=_to_naive_utc(entry.fetched_at),
                        expires_at=_to_naive_utc(entry.expires_at),
                    )
                )
                db.commit()
        except SQLAlchemyError as e:
            raise SourceUnavailableError("Market data cache", str(e)) from e

    def purge_expired(self, now: datetime) -> int:
        """Delete expired rows (clean_expired_cache)."""
        try:
            with self._session_factory() as db:
                count = (
                    db.query(MarketDataCacheORM)
                    .filter(MarketDataCacheORM.expires_at <= _to_naive_utc(now))
                    .delete(synchronize_session=False)
                )
                db.commit()
                return count
        except SQLAlchemyError as e:
            raise SourceUnavailableError("Market data cache", str(e)) from e

    @staticmethod
    def _key_query(db: Session, key: CacheKey):
        query = db.query(MarketDataCacheORM).filter(
            MarketDataCacheORM.symbol == key.subject,
            MarketDataCacheORM.data_type == key.kind,
        )
        if key.sub_key is None:
            return query.filter(MarketDataCacheORM.timeframe.is_(None))
        return query.filter(MarketDataCacheORM.timeframe == key.sub_key)

    @staticmethod
    def _to_domain(orm: MarketDataCacheORM) -> CacheEntry:
        """Convert ORM row to domain model."""
        return CacheEntry(
            key=CacheKey(orm.symbol, orm.data_type, orm.timeframe),
            payload=orm.data,
            fetched_at=_from_naive_utc(orm.timestamp),
            expires_at=_from_naive_utc(orm.expires_at),
        )
