"""SQLAlchemy implementation of TradeRepository."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlalchemy import and_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from brokerage_assistant.core.exceptions import MalformedRecordError, SourceUnavailableError
from brokerage_assistant.domain.models import TradeRecord, TradeSide
from brokerage_assistant.repositories.sqlalchemy.orm_models import TradeORM

logger = logging.getLogger(__name__)

_SIDE_CODES = {
    TradeSide.BUY: ["B", "BUY"],
    TradeSide.SELL: ["S", "SELL"],
}


def _to_decimal(value, field_name: str) -> Decimal:
    if value is None:
        raise MalformedRecordError("trade", f"missing {field_name}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise MalformedRecordError("trade", f"invalid {field_name}: {value!r}")


def _optional_decimal(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


class SqlAlchemyTradeRepository:
    """SQLAlchemy-backed trade ledger reader."""

    def __init__(self, db: Session):
        self._db = db

    def list_trades(
        self,
        account_id: str,
        descending: bool = False,
        limit: Optional[int] = None,
        symbol: Optional[str] = None,
        side: Optional[TradeSide] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TradeRecord]:
        """List trades for an account ordered by (date, time, insertion order)."""
        conditions = [TradeORM.account_code == account_id]
        if symbol:
            conditions.append(func.upper(TradeORM.symbol) == symbol.strip().upper())
        if side:
            conditions.append(func.upper(TradeORM.trade_type).in_(_SIDE_CODES[side]))
        if start_date:
            conditions.append(TradeORM.date >= start_date)
        if end_date:
            conditions.append(TradeORM.date <= end_date)

        if descending:
            ordering = [
                TradeORM.date.desc(),
                TradeORM.trade_timestamp.desc().nulls_last(),
                TradeORM.id.desc(),
            ]
        else:
            ordering = [
                TradeORM.date,
                TradeORM.trade_timestamp.asc().nulls_first(),
                TradeORM.id,
            ]

        try:
            if limit is not None:
                # SQL cannot order a null time level with midnight, so select
                # whole trading days up to the limit and cut after sorting
                boundary = (
                    self._db.query(TradeORM.date)
                    .filter(and_(*conditions))
                    .order_by(ordering[0])
                    .offset(max(limit, 1) - 1)
                    .limit(1)
                    .scalar()
                )
                if boundary is not None:
                    conditions.append(TradeORM.date >= boundary if descending else TradeORM.date <= boundary)
            rows = self._db.query(TradeORM).filter(and_(*conditions)).order_by(*ordering).all()
        except SQLAlchemyError as e:
            raise SourceUnavailableError("Trade ledger", str(e)) from e

        trades: list[TradeRecord] = []
        for row in rows:
            try:
                trades.append(self._to_domain(row))
            except MalformedRecordError as e:
                logger.warning(f"Skipping trade row {row.trade_id}: {e.message}")

        # Null times sort as midnight; keep ties in insertion order
        trades.sort(key=lambda t: t.sort_key, reverse=descending)
        return trades if limit is None else trades[:limit]

    @staticmethod
    def _to_domain(orm: TradeORM) -> TradeRecord:
        """Convert ORM model to domain model."""
        symbol = (orm.symbol or "").strip().upper()
        if not symbol:
            raise MalformedRecordError("trade", "missing symbol")
        try:
            side = TradeSide.parse(orm.trade_type)
        except ValueError as e:
            raise MalformedRecordError("trade", str(e))

        return TradeRecord(
            trade_id=orm.trade_id,
            account_id=orm.account_code,
            symbol=symbol,
            side=side,
            quantity=_to_decimal(orm.stock_share_qty, "quantity"),
            price=_to_decimal(orm.stock_trade_price, "price"),
            trade_date=orm.date,
            trade_time=orm.trade_timestamp.time() if orm.trade_timestamp else None,
            sequence=orm.id,
            gross_amount=_optional_decimal(orm.gross_amount),
            commission=_optional_decimal(orm.commission),
            net_amount=_optional_decimal(orm.net_amount),
        )
