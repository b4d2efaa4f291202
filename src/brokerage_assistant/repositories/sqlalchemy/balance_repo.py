"""SQLAlchemy implementation of BalanceRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from brokerage_assistant.core.exceptions import SourceUnavailableError
from brokerage_assistant.domain.models import BalanceRecord
from brokerage_assistant.repositories.sqlalchemy.orm_models import BalanceORM


def _dec(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


class SqlAlchemyBalanceRepository:
    """SQLAlchemy-backed balance store."""

    def __init__(self, db: Session):
        self._db = db

    def list_balances(
        self,
        account_id: str,
        limit: Optional[int] = 2,
    ) -> list[BalanceRecord]:
        """List balance records for an account, newest date first."""
        query = (
            self._db.query(BalanceORM)
            .filter(BalanceORM.account_code == account_id)
            .order_by(BalanceORM.date.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        try:
            rows = query.all()
        except SQLAlchemyError as e:
            raise SourceUnavailableError("Balance store", str(e)) from e
        return [self._to_domain(b) for b in rows]

    @staticmethod
    def _to_domain(orm: BalanceORM) -> BalanceRecord:
        """Convert ORM balance to domain model (stock + options market values)."""
        return BalanceRecord(
            account_id=orm.account_code,
            date=orm.date,
            cash_balance=_dec(orm.cash_balance),
            account_equity=_dec(orm.account_equity),
            long_market_value=_dec(orm.stock_lmv) + _dec(orm.options_lmv),
            short_market_value=_dec(orm.stock_smv) + _dec(orm.options_smv),
        )
