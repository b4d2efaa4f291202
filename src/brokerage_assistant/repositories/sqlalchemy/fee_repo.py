"""SQLAlchemy implementation of FeeRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from brokerage_assistant.core.exceptions import SourceUnavailableError
from brokerage_assistant.domain.models import FeeRecord
from brokerage_assistant.repositories.sqlalchemy.orm_models import FeeORM


class SqlAlchemyFeeRepository:
    """SQLAlchemy-backed fee store."""

    def __init__(self, db: Session):
        self._db = db

    def list_fees(
        self,
        account_id: str,
        limit: Optional[int] = None,
        fee_type: Optional[str] = None,
    ) -> list[FeeRecord]:
        """List fee records for an account, newest date first."""
        query = self._db.query(FeeORM).filter(FeeORM.account_code == account_id)
        if fee_type:
            query = query.filter(func.lower(FeeORM.type) == fee_type.strip().lower())
        query = query.order_by(FeeORM.date.desc(), FeeORM.id.desc())
        if limit is not None:
            query = query.limit(limit)
        try:
            rows = query.all()
        except SQLAlchemyError as e:
            raise SourceUnavailableError("Fee store", str(e)) from e
        return [self._to_domain(f) for f in rows]

    @staticmethod
    def _to_domain(orm: FeeORM) -> FeeRecord:
        """Convert ORM fee to domain model."""
        return FeeRecord(
            transaction_id=orm.transaction_id,
            account_id=orm.account_code,
            date=orm.date,
            amount=Decimal(str(orm.amount)) if orm.amount is not None else Decimal("0"),
            fee_type=orm.type,
            symbol=orm.symbol,
            details=orm.details,
        )
