"""Trade ledger record."""

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from brokerage_assistant.core.timezone import execution_datetime
from brokerage_assistant.domain.models.enums import TradeSide


@dataclass(frozen=True)
class TradeRecord:
    """
    One executed trade from the account ledger (read-only).

    Ordering key is (trade_date, trade_time, sequence). A missing
    trade_time sorts as the start of its date; sequence is the store's
    insertion order and breaks ties.
    """

    trade_id: str
    account_id: str
    symbol: str
    side: TradeSide
    quantity: Decimal
    price: Decimal
    trade_date: date
    trade_time: Optional[time] = None
    sequence: int = 0
    gross_amount: Optional[Decimal] = None
    commission: Optional[Decimal] = None
    net_amount: Optional[Decimal] = None

    @property
    def executed_at(self) -> datetime:
        """Execution timestamp (naive, market time)."""
        return execution_datetime(self.trade_date, self.trade_time)

    @property
    def sort_key(self) -> tuple[date, time, int]:
        return (self.trade_date, self.trade_time or time.min, self.sequence)

    @property
    def notional(self) -> Decimal:
        """quantity * price."""
        return self.quantity * self.price
