"""Trade ledger repository protocol."""

from datetime import date
from typing import Protocol, Optional

from brokerage_assistant.domain.models import TradeRecord, TradeSide


class TradeRepository(Protocol):
    """Interface for trade ledger reads (the core never writes the ledger)."""

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
        """
        List trades for an account ordered by (date, time, insertion order).

        Malformed rows are skipped. Raises SourceUnavailableError when the
        store cannot be read.
        """
        ...
