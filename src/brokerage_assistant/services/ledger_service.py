"""Ledger service: ordered trade reads and trade-history summaries."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from brokerage_assistant.core.exceptions import ValidationError
from brokerage_assistant.domain.models import TradeRecord, TradeSide
from brokerage_assistant.domain.views import TradeSummaryView
from brokerage_assistant.repositories.protocols import TradeRepository


class LedgerService:
    """
    Read-only access to an account's trade ledger.

    Ascending order feeds reconstruction; descending order answers
    "most recent" questions.
    """

    def __init__(self, trade_repo: TradeRepository):
        self._trade_repo = trade_repo

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
        List trades for an account ordered by execution time.

        Raises SourceUnavailableError if the ledger cannot be read.
        """
        if not account_id:
            raise ValidationError("account_id is required")
        if limit is not None and limit <= 0:
            raise ValidationError("limit must be positive")
        if start_date and end_date and start_date > end_date:
            raise ValidationError("start_date must not be after end_date")

        return self._trade_repo.list_trades(
            account_id=account_id,
            descending=descending,
            limit=limit,
            symbol=symbol.strip().upper() if symbol else None,
            side=side,
            start_date=start_date,
            end_date=end_date,
        )

    def recent_trades(self, account_id: str, limit: int = 10) -> list[TradeRecord]:
        """Most recent trades first."""
        return self.list_trades(account_id, descending=True, limit=limit)

    @staticmethod
    def summarize(trades: Iterable[TradeRecord]) -> TradeSummaryView:
        """
        Totals by side over the given trades.

        Notional uses net_amount when the broker reported one, else
        quantity * price.
        """
        summary = TradeSummaryView()
        for trade in trades:
            qty = abs(trade.quantity)
            notional = trade.net_amount if trade.net_amount is not None else trade.notional
            if trade.side == TradeSide.BUY:
                summary.total_buys += 1
                summary.buy_shares += qty
                summary.buy_notional += abs(notional)
            else:
                summary.total_sells += 1
                summary.sell_shares += qty
                summary.sell_notional += abs(notional)
            summary.total_trades += 1
            summary.total_notional += notional
        return summary
