"""View models for reconstruction and valuation outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional


@dataclass
class PositionState:
    """
    Running average-cost state for one symbol during a ledger replay.

    Owned by a single reconstruction run; never shared between runs.
    """

    symbol: str
    shares_held: Decimal = field(default_factory=lambda: Decimal("0"))
    total_cost_basis: Decimal = field(default_factory=lambda: Decimal("0"))
    last_trade_price: Optional[Decimal] = None
    previous_trade_price: Optional[Decimal] = None
    traded_volume: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def average_cost(self) -> Optional[Decimal]:
        """total_cost_basis / shares_held; undefined (None) when flat."""
        if self.shares_held > 0:
            return self.total_cost_basis / self.shares_held
        return None


@dataclass
class PositionView:
    """Valued holding for presentation."""

    symbol: str
    shares: Decimal
    average_cost: Decimal
    current_price: Decimal
    total_value: Decimal
    total_cost: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal
    previous_price: Optional[Decimal] = None


@dataclass
class PortfolioSnapshot:
    """Portfolio-level metrics derived per request (never stored)."""

    total_value: Decimal
    day_change: Decimal
    day_change_percent: Decimal
    total_cash: Decimal
    total_invested: Decimal
    positions: list[PositionView] = field(default_factory=list)
    as_of: Optional[datetime] = None


@dataclass
class TradeSummaryView:
    """Totals over a set of trades, split by side."""

    total_trades: int = 0
    total_buys: int = 0
    total_sells: int = 0
    buy_shares: Decimal = field(default_factory=lambda: Decimal("0"))
    sell_shares: Decimal = field(default_factory=lambda: Decimal("0"))
    buy_notional: Decimal = field(default_factory=lambda: Decimal("0"))
    sell_notional: Decimal = field(default_factory=lambda: Decimal("0"))
    total_notional: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class QueryResult:
    """
    Answer produced by the query router.

    degraded is True when the router fell back to a bounded, unfiltered
    read; fallback_reason then says why.
    """

    intent: str
    source: str
    data: list[Any] = field(default_factory=list)
    entities: dict[str, Any] = field(default_factory=dict)
    degraded: bool = False
    fallback_reason: Optional[str] = None
