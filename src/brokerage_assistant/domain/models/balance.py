"""Daily account balance snapshot."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class BalanceRecord:
    """
    End-of-day balance row for an account (append-only, one per day).

    long_market_value covers stocks and options; short_market_value is
    reported by the broker as a non-positive amount.
    """

    account_id: str
    date: date
    cash_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    account_equity: Decimal = field(default_factory=lambda: Decimal("0"))
    long_market_value: Decimal = field(default_factory=lambda: Decimal("0"))
    short_market_value: Decimal = field(default_factory=lambda: Decimal("0"))
