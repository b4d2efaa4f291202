"""Account fee and interest record."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class FeeRecord:
    """Fee, commission or interest charge posted to an account."""

    transaction_id: str
    account_id: str
    date: date
    amount: Decimal
    fee_type: Optional[str] = None
    symbol: Optional[str] = None
    details: Optional[str] = None
