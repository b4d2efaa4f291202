"""Balance store repository protocol."""

from typing import Protocol, Optional

from brokerage_assistant.domain.models import BalanceRecord


class BalanceRepository(Protocol):
    """Interface for daily balance snapshots."""

    def list_balances(
        self,
        account_id: str,
        limit: Optional[int] = 2,
    ) -> list[BalanceRecord]:
        """List balance records for an account, newest date first."""
        ...
