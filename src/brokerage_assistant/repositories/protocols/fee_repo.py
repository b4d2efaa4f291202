"""Fee store repository protocol."""

from typing import Protocol, Optional

from brokerage_assistant.domain.models import FeeRecord


class FeeRepository(Protocol):
    """Interface for account fees, commissions and interest."""

    def list_fees(
        self,
        account_id: str,
        limit: Optional[int] = None,
        fee_type: Optional[str] = None,
    ) -> list[FeeRecord]:
        """List fee records for an account, newest date first."""
        ...
