"""Portfolio service: ledger replay plus balances into a portfolio snapshot."""

from brokerage_assistant.core.exceptions import NoDataError
from brokerage_assistant.domain.views import PortfolioSnapshot, PositionView
from brokerage_assistant.repositories.protocols import BalanceRepository
from brokerage_assistant.services.ledger_service import LedgerService
from brokerage_assistant.services.portfolio_valuator import valuate, value_position
from brokerage_assistant.services.position_reconstructor import reconstruct


class PortfolioService:
    """
    Derives portfolio state per request from the ledger and balance store.

    Nothing is stored; every call replays the full ledger. Store failures
    propagate as SourceUnavailableError so no partial snapshot is returned.
    """

    def __init__(
        self,
        ledger_service: LedgerService,
        balance_repo: BalanceRepository,
    ):
        self._ledger = ledger_service
        self._balance_repo = balance_repo

    def get_positions(self, account_id: str) -> list[PositionView]:
        """Current holdings valued at last traded price, largest first."""
        trades = self._ledger.list_trades(account_id)
        views = [value_position(state) for state in reconstruct(trades).values()]
        views.sort(key=lambda v: v.total_value, reverse=True)
        return views

    def get_snapshot(self, account_id: str) -> PortfolioSnapshot:
        """
        Build the portfolio snapshot for an account.

        Raises NoDataError when the account has no balance records.
        """
        trades = self._ledger.list_trades(account_id)
        positions = reconstruct(trades)

        balances = self._balance_repo.list_balances(account_id, limit=2)
        if not balances:
            raise NoDataError("balance data", account_id)

        latest = balances[0]
        previous = balances[1] if len(balances) > 1 else None
        return valuate(positions, latest, previous)
