"""Portfolio valuation from reconstructed positions and balance snapshots."""

from decimal import Decimal
from typing import Mapping, Optional

from brokerage_assistant.core.exceptions import NoDataError
from brokerage_assistant.core.timezone import now_eastern
from brokerage_assistant.domain.models import BalanceRecord
from brokerage_assistant.domain.views import PortfolioSnapshot, PositionState, PositionView

CENTS = Decimal("0.01")
PRICE_PLACES = Decimal("0.0001")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _percent(numerator: Decimal, denominator: Decimal) -> Decimal:
    """numerator / denominator * 100, or 0 when the denominator is 0."""
    if denominator == ZERO:
        return ZERO.quantize(CENTS)
    return (numerator / denominator * HUNDRED).quantize(CENTS)


def value_position(state: PositionState) -> PositionView:
    """
    Value one holding at its last traded price.

    Formula: total_value = shares × last_trade_price,
    total_cost = shares × average_cost.
    """
    price = state.last_trade_price or ZERO
    average_cost = state.average_cost or ZERO
    total_value = state.shares_held * price
    total_cost = state.shares_held * average_cost
    gain_loss = total_value - total_cost

    return PositionView(
        symbol=state.symbol,
        shares=state.shares_held,
        average_cost=average_cost.quantize(PRICE_PLACES),
        current_price=price,
        total_value=total_value.quantize(CENTS),
        total_cost=total_cost.quantize(CENTS),
        gain_loss=gain_loss.quantize(CENTS),
        gain_loss_percent=_percent(gain_loss, total_cost),
        previous_price=state.previous_trade_price,
    )


def valuate(
    positions: Mapping[str, PositionState],
    latest_balance: Optional[BalanceRecord],
    previous_balance: Optional[BalanceRecord] = None,
) -> PortfolioSnapshot:
    """
    Combine positions with the two most recent balances into a snapshot.

    Day change compares latest equity with the previous day's equity (zero
    change when there is no previous record). Raises NoDataError when there
    is no balance at all; a zero snapshot is never synthesized.
    """
    if latest_balance is None:
        raise NoDataError("balance data", "account")

    total_value = latest_balance.account_equity
    previous_equity = (
        previous_balance.account_equity if previous_balance is not None else total_value
    )
    day_change = total_value - previous_equity

    views = [value_position(state) for state in positions.values()]
    # Display contract only: largest holdings first
    views.sort(key=lambda v: v.total_value, reverse=True)

    return PortfolioSnapshot(
        total_value=total_value.quantize(CENTS),
        day_change=day_change.quantize(CENTS),
        day_change_percent=_percent(day_change, previous_equity),
        total_cash=latest_balance.cash_balance.quantize(CENTS),
        total_invested=(total_value - latest_balance.cash_balance).quantize(CENTS),
        positions=views,
        as_of=now_eastern(),
    )
