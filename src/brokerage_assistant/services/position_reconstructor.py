"""Position reconstruction: replay a trade ledger into average-cost holdings."""

import logging
from decimal import Decimal
from typing import Iterable

from brokerage_assistant.domain.models import TradeRecord, TradeSide
from brokerage_assistant.domain.views import PositionState

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _malformed_reason(trade: TradeRecord) -> str:
    if not trade.symbol:
        return "missing symbol"
    if not isinstance(trade.quantity, Decimal) or not trade.quantity.is_finite():
        return f"non-finite quantity {trade.quantity!r}"
    if trade.quantity <= ZERO:
        return f"non-positive quantity {trade.quantity}"
    if not isinstance(trade.price, Decimal) or not trade.price.is_finite():
        return f"non-finite price {trade.price!r}"
    if trade.price < ZERO:
        return f"negative price {trade.price}"
    return ""


def apply_trade(state: PositionState, trade: TradeRecord) -> None:
    """
    Fold one valid trade into a symbol's running state.

    A sell larger than the holding reduces cost basis only by the shares
    actually held and floors shares_held at zero.
    """
    if state.last_trade_price is not None:
        state.previous_trade_price = state.last_trade_price
    state.last_trade_price = trade.price
    state.traded_volume += trade.quantity

    if trade.side == TradeSide.BUY:
        state.shares_held += trade.quantity
        state.total_cost_basis += trade.quantity * trade.price
        return

    average_cost = state.average_cost or ZERO
    reduction = min(trade.quantity, state.shares_held)
    if trade.quantity > state.shares_held:
        logger.warning(
            f"Oversell of {trade.symbol} in trade {trade.trade_id}: "
            f"sold {trade.quantity}, held {state.shares_held}"
        )
    state.total_cost_basis -= reduction * average_cost
    state.shares_held = max(state.shares_held - trade.quantity, ZERO)
    # Division residue must not leave basis on a flat or negative position
    if state.shares_held == ZERO or state.total_cost_basis < ZERO:
        state.total_cost_basis = ZERO


def reconstruct(trades: Iterable[TradeRecord]) -> dict[str, PositionState]:
    """
    Replay trades in ascending execution order into per-symbol holdings.

    Malformed records are logged and skipped. Symbols that end flat are
    absent from the result; a later buy starts a fresh position.
    """
    ordered = sorted(trades, key=lambda t: t.sort_key)
    positions: dict[str, PositionState] = {}

    for trade in ordered:
        reason = _malformed_reason(trade)
        if reason:
            logger.warning(f"Skipping malformed trade {trade.trade_id}: {reason}")
            continue

        state = positions.get(trade.symbol)
        if state is None:
            state = PositionState(symbol=trade.symbol)
            positions[trade.symbol] = state

        apply_trade(state, trade)

        if state.shares_held == ZERO:
            del positions[trade.symbol]

    return positions
