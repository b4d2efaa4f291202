"""
Unit tests for position reconstruction.

Tests cover:
- Average-cost accumulation over buys
- Sells at unchanged average cost
- Flat positions dropping out and re-entering fresh
- Oversell clamping
- Malformed record skipping
- Ordering by (date, time, sequence) with null times
- Determinism
- Non-negative state after every step and prefix consistency
"""

import logging
from datetime import date, time
from decimal import Decimal

import pytest

from brokerage_assistant.domain.views import PositionState
from brokerage_assistant.services.position_reconstructor import apply_trade, reconstruct

from tests.conftest import make_trade


# =============================================================================
# AVERAGE COST TESTS
# =============================================================================


class TestAverageCost:
    """Tests for running average-cost state."""

    def test_empty_ledger_has_no_positions(self):
        """
        GIVEN no trades
        WHEN I reconstruct
        THEN the result is empty
        """
        assert reconstruct([]) == {}

    def test_two_buys_average_cost(self):
        """
        GIVEN buy 10 @ 100 and buy 10 @ 120
        WHEN I reconstruct
        THEN 20 shares are held at average cost 110
        """
        positions = reconstruct([
            make_trade("buy", "AAPL", 10, 100, sequence=1),
            make_trade("buy", "AAPL", 10, 120, sequence=2),
        ])

        state = positions["AAPL"]
        assert state.shares_held == Decimal("20")
        assert state.total_cost_basis == Decimal("2200")
        assert state.average_cost == Decimal("110")

    def test_sell_keeps_average_cost(self):
        """
        GIVEN buy 10 @ 100, buy 10 @ 120, sell 15 @ 150
        WHEN I reconstruct
        THEN 5 shares remain with average cost 110 and cost basis 550
        """
        positions = reconstruct([
            make_trade("buy", "AAPL", 10, 100, sequence=1),
            make_trade("buy", "AAPL", 10, 120, sequence=2),
            make_trade("sell", "AAPL", 15, 150, sequence=3),
        ])

        state = positions["AAPL"]
        assert state.shares_held == Decimal("5")
        assert state.average_cost == Decimal("110")
        assert state.total_cost_basis == Decimal("550")
        assert state.last_trade_price == Decimal("150")
        assert state.previous_trade_price == Decimal("120")
        assert state.traded_volume == Decimal("35")

    def test_cost_basis_equals_shares_times_average(self):
        """
        GIVEN an uneven sequence of buys and sells
        WHEN I reconstruct
        THEN total_cost_basis == shares_held * average_cost for every symbol
        """
        positions = reconstruct([
            make_trade("buy", "MSFT", 3, "301.17", sequence=1),
            make_trade("buy", "MSFT", 7, "298.03", sequence=2),
            make_trade("sell", "MSFT", 4, "310", sequence=3),
            make_trade("buy", "MSFT", 1, "305.55", sequence=4),
        ])

        state = positions["MSFT"]
        assert state.shares_held == Decimal("7")
        assert abs(state.total_cost_basis - state.shares_held * state.average_cost) < Decimal("1e-20")
        assert state.total_cost_basis >= 0

    def test_symbols_are_independent(self):
        """
        GIVEN trades in two symbols
        WHEN I reconstruct
        THEN each symbol has its own state
        """
        positions = reconstruct([
            make_trade("buy", "AAPL", 10, 100, sequence=1),
            make_trade("buy", "MSFT", 2, 300, sequence=2),
            make_trade("sell", "AAPL", 5, 110, sequence=3),
        ])

        assert set(positions) == {"AAPL", "MSFT"}
        assert positions["AAPL"].shares_held == Decimal("5")
        assert positions["MSFT"].shares_held == Decimal("2")


# =============================================================================
# FLAT AND OVERSELL TESTS
# =============================================================================


class TestFlatAndOversell:
    """Tests for closing positions and selling more than held."""

    def test_full_sell_removes_symbol(self):
        """
        GIVEN buy 10 then sell 10
        WHEN I reconstruct
        THEN the symbol is absent
        """
        positions = reconstruct([
            make_trade("buy", "AAPL", 10, 100, sequence=1),
            make_trade("sell", "AAPL", 10, 120, sequence=2),
        ])

        assert "AAPL" not in positions

    def test_rebuy_after_flat_starts_fresh(self):
        """
        GIVEN a position closed out and then bought again
        WHEN I reconstruct
        THEN the new average cost ignores the earlier lots
        """
        positions = reconstruct([
            make_trade("buy", "AAPL", 10, 100, sequence=1),
            make_trade("sell", "AAPL", 10, 120, sequence=2),
            make_trade("buy", "AAPL", 4, 200, sequence=3),
        ])

        state = positions["AAPL"]
        assert state.shares_held == Decimal("4")
        assert state.average_cost == Decimal("200")
        assert state.previous_trade_price is None

    def test_oversell_clamps_to_zero(self, caplog):
        """
        GIVEN buy 5 then sell 8
        WHEN I reconstruct
        THEN the symbol is flat (absent) and a warning is logged
        """
        with caplog.at_level(logging.WARNING):
            positions = reconstruct([
                make_trade("buy", "TSLA", 5, 200, sequence=1),
                make_trade("sell", "TSLA", 8, 210, sequence=2),
            ])

        assert "TSLA" not in positions
        assert "Oversell of TSLA" in caplog.text

    def test_oversell_state_never_negative(self):
        """
        GIVEN a state holding 5 shares
        WHEN a sell of 8 is applied
        THEN shares and cost basis are both zero
        """
        state = PositionState(symbol="TSLA")
        apply_trade(state, make_trade("buy", "TSLA", 5, 200))
        apply_trade(state, make_trade("sell", "TSLA", 8, 210))

        assert state.shares_held == Decimal("0")
        assert state.total_cost_basis == Decimal("0")
        assert state.average_cost is None

    def test_sell_without_prior_buy_is_absent(self):
        """
        GIVEN only a sell for a symbol
        WHEN I reconstruct
        THEN no position is created
        """
        positions = reconstruct([make_trade("sell", "NVDA", 3, 450, sequence=1)])

        assert positions == {}


# =============================================================================
# MALFORMED RECORD TESTS
# =============================================================================


class TestMalformedRecords:
    """Tests for skipping invalid trades."""

    @pytest.mark.parametrize(
        "symbol, quantity, price",
        [
            ("", 10, 100),
            ("AAPL", 0, 100),
            ("AAPL", -5, 100),
            ("AAPL", 10, -1),
            ("AAPL", "NaN", 100),
            ("AAPL", 10, "Infinity"),
        ],
    )
    def test_malformed_trade_skipped(self, symbol, quantity, price, caplog):
        """
        GIVEN a valid buy and one malformed trade
        WHEN I reconstruct
        THEN only the valid trade is applied and the skip is logged
        """
        with caplog.at_level(logging.WARNING):
            positions = reconstruct([
                make_trade("buy", "AAPL", 10, 100, sequence=1),
                make_trade("buy", symbol, quantity, price, sequence=2, trade_id="BAD1"),
            ])

        assert positions["AAPL"].shares_held == Decimal("10")
        assert positions["AAPL"].average_cost == Decimal("100")
        assert "Skipping malformed trade BAD1" in caplog.text

    def test_zero_price_is_valid(self):
        """
        GIVEN a buy at price zero (e.g. a stock grant)
        WHEN I reconstruct
        THEN it is applied
        """
        positions = reconstruct([make_trade("buy", "AAPL", 10, 0, sequence=1)])

        assert positions["AAPL"].shares_held == Decimal("10")
        assert positions["AAPL"].average_cost == Decimal("0")


# =============================================================================
# ORDERING AND DETERMINISM TESTS
# =============================================================================


class TestOrdering:
    """Tests for execution order of replay."""

    def test_input_order_does_not_matter(self):
        """
        GIVEN trades supplied out of chronological order
        WHEN I reconstruct
        THEN they are replayed by date, time and sequence
        """
        buy = make_trade("buy", "AAPL", 10, 100, trade_date=date(2024, 6, 10), sequence=1)
        sell = make_trade("sell", "AAPL", 10, 120, trade_date=date(2024, 6, 11), sequence=2)
        rebuy = make_trade("buy", "AAPL", 2, 130, trade_date=date(2024, 6, 12), sequence=3)

        positions = reconstruct([rebuy, sell, buy])

        assert positions["AAPL"].shares_held == Decimal("2")
        assert positions["AAPL"].average_cost == Decimal("130")

    def test_null_time_sorts_before_timed_trades_on_same_day(self):
        """
        GIVEN a timed sell and an untimed buy on the same date
        WHEN I reconstruct
        THEN the untimed buy is applied first
        """
        day = date(2024, 6, 10)
        sell = make_trade("sell", "AAPL", 10, 120, trade_date=day, trade_time=time(9, 31), sequence=1)
        buy = make_trade("buy", "AAPL", 10, 100, trade_date=day, trade_time=None, sequence=2)

        positions = reconstruct([sell, buy])

        assert "AAPL" not in positions

    def test_sequence_breaks_ties(self):
        """
        GIVEN two trades with identical date and time
        WHEN I reconstruct
        THEN insertion sequence decides the last trade price
        """
        day, at = date(2024, 6, 10), time(10, 0)
        first = make_trade("buy", "AAPL", 1, 100, trade_date=day, trade_time=at, sequence=7)
        second = make_trade("buy", "AAPL", 1, 101, trade_date=day, trade_time=at, sequence=8)

        positions = reconstruct([second, first])

        assert positions["AAPL"].last_trade_price == Decimal("101")
        assert positions["AAPL"].previous_trade_price == Decimal("100")

    def test_reconstruction_is_deterministic(self):
        """
        GIVEN the same ledger
        WHEN I reconstruct twice
        THEN the results are equal
        """
        trades = [
            make_trade("buy", "AAPL", 10, 100, sequence=1),
            make_trade("buy", "MSFT", 3, "301.17", sequence=2),
            make_trade("sell", "AAPL", 4, 130, sequence=3),
        ]

        assert reconstruct(trades) == reconstruct(list(reversed(trades)))


# =============================================================================
# REPLAY INVARIANT TESTS
# =============================================================================


LEDGERS = {
    "buy_oversell_rebuy": [
        ("buy", "AAPL", 10, 100),
        ("buy", "AAPL", 5, "101.37"),
        ("sell", "AAPL", 22, 120),
        ("buy", "AAPL", 3, 90),
        ("sell", "AAPL", 1, 95),
    ],
    "interleaved_symbols": [
        ("buy", "MSFT", 3, "301.17"),
        ("sell", "TSLA", 2, 250),
        ("buy", "TSLA", 7, "248.75"),
        ("sell", "MSFT", 3, 310),
        ("buy", "MSFT", "0.5", "305.55"),
        ("sell", "TSLA", "6.999", 260),
        ("sell", "TSLA", 1, 261),
    ],
    "fractional_repeated_oversell": [
        ("buy", "NVDA", "1.3333", "450.01"),
        ("sell", "NVDA", "0.3333", 455),
        ("sell", "NVDA", 2, 460),
        ("sell", "NVDA", 1, 461),
        ("buy", "NVDA", "2.75", "449.99"),
        ("buy", "NVDA", "0.25", 452),
        ("sell", "NVDA", "1.5", 470),
    ],
}


def _ledger(rows: list[tuple]) -> list:
    return [
        make_trade(side, symbol, quantity, price, trade_date=date(2024, 6, 1 + i), sequence=i + 1)
        for i, (side, symbol, quantity, price) in enumerate(rows)
    ]


class TestReplayInvariants:
    """Tests for per-step state over mixed buy, oversell and rebuy ledgers."""

    @pytest.mark.parametrize("name", sorted(LEDGERS))
    def test_every_prefix_matches_stepwise_state(self, name):
        """
        GIVEN a mixed ledger applied one trade at a time
        WHEN I check the state after each step
        THEN shares and cost basis are never negative and reconstructing
        that prefix of the ledger gives the same holdings
        """
        ledger = _ledger(LEDGERS[name])
        running: dict[str, PositionState] = {}

        for k, trade in enumerate(ledger, start=1):
            state = running.setdefault(trade.symbol, PositionState(symbol=trade.symbol))
            apply_trade(state, trade)

            assert state.shares_held >= 0
            assert state.total_cost_basis >= 0
            if state.shares_held == 0:
                assert state.total_cost_basis == 0
                del running[trade.symbol]

            assert reconstruct(ledger[:k]) == running
