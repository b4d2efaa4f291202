"""Brokerage account assistant: ledger replay, portfolio valuation and cached market data."""

__version__ = "0.1.0"
