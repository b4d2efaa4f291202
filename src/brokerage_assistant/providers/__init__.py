"""External data providers: market data and intent classification."""

from brokerage_assistant.providers.market_data_provider import MarketDataProvider
from brokerage_assistant.providers.stub_provider import StubMarketDataProvider
from brokerage_assistant.providers.alpaca_provider import AlpacaMarketDataProvider
from brokerage_assistant.providers.intent_classifier import (
    IntentClassifier,
    KeywordIntentClassifier,
)

__all__ = [
    "MarketDataProvider",
    "StubMarketDataProvider",
    "AlpacaMarketDataProvider",
    "IntentClassifier",
    "KeywordIntentClassifier",
]
