"""Intent classifier protocol and an offline keyword classifier."""

import re
from typing import Any, Protocol

from brokerage_assistant.domain.models.enums import Intent


class IntentClassifier(Protocol):
    """
    Text-in, structured-out intent service (LLM-backed in production).

    Output is untrusted: {"intent": str, "entities": dict} at best.
    """

    def classify(self, text: str) -> Any:
        ...


_KEYWORDS: list[tuple[Intent, tuple[str, ...]]] = [
    (Intent.FEES, ("fee", "fees", "commission", "commissions", "interest")),
    (Intent.ACCOUNT_BALANCE, ("balance", "cash", "equity", "buying power", "p&l", "worth")),
    (Intent.MARKET_DATA, ("price", "quote", "chart", "trading at", "bars")),
    (Intent.TRADE_HISTORY, ("trade", "trades", "bought", "sold", "buy", "sell", "history")),
]

_SYMBOL_RE = re.compile(r"\$?\b([A-Z]{1,5})\b")
_STOPWORDS = {"I", "A", "MY", "ME", "THE", "DID", "HOW", "WHAT", "IS", "OF", "ON", "IN", "AT", "P"}


class KeywordIntentClassifier:
    """Deterministic stand-in for the LLM classifier (offline/testing)."""

    def classify(self, text: str) -> dict[str, Any]:
        lowered = (text or "").lower()
        intent = Intent.UNKNOWN
        for candidate, words in _KEYWORDS:
            if any(re.search(rf"\b{re.escape(w)}\b", lowered) for w in words):
                intent = candidate
                break

        entities: dict[str, Any] = {}
        symbols = [s for s in _SYMBOL_RE.findall(text or "") if s not in _STOPWORDS]
        if symbols:
            entities["symbol"] = symbols[0]
        if re.search(r"\b(bought|buys?)\b", lowered):
            entities["trade_type"] = "buy"
        elif re.search(r"\b(sold|sells?)\b", lowered):
            entities["trade_type"] = "sell"

        return {"intent": intent.value, "entities": entities}
