"""Validated form of intent-classifier output."""

import logging
from typing import Any

from pydantic import BaseModel, Field, field_validator

from brokerage_assistant.domain.models.enums import Intent

logger = logging.getLogger(__name__)

# Names the upstream classifier has been seen to emit for our intents
_INTENT_ALIASES = {
    "fees_commissions": Intent.FEES,
    "fee": Intent.FEES,
    "commissions": Intent.FEES,
    "balance": Intent.ACCOUNT_BALANCE,
    "trades": Intent.TRADE_HISTORY,
    "quote": Intent.MARKET_DATA,
}


class ClassifiedIntent(BaseModel):
    """Intent plus entity bag, normalized from untrusted classifier output."""

    intent: Intent = Intent.UNKNOWN
    entities: dict[str, Any] = Field(default_factory=dict)

    @field_validator("intent", mode="before")
    @classmethod
    def _normalize_intent(cls, value: Any) -> Intent:
        if isinstance(value, Intent):
            return value
        text = str(value or "").strip().lower()
        if text in _INTENT_ALIASES:
            return _INTENT_ALIASES[text]
        try:
            return Intent(text)
        except ValueError:
            return Intent.UNKNOWN

    @field_validator("entities", mode="before")
    @classmethod
    def _normalize_entities(cls, value: Any) -> dict[str, Any]:
        if not isinstance(value, dict):
            return {}
        return {str(k): v for k, v in value.items() if v not in (None, "")}

    @classmethod
    def from_raw(cls, raw: Any) -> "ClassifiedIntent":
        """Build from whatever the classifier returned; never raises."""
        if not isinstance(raw, dict):
            logger.warning(f"Classifier returned non-object payload: {type(raw).__name__}")
            return cls()
        return cls(intent=raw.get("intent"), entities=raw.get("entities"))
