"""Natural-language entry point: classify a question, then route it."""

import logging

from brokerage_assistant.core.exceptions import ValidationError
from brokerage_assistant.domain.models import ClassifiedIntent
from brokerage_assistant.domain.views import QueryResult
from brokerage_assistant.providers.intent_classifier import IntentClassifier
from brokerage_assistant.services.query_router import QueryRouter

logger = logging.getLogger(__name__)


class AssistantService:
    """Answers account questions through the intent classifier and query router."""

    def __init__(self, classifier: IntentClassifier, router: QueryRouter):
        self._classifier = classifier
        self._router = router

    def ask(self, text: str, account_id: str) -> QueryResult:
        """
        Classify text and route it for the account.

        A classifier failure is treated as an unknown intent, which the
        router answers with its default read.
        """
        if not (text or "").strip():
            raise ValidationError("Query text is required")

        try:
            raw = self._classifier.classify(text)
        except Exception as e:
            logger.error(f"Intent classification failed: {e}")
            raw = None

        classified = ClassifiedIntent.from_raw(raw)
        logger.info(f"Intent: {classified.intent.value} entities: {classified.entities}")
        return self._router.route(classified.intent, classified.entities, account_id)
