"""Natural-language query endpoint."""

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder

from brokerage_assistant.api.deps import get_assistant_service, get_context
from brokerage_assistant.api.schemas import QueryRequest, QueryResponse
from brokerage_assistant.app_context import AppContext
from brokerage_assistant.services import AssistantService

router = APIRouter(prefix="/query", tags=["query"])


@router.post("", response_model=QueryResponse)
def ask(
    request: QueryRequest,
    context: AppContext = Depends(get_context),
    assistant: AssistantService = Depends(get_assistant_service),
) -> QueryResponse:
    """Classify a question and answer it from the matching data source."""
    result = assistant.ask(request.query, context.resolve_account(request.account_id))
    return QueryResponse(
        intent=result.intent,
        source=result.source,
        data=jsonable_encoder(result.data),
        entities=jsonable_encoder(result.entities),
        degraded=result.degraded,
        fallback_reason=result.fallback_reason,
    )
