"""Pydantic schemas for the natural-language query endpoint."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request schema for POST /query."""

    query: str = Field(..., min_length=1)
    account_id: Optional[str] = None


class QueryResponse(BaseModel):
    """Routed answer; degraded marks a fallback read."""

    intent: str
    source: str
    data: list[Any]
    entities: dict[str, Any]
    degraded: bool
    fallback_reason: Optional[str] = None
