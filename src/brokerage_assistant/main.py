"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from brokerage_assistant.api.routers import (
    balances_router,
    market_router,
    portfolio_router,
    query_router,
    trades_router,
)
from brokerage_assistant.app_context import AppContext
from brokerage_assistant.config.logging_config import setup_logging
from brokerage_assistant.config.settings import get_settings
from brokerage_assistant.core.exceptions import AppError
from brokerage_assistant.repositories.sqlalchemy.database import init_db

# HTTP status per AppError code; anything unlisted is a client error
ERROR_STATUS = {
    "VALIDATION_ERROR": 400,
    "MALFORMED_RECORD": 422,
    "CLASSIFICATION_AMBIGUOUS": 422,
    "NO_DATA": 404,
    "SOURCE_UNAVAILABLE": 503,
    "EXTERNAL_FETCH_FAILURE": 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    owns_context = getattr(app.state, "context", None) is None
    if owns_context:
        init_db()
        app.state.context = AppContext()
    yield
    # Shutdown
    if owns_context:
        app.state.context.close()
        app.state.context = None


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Read-only brokerage account assistant: portfolio, trades, balances and market data",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(portfolio_router)
app.include_router(trades_router)
app.include_router(balances_router)
app.include_router(market_router)
app.include_router(query_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.code, 400),
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
