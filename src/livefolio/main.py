"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from livefolio.app_context import AppContext
from livefolio.config.settings import get_settings
from livefolio.config.logging_config import setup_logging
from livefolio.api.routers import market_router, positions_router, feed_router
from livefolio.core.exceptions import (
    AppError,
    FetchError,
    NotFoundError,
    UpstreamUnavailableError,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    context = AppContext(settings=get_settings())
    app.state.context = context
    yield
    # Shutdown
    await context.close()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Live NSE quotes with simulated trading and real-time P/L",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(market_router)
app.include_router(positions_router)
app.include_router(feed_router)


def _status_for(exc: AppError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, (FetchError, UpstreamUnavailableError)):
        return 502
    return 400


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=_status_for(exc),
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
        "feed": "/ws/feed",
    }
