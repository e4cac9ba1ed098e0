"""Dependency injection for FastAPI."""

from fastapi import Depends, Request

from livefolio.app_context import AppContext
from livefolio.providers import NseClient
from livefolio.services import MarketDataService, PositionLedger


def get_app_context(request: Request) -> AppContext:
    """Provide the AppContext built by the application lifespan."""
    return request.app.state.context


def get_nse_client(context: AppContext = Depends(get_app_context)) -> NseClient:
    """Provide the shared NseClient instance."""
    return context.nse


def get_market_data_service(
    context: AppContext = Depends(get_app_context),
) -> MarketDataService:
    """Provide the shared MarketDataService instance."""
    return context.market_data


def get_position_ledger(context: AppContext = Depends(get_app_context)) -> PositionLedger:
    """Provide the process-wide PositionLedger."""
    return context.ledger
