"""API routers package."""

from livefolio.api.routers.market import router as market_router
from livefolio.api.routers.positions import router as positions_router
from livefolio.api.routers.feed import router as feed_router

__all__ = [
    "market_router",
    "positions_router",
    "feed_router",
]
