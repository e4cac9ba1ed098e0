"""Service layer - business logic orchestration."""

from livefolio.services.ledger_service import PositionLedger, TradeRequest, value_position
from livefolio.services.market_data_service import MarketDataService
from livefolio.services.feed_service import FeedSession

__all__ = [
    "PositionLedger",
    "TradeRequest",
    "value_position",
    "MarketDataService",
    "FeedSession",
]
