"""Domain models package."""

from livefolio.domain.models.enums import TradeAction, FeedState
from livefolio.domain.models.position import Position
from livefolio.domain.models.credential import SessionCredential

__all__ = [
    "TradeAction",
    "FeedState",
    "Position",
    "SessionCredential",
]
