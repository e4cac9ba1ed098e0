"""View models for service outputs."""

from livefolio.domain.views.portfolio import Quote, PositionSnapshot
from livefolio.domain.views.feed import (
    QuoteBatch,
    PositionUpdate,
    FeedError,
    FeedMessage,
)

__all__ = [
    "Quote",
    "PositionSnapshot",
    "QuoteBatch",
    "PositionUpdate",
    "FeedError",
    "FeedMessage",
]
