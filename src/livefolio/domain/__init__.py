"""Domain layer - pure business models with no external dependencies."""

from livefolio.domain.models import (
    Position,
    SessionCredential,
    TradeAction,
    FeedState,
)

__all__ = [
    "Position",
    "SessionCredential",
    "TradeAction",
    "FeedState",
]
