"""Enumerations for domain models."""

from enum import Enum


class TradeAction(str, Enum):
    """Sides of a simulated trade."""

    BUY = "buy"
    SELL = "sell"


class FeedState(str, Enum):
    """Lifecycle of a live feed connection."""

    IDLE = "IDLE"  # connected, nothing subscribed
    POLLING = "POLLING"
    CLOSED = "CLOSED"
