"""Pydantic schemas for API request/response."""

from livefolio.api.schemas.market import QuoteResponse, SymbolListResponse
from livefolio.api.schemas.positions import (
    TradeRequestSchema,
    PositionResponse,
    PositionListResponse,
    PositionSnapshotResponse,
)
from livefolio.api.schemas.feed import (
    QuoteBatchMessage,
    PositionUpdateMessage,
    ErrorMessage,
    OutboundMessage,
    to_wire,
)

__all__ = [
    "QuoteResponse",
    "SymbolListResponse",
    "TradeRequestSchema",
    "PositionResponse",
    "PositionListResponse",
    "PositionSnapshotResponse",
    "QuoteBatchMessage",
    "PositionUpdateMessage",
    "ErrorMessage",
    "OutboundMessage",
    "to_wire",
]
