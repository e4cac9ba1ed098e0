"""Wire schemas for messages pushed over the live feed WebSocket."""

from typing import Literal, Union

from pydantic import BaseModel

from livefolio.api.schemas.positions import PositionSnapshotResponse
from livefolio.domain.views import FeedError, FeedMessage, PositionUpdate, QuoteBatch


class QuoteBatchMessage(BaseModel):
    type: Literal["quote_batch"] = "quote_batch"
    records: list[PositionSnapshotResponse]


class PositionUpdateMessage(BaseModel):
    type: Literal["position_update"] = "position_update"
    record: PositionSnapshotResponse


class ErrorMessage(BaseModel):
    type: Literal["error"] = "error"
    message: str


OutboundMessage = Union[QuoteBatchMessage, PositionUpdateMessage, ErrorMessage]


def to_wire(message: FeedMessage) -> OutboundMessage:
    """Convert a feed message into its JSON schema."""
    if isinstance(message, QuoteBatch):
        return QuoteBatchMessage(
            records=[PositionSnapshotResponse.model_validate(r) for r in message.records]
        )
    if isinstance(message, PositionUpdate):
        return PositionUpdateMessage(
            record=PositionSnapshotResponse.model_validate(message.record)
        )
    if isinstance(message, FeedError):
        return ErrorMessage(message=message.message)
    raise TypeError(f"Unsupported feed message: {type(message).__name__}")
