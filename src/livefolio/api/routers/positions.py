"""Simulated position endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query, status

from livefolio.api.deps import get_position_ledger
from livefolio.api.schemas import (
    PositionListResponse,
    PositionResponse,
    PositionSnapshotResponse,
    TradeRequestSchema,
)
from livefolio.services import PositionLedger, TradeRequest, value_position
from livefolio.services.ledger_service import MAX_TRADE_PRICE

router = APIRouter(prefix="/positions", tags=["positions"])


@router.get("/", response_model=PositionListResponse)
def list_positions(ledger: PositionLedger = Depends(get_position_ledger)) -> PositionListResponse:
    """List every traded position."""
    positions = ledger.list_positions()
    return PositionListResponse(
        positions=[PositionResponse.model_validate(p) for p in positions],
        count=len(positions),
    )


@router.get("/{symbol}", response_model=PositionSnapshotResponse)
def get_position_snapshot(
    symbol: str,
    last_price: Decimal = Query(
        ..., ge=0, le=MAX_TRADE_PRICE, description="Price to value the position at"
    ),
    ledger: PositionLedger = Depends(get_position_ledger),
) -> PositionSnapshotResponse:
    """Value a position at the given price."""
    return PositionSnapshotResponse.model_validate(ledger.snapshot(symbol, last_price))


@router.post("/trades", response_model=PositionSnapshotResponse, status_code=status.HTTP_201_CREATED)
async def record_trade(
    data: TradeRequestSchema,
    ledger: PositionLedger = Depends(get_position_ledger),
) -> PositionSnapshotResponse:
    """Record a simulated buy or sell; the result is valued at the trade price."""
    position = await ledger.record_trade(
        TradeRequest(
            symbol=data.symbol,
            action=data.action,
            quantity=data.quantity,
            price=data.price,
        )
    )
    return PositionSnapshotResponse.model_validate(value_position(position, data.price))
