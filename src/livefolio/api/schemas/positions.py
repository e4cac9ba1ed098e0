"""Pydantic schemas for position and trade endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from livefolio.domain.models import TradeAction


class TradeRequestSchema(BaseModel):
    """Request schema for a simulated trade."""

    symbol: str = Field(..., min_length=1, max_length=20, description="Stock symbol")
    action: TradeAction = Field(..., description="buy or sell")
    quantity: int = Field(..., gt=0, description="Number of shares")
    price: Decimal = Field(..., ge=0, allow_inf_nan=False, description="Price per share")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.strip().upper()


class PositionResponse(BaseModel):
    """Response schema for a single ledger position."""

    model_config = {"from_attributes": True}

    symbol: str
    quantity: int
    cost_basis: Decimal


class PositionListResponse(BaseModel):
    """Response schema for listing positions."""

    positions: list[PositionResponse]
    count: int


class PositionSnapshotResponse(BaseModel):
    """Response schema for a position valued at a market price."""

    model_config = {"from_attributes": True}

    symbol: str
    last_price: Decimal
    investment_value: Decimal
    quantity: int
    profit_loss: Decimal
    profit_loss_percent: Decimal
    change: Optional[Decimal] = None
    percent_change: Optional[Decimal] = None
