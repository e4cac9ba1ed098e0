"""Pydantic schemas for market data endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class QuoteResponse(BaseModel):
    """Response schema for a normalized equity quote."""

    model_config = {"from_attributes": True}

    symbol: str
    last_price: Decimal
    change: Decimal
    percent_change: Decimal
    fetched_at: datetime
    prev_close: Optional[Decimal] = None
    last_update: Optional[datetime] = None


class SymbolListResponse(BaseModel):
    """Response schema for the listed symbol universe."""

    symbols: list[str]
    count: int
