"""View models for quotes and position outputs."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Quote:
    """Market quote data for a symbol."""

    symbol: str
    last_price: Decimal
    change: Decimal
    percent_change: Decimal
    fetched_at: datetime
    prev_close: Optional[Decimal] = None
    last_update: Optional[datetime] = None


@dataclass(frozen=True)
class PositionSnapshot:
    """Position valued at a given market price."""

    symbol: str
    last_price: Decimal
    investment_value: Decimal
    quantity: int
    profit_loss: Decimal
    profit_loss_percent: Decimal
    change: Optional[Decimal] = None
    percent_change: Optional[Decimal] = None
