"""Timezone utilities for exchange (Asia/Kolkata) market time."""

from datetime import datetime
from typing import Optional

import pytz
from dateutil import parser as date_parser

MARKET_TZ = pytz.timezone("Asia/Kolkata")


def now_market() -> datetime:
    """Return current time in the exchange timezone."""
    return datetime.now(MARKET_TZ)


def to_market(dt: datetime) -> datetime:
    """Convert a datetime to the exchange timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already exchange-local
        return MARKET_TZ.localize(dt)
    return dt.astimezone(MARKET_TZ)


def parse_market_datetime(value: str) -> Optional[datetime]:
    """
    Parse an upstream timestamp such as "17-Oct-2025 15:30:00".

    Returns None when the value cannot be parsed.
    """
    try:
        dt = date_parser.parse(value)
    except (ValueError, OverflowError):
        return None
    return to_market(dt)
