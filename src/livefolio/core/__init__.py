"""Core utilities and shared functionality."""

from livefolio.core.timezone import (
    now_market,
    to_market,
    parse_market_datetime,
    MARKET_TZ,
)
from livefolio.core.exceptions import (
    AppError,
    ValidationError,
    InvalidTradeRequestError,
    NotFoundError,
    QuoteNotFoundError,
    InsufficientPositionError,
    UpstreamUnavailableError,
    FetchError,
)

__all__ = [
    "now_market",
    "to_market",
    "parse_market_datetime",
    "MARKET_TZ",
    "AppError",
    "ValidationError",
    "InvalidTradeRequestError",
    "NotFoundError",
    "QuoteNotFoundError",
    "InsufficientPositionError",
    "UpstreamUnavailableError",
    "FetchError",
]
