"""Messages pushed to live feed clients."""

from dataclasses import dataclass, field
from typing import Union

from livefolio.domain.views.portfolio import PositionSnapshot


@dataclass(frozen=True)
class QuoteBatch:
    """Periodic valuation of every subscribed symbol that could be quoted."""

    records: list[PositionSnapshot] = field(default_factory=list)


@dataclass(frozen=True)
class PositionUpdate:
    """Valuation of a single symbol right after a trade."""

    record: PositionSnapshot


@dataclass(frozen=True)
class FeedError:
    """User-facing error message."""

    message: str


FeedMessage = Union[QuoteBatch, PositionUpdate, FeedError]
