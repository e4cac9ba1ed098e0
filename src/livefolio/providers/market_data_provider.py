"""Market data provider protocol and base types."""

from typing import Protocol

from livefolio.domain.views import Quote


class QuoteProvider(Protocol):
    """
    Protocol for quote sources.

    Implementations fetch a fresh quote per call. A symbol with no usable data
    raises QuoteNotFoundError; transport failures raise FetchError.
    """

    async def get_quote(self, symbol: str) -> Quote:
        """Fetch the latest quote for one symbol."""
        ...
