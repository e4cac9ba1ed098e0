"""Market data service for batched quote lookups."""

import asyncio
import logging

from livefolio.core.exceptions import AppError
from livefolio.domain.views import Quote
from livefolio.providers.market_data_provider import QuoteProvider

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Service for fetching quotes for a set of symbols.

    Wraps a provider with graceful degradation: a symbol that cannot be quoted
    is logged and left out, the rest of the batch is still returned.
    """

    def __init__(self, provider: QuoteProvider):
        self._provider = provider

    async def get_quote(self, symbol: str) -> Quote:
        """Fetch one quote; errors propagate to the caller."""
        return await self._provider.get_quote(symbol.upper())

    async def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """
        Fetch quotes for symbols concurrently.

        Returns dict mapping symbol -> Quote. Symbols that failed are omitted.
        Completion order between symbols is not significant.
        """
        if not symbols:
            return {}

        # Normalize symbols, keeping first-seen order
        symbols = list(dict.fromkeys(s.upper() for s in symbols))

        results = await asyncio.gather(
            *(self._provider.get_quote(s) for s in symbols),
            return_exceptions=True,
        )

        quotes: dict[str, Quote] = {}
        for symbol, result in zip(symbols, results):
            if isinstance(result, AppError):
                logger.warning("Skipping %s: %s", symbol, result.message)
            elif isinstance(result, BaseException):
                logger.error("Unexpected error quoting %s: %r", symbol, result)
            else:
                quotes[symbol] = result
        return quotes
