"""Symbol-oriented NSE queries built on the throttled fetcher."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from livefolio.core.exceptions import QuoteNotFoundError
from livefolio.core.timezone import now_market, parse_market_datetime
from livefolio.domain.views import Quote
from livefolio.providers.nse.fetcher import ThrottledFetcher

logger = logging.getLogger(__name__)


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


class NseClient:
    """
    Client for NSE equity, index and derivatives endpoints.

    Every query goes through the shared ThrottledFetcher; queries keep no state
    of their own. Responses with nothing usable in them raise QuoteNotFoundError.
    """

    def __init__(self, fetcher: ThrottledFetcher):
        self._fetcher = fetcher

    async def get_all_stock_symbols(self) -> list[str]:
        """Return every symbol listed in the pre-open market feed, sorted."""
        payload = await self._fetcher.fetch_json("/api/market-data-pre-open", {"key": "ALL"})
        rows = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(rows, list):
            raise QuoteNotFoundError("ALL")

        symbols = set()
        for row in rows:
            try:
                symbols.add(row["metadata"]["symbol"])
            except (KeyError, TypeError):
                continue
        return sorted(symbols)

    async def get_equity_details(self, symbol: str) -> dict[str, Any]:
        symbol = symbol.upper()
        return self._require_object(
            await self._fetcher.fetch_json("/api/quote-equity", {"symbol": symbol}),
            symbol,
        )

    async def get_equity_trade_info(self, symbol: str) -> dict[str, Any]:
        symbol = symbol.upper()
        return self._require_object(
            await self._fetcher.fetch_json(
                "/api/quote-equity", {"symbol": symbol, "section": "trade_info"}
            ),
            symbol,
        )

    async def get_equity_corporate_info(self, symbol: str) -> dict[str, Any]:
        symbol = symbol.upper()
        return self._require_object(
            await self._fetcher.fetch_json(
                "/api/top-corp-info", {"symbol": symbol, "market": "equities"}
            ),
            symbol,
        )

    async def get_equity_intraday_data(self, symbol: str) -> dict[str, Any]:
        """
        Fetch the intraday price series for an equity.

        The chart endpoint is keyed by an internal identifier, so the equity
        details are fetched first to look it up.
        """
        symbol = symbol.upper()
        details = await self.get_equity_details(symbol)
        info = details.get("info")
        identifier = info.get("identifier") if isinstance(info, dict) else None
        if not identifier:
            raise QuoteNotFoundError(symbol)

        return self._require_object(
            await self._fetcher.fetch_json("/api/chart-databyindex", {"index": identifier}),
            symbol,
        )

    async def get_equity_option_chain(self, symbol: str) -> dict[str, Any]:
        symbol = symbol.upper()
        return self._require_object(
            await self._fetcher.fetch_json("/api/option-chain-equities", {"symbol": symbol}),
            symbol,
        )

    async def get_index_intraday_data(self, index: str, pre_open: bool = False) -> dict[str, Any]:
        """Fetch an index's intraday series, or its pre-open snapshot."""
        if pre_open:
            payload = await self._fetcher.fetch_json("/api/market-data-pre-open", {"key": index})
        else:
            payload = await self._fetcher.fetch_json("/api/chart-databyindex", {"index": index})
        return self._require_object(payload, index)

    async def get_index_option_chain(self, index: str) -> dict[str, Any]:
        index = index.upper()
        return self._require_object(
            await self._fetcher.fetch_json("/api/option-chain-indices", {"symbol": index}),
            index,
        )

    async def get_quote(self, symbol: str) -> Quote:
        """Fetch equity details and normalize them into a Quote."""
        symbol = symbol.upper()
        details = await self.get_equity_details(symbol)
        return self.parse_quote(symbol, details)

    @staticmethod
    def parse_quote(symbol: str, details: dict[str, Any]) -> Quote:
        """
        Build a Quote from a quote-equity payload.

        Requires priceInfo.lastPrice; change and pChange default to zero.
        """
        price_info = details.get("priceInfo")
        if not isinstance(price_info, dict):
            raise QuoteNotFoundError(symbol)

        last_price = _to_decimal(price_info.get("lastPrice"))
        if last_price is None:
            raise QuoteNotFoundError(symbol)

        metadata = details.get("metadata")
        last_update = None
        if isinstance(metadata, dict) and isinstance(metadata.get("lastUpdateTime"), str):
            last_update = parse_market_datetime(metadata["lastUpdateTime"])

        return Quote(
            symbol=symbol,
            last_price=last_price,
            change=_to_decimal(price_info.get("change")) or Decimal("0"),
            percent_change=_to_decimal(price_info.get("pChange")) or Decimal("0"),
            fetched_at=now_market(),
            prev_close=_to_decimal(price_info.get("previousClose")),
            last_update=last_update,
        )

    @staticmethod
    def _require_object(payload: Any, symbol: str) -> dict[str, Any]:
        if not isinstance(payload, dict) or not payload:
            logger.info("No data returned for %s", symbol)
            raise QuoteNotFoundError(symbol)
        return payload
