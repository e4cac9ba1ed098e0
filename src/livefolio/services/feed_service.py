"""Per-connection live feed: subscriptions, polling and trade routing."""

import asyncio
import contextlib
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from livefolio.core.exceptions import InsufficientPositionError, InvalidTradeRequestError
from livefolio.domain.models import FeedState, TradeAction
from livefolio.domain.views import (
    FeedError,
    FeedMessage,
    PositionUpdate,
    QuoteBatch,
)
from livefolio.services.ledger_service import PositionLedger, TradeRequest, value_position
from livefolio.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)

NO_SYMBOLS_MESSAGE = "No symbols provided for subscription."
INVALID_TRADE_MESSAGE = "Invalid buy/sell request."
INSUFFICIENT_POSITION_MESSAGE = "Not enough quantity to sell."
UNKNOWN_COMMAND_MESSAGE = "Unknown command."


def normalize_symbols(symbols: Any) -> list[str]:
    """Upper-case, strip and de-duplicate symbols, keeping their order."""
    if not isinstance(symbols, (list, tuple)):
        return []
    cleaned = (s.strip().upper() for s in symbols if isinstance(s, str))
    return list(dict.fromkeys(s for s in cleaned if s))


def parse_trade(message: dict[str, Any]) -> TradeRequest:
    """
    Coerce a raw trade command into a TradeRequest.

    Unusable values become None and are rejected by the ledger's validation.
    """
    symbol = message.get("symbol")
    action = message.get("action")
    try:
        trade_action = TradeAction(action.lower()) if isinstance(action, str) else None
    except ValueError:
        trade_action = None

    return TradeRequest(
        symbol=symbol if isinstance(symbol, str) else None,
        action=trade_action,
        quantity=_as_int(message.get("quantity")),
        price=_as_decimal(message.get("price")),
    )


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return result if result.is_finite() else None


class FeedSession:
    """
    Live feed state for one client connection.

    IDLE until the first valid subscription, POLLING while a periodic quote
    task runs, CLOSED once the connection is gone. Outbound messages are put
    on ``outbox``; nothing is queued after close().
    """

    def __init__(
        self,
        market_data: MarketDataService,
        ledger: PositionLedger,
        poll_interval_seconds: float = 5.0,
    ):
        self._market_data = market_data
        self._ledger = ledger
        self._poll_interval = poll_interval_seconds
        self._state = FeedState.IDLE
        self._symbols: list[str] = []
        self._poll_task: Optional[asyncio.Task] = None
        self.outbox: asyncio.Queue[FeedMessage] = asyncio.Queue()

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def symbols(self) -> list[str]:
        return list(self._symbols)

    async def handle(self, message: Any) -> None:
        """Dispatch one inbound command."""
        if self._state is FeedState.CLOSED:
            return

        command = message.get("type") if isinstance(message, dict) else None
        if command == "subscribe":
            await self.subscribe(message.get("symbols"))
        elif command == "trade":
            await self.trade(message)
        else:
            logger.debug("Unknown feed command: %r", command)
            self.push_error(UNKNOWN_COMMAND_MESSAGE)

    async def subscribe(self, symbols: Any) -> None:
        """
        Replace the subscription and (re)start polling.

        Any previous polling task is stopped first, so a connection never has
        more than one.
        """
        if self._state is FeedState.CLOSED:
            return

        normalized = normalize_symbols(symbols)
        if not normalized:
            self.push_error(NO_SYMBOLS_MESSAGE)
            return

        await self._stop_polling()
        self._symbols = normalized
        self._state = FeedState.POLLING
        self._poll_task = asyncio.create_task(self._poll_loop(normalized))
        logger.info("Polling %s every %ss", ", ".join(normalized), self._poll_interval)

    async def trade(self, message: dict[str, Any]) -> None:
        """Apply a buy/sell command and push the updated position."""
        if self._state is FeedState.CLOSED:
            return

        request = parse_trade(message)
        try:
            position = await self._ledger.record_trade(request)
        except InsufficientPositionError as exc:
            logger.info("Rejected sell: %s", exc.message)
            self.push_error(INSUFFICIENT_POSITION_MESSAGE)
            return
        except InvalidTradeRequestError as exc:
            logger.info("Rejected trade %r: %s", message, exc.message)
            self.push_error(INVALID_TRADE_MESSAGE)
            return

        self._push(PositionUpdate(record=value_position(position, request.price)))

    async def close(self) -> None:
        """Stop polling for good; later commands and results are discarded."""
        if self._state is FeedState.CLOSED:
            return
        self._state = FeedState.CLOSED
        await self._stop_polling()
        logger.info("Feed session closed")

    def push_error(self, message: str) -> None:
        self._push(FeedError(message=message))

    async def _poll_loop(self, symbols: list[str]) -> None:
        while True:
            try:
                await self._push_quotes(symbols)
            except Exception:
                logger.exception("Quote refresh for %s failed", symbols)
            await asyncio.sleep(self._poll_interval)

    async def _push_quotes(self, symbols: list[str]) -> QuoteBatch:
        quotes = await self._market_data.get_quotes(symbols)

        records = []
        for symbol in symbols:
            quote = quotes.get(symbol)
            if quote is None:
                continue
            records.append(self._ledger.snapshot(symbol, quote.last_price, quote))

        batch = QuoteBatch(records=records)
        self._push(batch)
        return batch

    async def _stop_polling(self) -> None:
        task, self._poll_task = self._poll_task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def _push(self, message: FeedMessage) -> None:
        if self._state is FeedState.CLOSED:
            return
        self.outbox.put_nowait(message)
