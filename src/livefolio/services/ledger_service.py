"""In-memory position ledger for simulated trades."""

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from livefolio.core.exceptions import InsufficientPositionError, InvalidTradeRequestError
from livefolio.domain.models import Position, TradeAction
from livefolio.domain.views import PositionSnapshot, Quote

logger = logging.getLogger(__name__)

# Upper bounds keep cost basis arithmetic inside Decimal range
MAX_TRADE_QUANTITY = 10**12
MAX_TRADE_PRICE = Decimal("1e12")


@dataclass
class TradeRequest:
    """Input data for a simulated buy or sell."""

    symbol: Optional[str] = None
    action: Optional[TradeAction] = None
    quantity: Optional[int] = None
    price: Optional[Decimal] = None


def value_position(
    position: Position,
    last_price: Decimal,
    quote: Optional[Quote] = None,
) -> PositionSnapshot:
    """Value a position at last_price; P/L percent is 0 when nothing was paid."""
    profit_loss = position.quantity * last_price - position.cost_basis
    if position.cost_basis > 0:
        profit_loss_percent = profit_loss / position.cost_basis * 100
    else:
        profit_loss_percent = Decimal("0")

    return PositionSnapshot(
        symbol=position.symbol,
        last_price=last_price,
        investment_value=position.cost_basis,
        quantity=position.quantity,
        profit_loss=profit_loss,
        profit_loss_percent=profit_loss_percent,
        change=quote.change if quote else None,
        percent_change=quote.percent_change if quote else None,
    )


class PositionLedger:
    """
    Authoritative record of simulated holdings per symbol.

    Trades on one symbol are serialized by a per-symbol lock; trades on
    different symbols do not wait on each other. Positions are immutable
    values swapped in a single assignment, so snapshot() can run alongside
    trades without locking.
    """

    def __init__(self):
        self._positions: dict[str, Position] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def get_position(self, symbol: str) -> Position:
        """Return the current position, or a flat one if nothing was traded."""
        symbol = symbol.strip().upper()
        return self._positions.get(symbol) or Position(symbol=symbol)

    def list_positions(self) -> list[Position]:
        """List every position touched by a trade, sorted by symbol."""
        return [self._positions[s] for s in sorted(self._positions)]

    async def record_trade(self, request: TradeRequest) -> Position:
        """
        Validate a trade request and apply it.

        Raises InvalidTradeRequestError before anything is changed.
        """
        self._validate_trade(request)
        if request.action == TradeAction.BUY:
            return await self.record_buy(request.symbol, request.quantity, request.price)
        return await self.record_sell(request.symbol, request.quantity, request.price)

    async def record_buy(self, symbol: str, quantity: int, price: Decimal) -> Position:
        """Add quantity at price to the position; cost basis grows by quantity x price."""
        self._validate_amounts(quantity, price)
        symbol = symbol.strip().upper()

        async with self._lock_for(symbol):
            current = self.get_position(symbol)
            updated = Position(
                symbol=symbol,
                quantity=current.quantity + quantity,
                cost_basis=current.cost_basis + quantity * price,
            )
            self._positions[symbol] = updated

        logger.info("BUY %s x%d @ %s -> qty=%d", symbol, quantity, price, updated.quantity)
        return updated

    async def record_sell(self, symbol: str, quantity: int, price: Decimal) -> Position:
        """
        Remove quantity from the position.

        The remaining holding is re-based at the sell price rather than reduced
        proportionally. Raises InsufficientPositionError if too little is held.
        """
        self._validate_amounts(quantity, price)
        symbol = symbol.strip().upper()

        async with self._lock_for(symbol):
            current = self.get_position(symbol)
            if current.quantity < quantity:
                raise InsufficientPositionError(symbol, quantity, current.quantity)

            remaining = current.quantity - quantity
            updated = Position(
                symbol=symbol,
                quantity=remaining,
                cost_basis=remaining * price,
            )
            self._positions[symbol] = updated

        logger.info("SELL %s x%d @ %s -> qty=%d", symbol, quantity, price, updated.quantity)
        return updated

    def snapshot(
        self,
        symbol: str,
        last_price: Decimal,
        quote: Optional[Quote] = None,
    ) -> PositionSnapshot:
        """Value the current position at last_price."""
        return value_position(self.get_position(symbol), last_price, quote)

    def _lock_for(self, symbol: str) -> asyncio.Lock:
        lock = self._locks.get(symbol)
        if lock is None:
            lock = self._locks[symbol] = asyncio.Lock()
        return lock

    @staticmethod
    def _validate_trade(request: TradeRequest) -> None:
        if not request.symbol or not request.symbol.strip():
            raise InvalidTradeRequestError("Trade requires a symbol")
        if request.action not in (TradeAction.BUY, TradeAction.SELL):
            raise InvalidTradeRequestError("Trade requires action 'buy' or 'sell'")
        if request.quantity is None:
            raise InvalidTradeRequestError("Trade requires a quantity")
        if request.price is None:
            raise InvalidTradeRequestError("Trade requires a price")
        PositionLedger._validate_amounts(request.quantity, request.price)

    @staticmethod
    def _validate_amounts(quantity: int, price: Decimal) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidTradeRequestError("Trade requires an integer quantity > 0")
        if quantity > MAX_TRADE_QUANTITY:
            raise InvalidTradeRequestError(f"Trade quantity exceeds {MAX_TRADE_QUANTITY}")
        if not isinstance(price, Decimal) or not price.is_finite() or price < 0:
            raise InvalidTradeRequestError("Trade requires price >= 0")
        if price > MAX_TRADE_PRICE:
            raise InvalidTradeRequestError(f"Trade price exceeds {MAX_TRADE_PRICE}")
