"""Stub market data provider for offline/testing use."""

import random
from decimal import Decimal

from livefolio.core.timezone import now_market
from livefolio.domain.views import Quote


# Deterministic fake prices (last, previous close) for common NSE symbols
_STUB_PRICES: dict[str, tuple[Decimal, Decimal]] = {
    "RELIANCE": (Decimal("2945.60"), Decimal("2931.15")),
    "TCS": (Decimal("4120.35"), Decimal("4098.70")),
    "INFY": (Decimal("1876.20"), Decimal("1881.45")),
    "HDFCBANK": (Decimal("1642.80"), Decimal("1630.05")),
    "ICICIBANK": (Decimal("1218.55"), Decimal("1209.90")),
    "SBIN": (Decimal("812.40"), Decimal("815.10")),
    "ITC": (Decimal("468.25"), Decimal("465.00")),
    "WIPRO": (Decimal("542.10"), Decimal("538.75")),
}


class StubQuoteProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; generates random prices for unknown symbols.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._rng = random.Random(seed)
        self._generated: dict[str, tuple[Decimal, Decimal]] = {}

    async def get_quote(self, symbol: str) -> Quote:
        """Return a stub quote for the requested symbol."""
        upper_symbol = symbol.upper()
        last_price, prev_close = self._prices_for(upper_symbol)
        change = last_price - prev_close
        percent_change = (change / prev_close * 100).quantize(Decimal("0.01"))

        return Quote(
            symbol=upper_symbol,
            last_price=last_price,
            change=change,
            percent_change=percent_change,
            fetched_at=now_market(),
            prev_close=prev_close,
        )

    def _prices_for(self, symbol: str) -> tuple[Decimal, Decimal]:
        if symbol in _STUB_PRICES:
            return _STUB_PRICES[symbol]
        if symbol not in self._generated:
            # Same symbol keeps the same price for the provider's lifetime
            base_price = Decimal(str(100 + self._rng.random() * 2000))
            last_price = base_price.quantize(Decimal("0.05"))
            change_pct = Decimal(str((self._rng.random() - 0.5) * 0.04))
            prev_close = (last_price / (1 + change_pct)).quantize(Decimal("0.05"))
            self._generated[symbol] = (last_price, prev_close)
        return self._generated[symbol]
