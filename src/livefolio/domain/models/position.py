"""Position domain model."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class Position:
    """
    Simulated holding for a single symbol.

    Immutable: the ledger replaces a position wholesale on every trade, so a
    reader always sees either the state before or after a trade, never a mix.

    cost_basis is the amount paid for the quantity currently held. A sell
    re-bases it to remaining quantity x sell price; realized gains are not kept.
    """

    symbol: str
    quantity: int = 0
    cost_basis: Decimal = field(default_factory=lambda: Decimal("0"))

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError(f"Position quantity cannot be negative: {self.quantity}")
        if self.cost_basis < 0:
            raise ValueError(f"Position cost basis cannot be negative: {self.cost_basis}")
