"""Market data providers module."""

from livefolio.providers.market_data_provider import QuoteProvider
from livefolio.providers.stub_provider import StubQuoteProvider
from livefolio.providers.nse import (
    CredentialManager,
    ThrottledFetcher,
    NseClient,
)

__all__ = [
    "QuoteProvider",
    "StubQuoteProvider",
    "CredentialManager",
    "ThrottledFetcher",
    "NseClient",
]
