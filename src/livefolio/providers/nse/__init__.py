"""NSE India session-aware fetch client."""

from livefolio.providers.nse.credentials import CredentialManager
from livefolio.providers.nse.fetcher import ThrottledFetcher
from livefolio.providers.nse.client import NseClient

__all__ = [
    "CredentialManager",
    "ThrottledFetcher",
    "NseClient",
]
