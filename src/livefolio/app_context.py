"""Application context wiring the fetch client, ledger and feed services.

One instance is built per running application (see main.lifespan) and
handed to request handlers through app.state; nothing here is a
module-level singleton.
"""

import http.cookiejar
import logging
from typing import Optional

import httpx

from livefolio.config.settings import Settings
from livefolio.providers import (
    CredentialManager,
    NseClient,
    QuoteProvider,
    StubQuoteProvider,
    ThrottledFetcher,
)
from livefolio.services import FeedSession, MarketDataService, PositionLedger

logger = logging.getLogger(__name__)


def _stateless_cookie_jar() -> http.cookiejar.CookieJar:
    """Cookie jar that never stores anything; session cookies are sent explicitly."""
    policy = http.cookiejar.DefaultCookiePolicy(allowed_domains=[])
    return http.cookiejar.CookieJar(policy=policy)


class AppContext:
    """
    Application context providing access to all shared services.

    The HTTP client, credential cache, fetch slots and ledger are process-wide
    and shared by every client connection.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
        provider: Optional[QuoteProvider] = None,
    ):
        """
        Build the service graph.

        Args:
            settings: Application settings.
            http_client: Optional client (tests pass one with a mock transport).
            provider: Optional quote provider overriding settings.market_data_provider.
        """
        self.settings = settings
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=settings.upstream_timeout_seconds,
            cookies=_stateless_cookie_jar(),
            follow_redirects=True,
        )

        self.credentials = CredentialManager(
            client=self.http_client,
            base_url=settings.upstream_base_url,
            max_age_seconds=settings.credential_max_age_seconds,
            max_uses=settings.credential_max_uses,
        )
        self.fetcher = ThrottledFetcher(
            client=self.http_client,
            credentials=self.credentials,
            base_url=settings.upstream_base_url,
            max_connections=settings.max_connections,
            max_attempts=settings.max_fetch_attempts,
            retry_delay_seconds=settings.fetch_retry_delay_seconds,
        )
        self.nse = NseClient(self.fetcher)

        if provider is None:
            if settings.market_data_provider == "stub":
                provider = StubQuoteProvider()
            else:
                provider = self.nse
        self.market_data = MarketDataService(provider=provider)
        self.ledger = PositionLedger()

        logger.info(
            "Using %s quote provider against %s",
            type(provider).__name__,
            settings.upstream_base_url,
        )

    def open_feed_session(self) -> FeedSession:
        """Create the live feed state for a new client connection."""
        return FeedSession(
            market_data=self.market_data,
            ledger=self.ledger,
            poll_interval_seconds=self.settings.poll_interval_seconds,
        )

    async def close(self) -> None:
        """Clean up resources."""
        if self._owns_client:
            await self.http_client.aclose()
