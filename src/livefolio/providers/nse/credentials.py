"""Session cookie acquisition and rotation for the NSE site."""

import asyncio
import dataclasses
import logging
import time
from types import MappingProxyType
from typing import Callable, Optional

import httpx

from livefolio.core.exceptions import UpstreamUnavailableError
from livefolio.domain.models import SessionCredential
from livefolio.providers.nse.headers import (
    BASE_HEADERS,
    extract_session_cookies,
    random_user_agent,
)

logger = logging.getLogger(__name__)


class CredentialManager:
    """
    Acquires and caches the cookie set the upstream requires on every request.

    The site rotates sessions by request count and by time, so the credential
    is renewed proactively: once it has been handed out more than max_uses
    times or is max_age_seconds old, the next caller triggers a fresh bootstrap
    request to the site root. Concurrent callers wait for that single bootstrap.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        max_age_seconds: float = 60.0,
        max_uses: int = 10,
        clock: Callable[[], float] = time.monotonic,
        user_agent_factory: Callable[[], str] = random_user_agent,
    ):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._max_age = max_age_seconds
        self._max_uses = max_uses
        self._clock = clock
        self._user_agent_factory = user_agent_factory
        self._credential: Optional[SessionCredential] = None
        self._lock = asyncio.Lock()

    async def current_credential(self) -> SessionCredential:
        """
        Return a usable credential, bootstrapping a new one if needed.

        Every call counts as one use of the returned credential.
        """
        async with self._lock:
            credential = self._credential
            if credential is None or credential.is_stale(
                self._clock(), self._max_age, self._max_uses
            ):
                credential = await self._acquire()

            credential = dataclasses.replace(credential, use_count=credential.use_count + 1)
            self._credential = credential
            return credential

    async def request_headers(self) -> dict[str, str]:
        """Headers for one upstream request, including cookies and user agent."""
        credential = await self.current_credential()
        return {
            **BASE_HEADERS,
            "User-Agent": credential.user_agent,
            "Cookie": credential.cookie_header,
        }

    def invalidate(self) -> None:
        """Forget the cached credential so the next call bootstraps again."""
        self._credential = None

    async def _acquire(self) -> SessionCredential:
        user_agent = self._user_agent_factory()
        try:
            response = await self._client.get(
                f"{self._base_url}/",
                headers={**BASE_HEADERS, "User-Agent": user_agent},
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Session bootstrap against %s failed: %s", self._base_url, exc)
            raise UpstreamUnavailableError(f"Session bootstrap failed: {exc}") from exc

        tokens = extract_session_cookies(response.headers.get_list("set-cookie"))
        logger.debug("Acquired session credential with cookies %s", sorted(tokens))
        return SessionCredential(
            token_set=MappingProxyType(tokens),
            user_agent=user_agent,
            acquired_at=self._clock(),
            use_count=0,
        )
