"""Concurrency-bounded, retrying JSON fetcher for the NSE REST API."""

import asyncio
import logging
from typing import Any, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryError,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from livefolio.core.exceptions import FetchError, UpstreamUnavailableError
from livefolio.providers.nse.credentials import CredentialManager

logger = logging.getLogger(__name__)

# json.JSONDecodeError is a ValueError
RETRYABLE_ERRORS = (httpx.HTTPError, UpstreamUnavailableError, ValueError)


class ThrottledFetcher:
    """
    Issues GET requests against the upstream with a global in-flight ceiling.

    Each attempt holds one slot of a semaphore for its whole duration and
    gives it back on every exit path. A failed attempt releases its slot
    before retrying, so a retry queues behind other callers instead of
    hogging capacity.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        credentials: CredentialManager,
        base_url: str,
        max_connections: int = 5,
        max_attempts: int = 10,
        retry_delay_seconds: float = 0.0,
    ):
        if max_connections < 1:
            raise ValueError("max_connections must be at least 1")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self._client = client
        self._credentials = credentials
        self._base_url = base_url.rstrip("/")
        self._slots = asyncio.Semaphore(max_connections)
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay_seconds
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        """Number of slots currently held."""
        return self._in_flight

    async def fetch_json(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        """
        GET base_url + path and return the decoded JSON body.

        Raises FetchError once max_attempts attempts have failed.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_fixed(self._retry_delay),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            before_sleep=before_sleep_log(logger, logging.DEBUG),
        )
        try:
            return await retrying(self._attempt, path, params)
        except RetryError as exc:
            last_error = exc.last_attempt.exception()
            status_code = None
            if isinstance(last_error, httpx.HTTPStatusError):
                status_code = last_error.response.status_code

            logger.warning("Giving up on %s after %d attempts: %s", path, self._max_attempts, last_error)
            raise FetchError(
                path,
                attempts=exc.last_attempt.attempt_number,
                max_attempts=self._max_attempts,
                status_code=status_code,
            ) from last_error

    async def _attempt(self, path: str, params: Optional[dict[str, str]]) -> Any:
        async with self._slots:
            self._in_flight += 1
            try:
                headers = await self._credentials.request_headers()
                response = await self._client.get(
                    f"{self._base_url}{path}",
                    params=params,
                    headers=headers,
                )
                response.raise_for_status()
                return response.json()
            finally:
                self._in_flight -= 1
