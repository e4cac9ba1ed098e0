"""
Pytest configuration and fixtures for livefolio tests.

This module provides:
- A fake NSE upstream served through httpx.MockTransport
- A controllable monotonic clock for credential rotation
- Builders for the fetch client stack
- Deterministic and failing quote providers
- FastAPI test clients
"""

import asyncio
from decimal import Decimal
from typing import Any, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from livefolio.app_context import AppContext
from livefolio.config.settings import Settings, reset_settings, set_settings
from livefolio.core.exceptions import FetchError, QuoteNotFoundError
from livefolio.core.timezone import now_market
from livefolio.domain.views import Quote
from livefolio.main import app
from livefolio.providers import CredentialManager, NseClient, ThrottledFetcher


BASE_URL = "https://www.nseindia.com"


# =============================================================================
# FAKE UPSTREAM
# =============================================================================


DEFAULT_EQUITIES: dict[str, dict[str, Any]] = {
    "RELIANCE": {"lastPrice": 2945.6, "change": 14.45, "pChange": 0.49, "previousClose": 2931.15},
    "TCS": {"lastPrice": 4120.35, "change": 21.65, "pChange": 0.53, "previousClose": 4098.7},
    "INFY": {"lastPrice": 1876.2, "change": -5.25, "pChange": -0.28, "previousClose": 1881.45},
}


class FakeNseUpstream:
    """
    In-memory stand-in for the NSE site.

    Tracks bootstrap requests, API calls and the peak number of API requests
    being served at once. Failures and latency are configurable per test.
    """

    def __init__(self, equities: Optional[dict[str, dict[str, Any]]] = None):
        self.equities = dict(DEFAULT_EQUITIES if equities is None else equities)
        self.bootstrap_count = 0
        self.fail_bootstrap = False
        self.fail_next = 0
        self.latency = 0.0
        self.api_calls: list[httpx.Request] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def api_paths(self) -> list[str]:
        return [r.url.path for r in self.api_calls]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/":
            return self._bootstrap()

        self.api_calls.append(request)
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            if self.latency:
                await asyncio.sleep(self.latency)
            if self.fail_next > 0:
                self.fail_next -= 1
                return httpx.Response(503, json={"msg": "Service Unavailable"})
            return self._route(request)
        finally:
            self.in_flight -= 1

    def _bootstrap(self) -> httpx.Response:
        self.bootstrap_count += 1
        if self.fail_bootstrap:
            return httpx.Response(403, text="Access Denied")
        n = self.bootstrap_count
        return httpx.Response(
            200,
            text="<html></html>",
            headers=[
                ("set-cookie", f"nsit=nsit-{n}; Path=/; HttpOnly; Secure"),
                ("set-cookie", f"nseappid=app-{n}; Path=/; Max-Age=3600"),
                ("set-cookie", f"bm_sv=sv-{n}; Domain=.nseindia.com; Path=/"),
                ("set-cookie", "_ga=GA1.2.tracker; Path=/"),
            ],
        )

    def _route(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        params = request.url.params

        if path == "/api/quote-equity":
            symbol = params.get("symbol", "")
            equity = self.equities.get(symbol)
            if equity is None:
                return httpx.Response(200, json={})
            if params.get("section") == "trade_info":
                return httpx.Response(200, json={"marketDeptOrderBook": {"totalBuyQuantity": 1200}})
            return httpx.Response(200, json=self.equity_payload(symbol, equity))

        if path == "/api/chart-databyindex":
            index = params.get("index", "")
            return httpx.Response(200, json={"identifier": index, "grapthData": [[1700000000000, 100.5]]})

        if path == "/api/market-data-pre-open":
            key = params.get("key", "")
            if key == "ALL":
                rows = [{"metadata": {"symbol": s}} for s in ("TCS", "INFY", "RELIANCE")]
                rows.append({"detail": "row without metadata"})
                return httpx.Response(200, json={"data": rows})
            return httpx.Response(200, json={"key": key, "data": [{"metadata": {"symbol": key}}]})

        if path == "/api/top-corp-info":
            return httpx.Response(200, json={"latest_announcements": {"data": []}})

        if path in ("/api/option-chain-equities", "/api/option-chain-indices"):
            return httpx.Response(200, json={"records": {"underlying": params.get("symbol")}})

        if path == "/api/broken":
            return httpx.Response(200, text="<html>maintenance</html>")

        return httpx.Response(404, json={"msg": "not found"})

    @staticmethod
    def equity_payload(symbol: str, equity: dict[str, Any]) -> dict[str, Any]:
        return {
            "info": {"symbol": symbol, "identifier": f"{symbol}EQN"},
            "metadata": {"lastUpdateTime": "17-Oct-2025 15:30:00"},
            "priceInfo": equity,
        }


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def upstream() -> FakeNseUpstream:
    """Provide a fresh fake NSE upstream."""
    return FakeNseUpstream()


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable clock."""
    return FakeClock()


# =============================================================================
# FETCH STACK BUILDERS
# =============================================================================


def build_fetch_stack(
    upstream: FakeNseUpstream,
    clock: Optional[FakeClock] = None,
    max_connections: int = 5,
    max_attempts: int = 10,
) -> tuple[httpx.AsyncClient, CredentialManager, ThrottledFetcher, NseClient]:
    """
    Build the client stack against the fake upstream.

    Call from inside a running event loop (i.e. within the coroutine passed to
    asyncio.run) so locks and semaphores belong to that loop.
    """
    client = httpx.AsyncClient(transport=upstream.transport)
    kwargs = {"clock": clock} if clock is not None else {}
    credentials = CredentialManager(client=client, base_url=BASE_URL, **kwargs)
    fetcher = ThrottledFetcher(
        client=client,
        credentials=credentials,
        base_url=BASE_URL,
        max_connections=max_connections,
        max_attempts=max_attempts,
        retry_delay_seconds=0.0,
    )
    return client, credentials, fetcher, NseClient(fetcher)


# =============================================================================
# QUOTE PROVIDERS
# =============================================================================


class DeterministicQuoteProvider:
    """
    Quote provider with fixed prices and no randomness.

    Symbols listed in ``failing`` raise FetchError; anything unknown raises
    QuoteNotFoundError.
    """

    FIXED_PRICES = {
        "AAPL": Decimal("110"),
        "RELIANCE": Decimal("2945.60"),
        "TCS": Decimal("4120.35"),
        "INFY": Decimal("1876.20"),
    }

    def __init__(self, failing: Optional[set[str]] = None):
        self.prices = dict(self.FIXED_PRICES)
        self.failing = set(failing or ())
        self.calls: list[str] = []

    async def get_quote(self, symbol: str) -> Quote:
        self.calls.append(symbol)
        if symbol in self.failing:
            raise FetchError(f"/api/quote-equity?symbol={symbol}", attempts=10, max_attempts=10, status_code=503)
        if symbol not in self.prices:
            raise QuoteNotFoundError(symbol)
        return Quote(
            symbol=symbol,
            last_price=self.prices[symbol],
            change=Decimal("1.5"),
            percent_change=Decimal("0.25"),
            fetched_at=now_market(),
        )


@pytest.fixture
def deterministic_provider() -> DeterministicQuoteProvider:
    """Provide deterministic quote provider."""
    return DeterministicQuoteProvider()


# =============================================================================
# API TEST CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings for API tests: offline provider, fast failure paths."""
    return Settings(
        market_data_provider="stub",
        poll_interval_seconds=60.0,
        max_fetch_attempts=3,
        fetch_retry_delay_seconds=0.0,
    )


@pytest.fixture
def client(test_settings) -> TestClient:
    """Provide FastAPI test client running the stub quote provider."""
    set_settings(test_settings)
    with TestClient(app) as c:
        yield c
    reset_settings()


@pytest.fixture
def upstream_client(test_settings, upstream) -> TestClient:
    """Provide FastAPI test client whose NSE client talks to the fake upstream."""
    set_settings(test_settings)
    with TestClient(app) as c:
        http_client = httpx.AsyncClient(transport=upstream.transport)
        app.state.context = AppContext(
            settings=test_settings.model_copy(update={"market_data_provider": "nse"}),
            http_client=http_client,
        )
        yield c
        c.portal.call(http_client.aclose)
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def run(coro):
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


def drain(queue: asyncio.Queue) -> list:
    """Remove and return everything currently queued."""
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(actual) - Decimal(expected))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
