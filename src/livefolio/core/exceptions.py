"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class InvalidTradeRequestError(ValidationError):
    """Raised when a buy/sell request is missing fields or out of range."""

    def __init__(self, message: str = "Invalid buy/sell request."):
        super().__init__(message)
        self.code = "INVALID_TRADE_REQUEST"


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class QuoteNotFoundError(NotFoundError):
    """Raised when the upstream has no usable data for a symbol."""

    def __init__(self, symbol: str):
        super().__init__("Quote", symbol)
        self.symbol = symbol


class InsufficientPositionError(AppError):
    """Raised when attempting to sell more shares than held."""

    def __init__(self, symbol: str, requested: int, available: int):
        super().__init__(
            f"Insufficient position in {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_POSITION",
        )
        self.symbol = symbol
        self.requested = requested
        self.available = available


class UpstreamUnavailableError(AppError):
    """Raised when a session credential cannot be obtained from the upstream."""

    def __init__(self, message: str):
        super().__init__(message, code="UPSTREAM_UNAVAILABLE")


class FetchError(AppError):
    """Raised when an upstream request keeps failing after every retry."""

    def __init__(
        self,
        path: str,
        attempts: int,
        max_attempts: int,
        status_code: Optional[int] = None,
    ):
        detail = f"HTTP {status_code}" if status_code is not None else "no response"
        super().__init__(
            f"Fetching {path} failed after {attempts} attempt(s): {detail}",
            code="FETCH_ERROR",
        )
        self.path = path
        self.attempts = attempts
        self.max_attempts = max_attempts
        self.status_code = status_code

    @property
    def retries_exhausted(self) -> bool:
        """Return True if every permitted attempt was used."""
        return self.attempts >= self.max_attempts
