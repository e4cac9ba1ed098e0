"""Upstream session credential model."""

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class SessionCredential:
    """
    Opaque cookie set required by the upstream site.

    acquired_at is a monotonic clock reading (seconds).
    """

    token_set: Mapping[str, str]
    user_agent: str
    acquired_at: float
    use_count: int = 0

    def age(self, now: float) -> float:
        """Seconds elapsed since acquisition."""
        return now - self.acquired_at

    def is_stale(self, now: float, max_age: float, max_uses: int) -> bool:
        """Return True once the credential must be replaced before its next use."""
        return self.use_count > max_uses or self.age(now) >= max_age

    @property
    def cookie_header(self) -> str:
        """Render tokens as a Cookie request header value."""
        return "; ".join(f"{name}={value}" for name, value in self.token_set.items())
