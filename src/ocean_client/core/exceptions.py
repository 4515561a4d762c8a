"""Exceptions raised by the ocean client and its rate-limit gate."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ocean_client.ratelimit.deadline import Ratelimited


class OceanClientError(Exception):
    """Base exception for all ocean client errors."""


class ConfigurationError(OceanClientError):
    """Raised when settings or credentials are invalid."""


class RateLimitedError(OceanClientError):
    """Raised when a request is, or would be, rejected by the rate limit.

    Only surfaces under the non-blocking policy. The attached restriction
    tells the caller how long to back off before trying again.
    """

    def __init__(self, restriction: Ratelimited) -> None:
        """Wrap a restriction so callers can inspect or wait it out."""
        self.restriction = restriction
        origin = "predicted" if restriction.cached else "rejected by server"
        super().__init__(f"Rate limited ({origin}) until epoch {restriction.until:.0f}")

    @property
    def until(self) -> float:
        return self.restriction.until

    @property
    def cached(self) -> bool:
        return self.restriction.cached


class HeaderProtocolViolation(OceanClientError):
    """A response did not carry usable rate-limit headers.

    The remote service guarantees these headers on every response, so this
    is never retried.
    """

    def __init__(self, header: str, message: str) -> None:  # noqa: D107
        self.header = header
        super().__init__(message)


class MissingRateLimitHeaderError(HeaderProtocolViolation):
    """A required rate-limit header was absent."""

    def __init__(self, header: str) -> None:  # noqa: D107
        super().__init__(header, f"no {header} header")


class MalformedRateLimitHeaderError(HeaderProtocolViolation):
    """A rate-limit header was present but not a usable unsigned integer."""

    def __init__(  # noqa: D107
        self, header: str, value: str, reason: str = "is not an unsigned integer"
    ) -> None:
        self.value = value
        super().__init__(header, f"{header} header {reason}: {value!r}")


class RetryLimitExceededError(OceanClientError):
    """Raised when the optional attempt guard stops a 429 retry loop."""

    def __init__(self, attempts: int, last_restriction: Ratelimited | None) -> None:  # noqa: D107
        self.attempts = attempts
        self.last_restriction = last_restriction
        super().__init__(
            f"Gave up after {attempts} attempts still rejected by the rate limit"
        )


class GateCancelledError(OceanClientError):
    """Raised when a cancellation token fires before or during a suspension."""
