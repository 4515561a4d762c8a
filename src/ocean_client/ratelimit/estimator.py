"""Rolling-window quota estimation.

DigitalOcean uses a sliding window for its rate limits: each request stops
counting against the quota a fixed time after it was made, instead of the
whole quota resetting at once. Every response reports the ceiling, the
calls left, and the instant at which at least one slot frees up.

The estimator keeps the last reported values, predicts whether the next
request would be rejected, and reconciles its state once the reported reset
instant has passed.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import dataclasses
import logging
import time

from ocean_client.constants import (
    MAX_RATELIMIT_RESET,
    MAX_RATELIMIT_VALUE,
    RATELIMIT_LIMIT_HEADER,
    RATELIMIT_REMAINING_HEADER,
    RATELIMIT_RESET_HEADER,
)
from ocean_client.core.exceptions import (
    MalformedRateLimitHeaderError,
    MissingRateLimitHeaderError,
)
from ocean_client.core.types import find_header
from ocean_client.ratelimit.deadline import Ratelimited

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class QuotaState:
    """Last known rate-limit situation.

    ``limit`` and ``remaining`` are None until the first response has been
    studied. ``reset`` is None before that, and again right after a reset has
    been reconciled.
    """

    limit: int | None = None
    remaining: int | None = None
    reset: float | None = None


def _parse_unsigned(
    headers: Mapping[str, str], name: str, maximum: int = MAX_RATELIMIT_VALUE
) -> int:
    raw = find_header(headers, name)
    if raw is None:
        raise MissingRateLimitHeaderError(name)
    text = raw.strip()
    # int() would also accept signs, underscores and non-ASCII digits
    if not (text.isascii() and text.isdigit()):
        raise MalformedRateLimitHeaderError(name, raw)
    digits = text.lstrip("0") or "0"
    # length check first: int() refuses very long digit strings on its own
    if len(digits) > len(str(maximum)) or int(digits) > maximum:
        raise MalformedRateLimitHeaderError(name, raw, f"exceeds {maximum}")
    return int(digits)


class WindowEstimator:
    """Tracks quota state and predicts rejections.

    Not safe for concurrent use; the owning gate serializes access.
    """

    def __init__(
        self,
        state: QuotaState | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Start from ``state``, or from an unobserved state.

        Until the first response is studied nothing is known, so nothing is
        predicted.
        """
        self._state = state or QuotaState()
        self._clock = clock

    @property
    def state(self) -> QuotaState:
        return self._state

    def reconcile_if_expired(self) -> bool:
        """Free one slot if the stored reset instant has passed.

        Only one request is guaranteed to expire at the reported instant, so
        ``remaining`` grows by exactly one rather than back to ``limit``.

        Returns:
            True when a reset was reconciled.
        """
        state = self._state
        if state.reset is None or self._clock() <= state.reset:
            return False

        logger.info(
            "Resetting rate limit estimate; current time is after %s", state.reset
        )
        remaining = (state.remaining or 0) + 1
        if state.limit is not None:
            remaining = min(remaining, state.limit)
        self._state = dataclasses.replace(state, remaining=remaining, reset=None)
        return True

    def predict(self) -> Ratelimited | None:
        """Return a cached restriction if the server would reject us now."""
        state = self._state
        if state.reset is None:
            # Newly created, or a previous restriction already expired.
            return None
        if state.remaining == 0:
            return Ratelimited(until=state.reset, cached=True)
        return None

    def study(self, headers: Mapping[str, str]) -> QuotaState:
        """Replace the quota state with the values reported in ``headers``.

        The server's report is authoritative and overwrites all three
        fields. On error the current state is left untouched.

        Raises:
            MissingRateLimitHeaderError: A required header is absent.
            MalformedRateLimitHeaderError: A header is not an unsigned integer,
                or is too large to be a count or an epoch timestamp.
        """
        limit = _parse_unsigned(headers, RATELIMIT_LIMIT_HEADER)
        remaining = _parse_unsigned(headers, RATELIMIT_REMAINING_HEADER)
        reset = _parse_unsigned(headers, RATELIMIT_RESET_HEADER, MAX_RATELIMIT_RESET)

        self._state = QuotaState(limit=limit, remaining=remaining, reset=float(reset))
        logger.debug(
            "Studied rate limit headers: limit=%d remaining=%d reset=%d",
            limit,
            remaining,
            reset,
        )
        return self._state
