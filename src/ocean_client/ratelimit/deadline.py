"""Restriction deadlines produced by the rate-limit estimator."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import dataclasses
from datetime import UTC, datetime
import logging
import time

from ocean_client.core.exceptions import GateCancelledError

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class Ratelimited:
    """A known rate-limit restriction and the instant it expires.

    Usually handled inside the gate, but surfaced to the caller under the
    non-blocking policy.

    Attributes:
        until: Unix epoch seconds at which (at least) one request slot frees up.
            A request is not guaranteed to succeed after this time: other
            clients may compete for the slot, or the local clock may be off.
        cached: True when no request was sent and the restriction was
            inferred from previous response headers. False when the server
            actually rejected a request with 429.
    """

    until: float
    cached: bool

    @property
    def until_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.until, tz=UTC)

    def remaining_seconds(self, now: float | None = None) -> float:
        """Seconds left until expiry, never negative."""
        current = time.time() if now is None else now
        return max(self.until - current, 0.0)

    async def wait(
        self,
        *,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        cancel: asyncio.Event | None = None,
    ) -> None:
        """Suspend until this restriction is up.

        The delay is computed from the clock at the moment of suspension, so
        a caller that was held up before waiting does not oversleep. If the
        system clock is ahead, this may return before the server has
        actually forgotten the oldest request.

        Raises:
            GateCancelledError: If ``cancel`` is set before or during the wait.
        """
        if cancel is not None and cancel.is_set():
            raise GateCancelledError("Cancelled before waiting on rate limit")

        delay = self.remaining_seconds(clock())
        logger.debug("Waiting %.3fs for rate limit to expire", delay)
        if cancel is None:
            await sleep(delay)
            return

        sleeper = asyncio.ensure_future(sleep(delay))
        canceller = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait(
                {sleeper, canceller}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (sleeper, canceller):
                if not task.done():
                    task.cancel()
        if cancel.is_set():
            raise GateCancelledError("Cancelled while waiting on rate limit")
        sleeper.result()
