"""The rate-limit gate that every API request passes through.

Each call runs the same cycle: reconcile and predict, optionally wait,
perform the request, study the response headers, and retry if the server
rejected us with 429 despite a favorable prediction. The last case happens
because the window keeps sliding between the moment we predict and the
moment the request lands.

The gate is not concurrent. Only one ``execute`` may be in flight at a time;
``OceanClient`` enforces that with a lock.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import logging
import time
from typing import TYPE_CHECKING

from ocean_client.constants import HTTP_TOO_MANY_REQUESTS
from ocean_client.core.exceptions import (
    GateCancelledError,
    RateLimitedError,
    RetryLimitExceededError,
)
from ocean_client.core.types import Response
from ocean_client.ratelimit.deadline import Ratelimited
from ocean_client.ratelimit.estimator import QuotaState, WindowEstimator
from ocean_client.ratelimit.policy import RatelimitPolicy
from ocean_client.telemetry import TelemetryContext

if TYPE_CHECKING:
    from ocean_client.core.types import PerformableRequest
    from ocean_client.telemetry import TelemetryContextProtocol

logger = logging.getLogger(__name__)

# --- Telemetry scopes ---
T_EXECUTE = "ratelimit"
T_WAIT = "wait"
T_PERFORM = "perform"
T_PREDICTED = "predicted"
T_REJECTED = "rejected"


class Ratelimiter:
    """Governs requests against a rolling-window rate limit.

    The ratelimiter updates itself from every completed response and
    estimates when we'll be rate limited and when we can send again. What it
    does about a restriction depends on its ``policy``.
    """

    def __init__(
        self,
        policy: RatelimitPolicy = RatelimitPolicy.RESPECT_BLOCKING,
        *,
        max_attempts: int | None = None,
        estimator: WindowEstimator | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        """Create a ratelimiter.

        Args:
            policy: Reaction to predicted or observed restrictions.
            max_attempts: Optional cap on requests sent per ``execute`` under
                the blocking policy. None retries 429s without bound.
            estimator: Quota estimator to use; defaults to a fresh one
                sharing ``clock``.
            clock: Source of Unix epoch seconds.
            sleep: Coroutine used to wait out restrictions.
            telemetry: Optional telemetry context.
        """
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._policy = RatelimitPolicy.parse(policy)
        self._max_attempts = max_attempts
        self._estimator = estimator or WindowEstimator(clock=clock)
        self._clock = clock
        self._sleep = sleep
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    def __repr__(self) -> str:
        return (
            f"Ratelimiter(policy={self._policy.value!r}, "
            f"max_attempts={self._max_attempts!r}, state={self.state!r})"
        )

    @property
    def policy(self) -> RatelimitPolicy:
        return self._policy

    @property
    def state(self) -> QuotaState:
        return self._estimator.state

    async def execute[T](
        self,
        request: PerformableRequest[T],
        key: str,
        *,
        cancel: asyncio.Event | None = None,
    ) -> Response[T]:
        """Execute ``request`` authenticated with ``key``.

        Args:
            request: The request to perform; may be performed more than once.
            key: API credential forwarded to ``request.perform``.
            cancel: Optional token. When set, the gate stops at the next
                suspension point, or interrupts an ongoing wait.

        Returns:
            The response. Under the ignore policy this may be a 429.

        Raises:
            RateLimitedError: Under the non-blocking policy, when a
                restriction is predicted or the server rejects the request.
            HeaderProtocolViolation: A response lacked valid rate-limit
                headers. Raised under every policy.
            RetryLimitExceededError: ``max_attempts`` was reached.
            GateCancelledError: ``cancel`` was set.
        """
        with self._telemetry(T_EXECUTE, policy=self._policy.value):
            attempts = 0
            last_rejection: Ratelimited | None = None
            while True:
                if self._max_attempts is not None and attempts >= self._max_attempts:
                    raise RetryLimitExceededError(attempts, last_rejection)

                await self._await_clearance(cancel)

                _raise_if_cancelled(cancel, "before performing request")
                attempts += 1
                logger.debug("Performing request (attempt %d)", attempts)
                with self._telemetry(T_PERFORM, attempt=attempts):
                    response = await request.perform(key)

                head, body = response.head, response.body
                # HeaderProtocolViolation propagates under every policy
                state = self._estimator.study(head.headers)

                if head.status_code != HTTP_TOO_MANY_REQUESTS:
                    return Response.from_parts(head, body)

                rejection = Ratelimited(until=_reset_of(state), cached=False)
                self._telemetry.count(T_REJECTED)
                logger.warning(
                    "Request rejected with 429; rate limited until epoch %.0f",
                    rejection.until,
                )
                match self._policy:
                    case RatelimitPolicy.RESPECT_BLOCKING:
                        last_rejection = rejection
                        continue
                    case RatelimitPolicy.RESPECT_NONBLOCKING:
                        raise RateLimitedError(rejection)
                    case RatelimitPolicy.IGNORE:
                        return Response.from_parts(head, body)

    async def _await_clearance(self, cancel: asyncio.Event | None) -> None:
        """Reconcile, predict, and apply the policy to any prediction."""
        self._estimator.reconcile_if_expired()
        restriction = self._estimator.predict()
        if restriction is None:
            return

        self._telemetry.count(T_PREDICTED)
        logger.info(
            "Pretty sure we will be rate limited until epoch %.0f",
            restriction.until,
        )
        match self._policy:
            case RatelimitPolicy.RESPECT_BLOCKING:
                with self._telemetry(T_WAIT):
                    await restriction.wait(
                        clock=self._clock, sleep=self._sleep, cancel=cancel
                    )
            case RatelimitPolicy.RESPECT_NONBLOCKING:
                raise RateLimitedError(restriction)
            case RatelimitPolicy.IGNORE:
                pass


def _reset_of(state: QuotaState) -> float:
    # study() always sets reset; kept explicit for the type checker
    if state.reset is None:  # pragma: no cover
        raise AssertionError("studied quota state has no reset instant")
    return state.reset


def _raise_if_cancelled(cancel: asyncio.Event | None, where: str) -> None:
    if cancel is not None and cancel.is_set():
        raise GateCancelledError(f"Cancelled {where}")
