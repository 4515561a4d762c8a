"""The caller-facing DigitalOcean API client.

An ``OceanClient`` owns one API key and one ``Ratelimiter``. Because the
ratelimiter's quota estimate is not safe for concurrent mutation, every call
holds the client's lock for its whole duration: concurrent callers queue up
instead of racing each other through the gate.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from ocean_client.config import FrozenConfig, resolve_config
from ocean_client.constants import DEFAULT_API_ROOT, NETWORK_TIMEOUT
from ocean_client.core.exceptions import ConfigurationError
from ocean_client.http import RequestBuilder
from ocean_client.ratelimit.gate import Ratelimiter
from ocean_client.ratelimit.policy import RatelimitPolicy

if TYPE_CHECKING:
    from ocean_client.core.types import PerformableRequest, Response
    from ocean_client.ratelimit.estimator import QuotaState

logger = logging.getLogger(__name__)


def _validate_key(key: str) -> str:
    if not isinstance(key, str) or not key.strip():
        raise ConfigurationError("API key must be a non-empty string")
    return key


class OceanClient:
    """Makes authenticated, rate-limited requests to the API.

    Example:
        client = OceanClient("dop_v1_...")
        response = await client.execute(client.requests.get("account"))
    """

    def __init__(
        self,
        key: str,
        *,
        ratelimiter: Ratelimiter | None = None,
        api_root: str = DEFAULT_API_ROOT,
        http_client: httpx.AsyncClient | None = None,
        request_timeout: float = NETWORK_TIMEOUT,
    ) -> None:
        """Create a client for ``key``.

        It won't perform any requests until told to.
        """
        self._key = _validate_key(key)
        self._ratelimiter = ratelimiter or Ratelimiter()
        self._lock = asyncio.Lock()
        self.requests = RequestBuilder(
            api_root, client=http_client, timeout=request_timeout
        )

    @classmethod
    def from_config(
        cls, config: FrozenConfig, *, http_client: httpx.AsyncClient | None = None
    ) -> OceanClient:
        if not config.api_key:
            raise ConfigurationError(
                "api_key is required. Set OCEAN_API_KEY or pass it programmatically."
            )
        return cls(
            config.api_key,
            ratelimiter=Ratelimiter(
                config.ratelimit_policy, max_attempts=config.max_attempts
            ),
            api_root=config.api_root,
            http_client=http_client,
            request_timeout=config.request_timeout,
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> OceanClient:
        """Build a client from ``OCEAN_*`` variables plus ``overrides``."""
        return cls.from_config(resolve_config(**overrides))

    def __repr__(self) -> str:
        return (
            f"OceanClient(key='[REDACTED]', api_root={self.requests.root!r}, "
            f"policy={self.policy.value!r})"
        )

    @property
    def policy(self) -> RatelimitPolicy:
        return self._ratelimiter.policy

    @property
    def quota(self) -> QuotaState:
        return self._ratelimiter.state

    @property
    def api_root(self) -> str:
        return self.requests.root

    def set_key(self, key: str) -> None:
        """Replace the API key used by all subsequent requests.

        A request already in flight keeps the key it started with. The old
        key is dropped and cannot be retrieved.
        """
        self._key = _validate_key(key)
        logger.info("API key replaced; takes effect on the next request")

    async def execute[T](
        self,
        request: PerformableRequest[T],
        *,
        cancel: asyncio.Event | None = None,
    ) -> Response[T]:
        """Execute ``request`` as this client.

        With the default blocking policy this only ever raises for header
        protocol violations or transport errors.

        Raises:
            RateLimitedError: Under the non-blocking policy.
            HeaderProtocolViolation: The response lacked rate-limit headers.
            GateCancelledError: ``cancel`` was set before or while waiting.
        """
        async with self._lock:
            return await self._ratelimiter.execute(request, self._key, cancel=cancel)
