"""Rate-limit aware client for the DigitalOcean API."""

import importlib.metadata
import logging

from ocean_client.client import OceanClient
from ocean_client.config import FrozenConfig, OceanSettings, resolve_config
from ocean_client.core.exceptions import (
    ConfigurationError,
    GateCancelledError,
    HeaderProtocolViolation,
    MalformedRateLimitHeaderError,
    MissingRateLimitHeaderError,
    OceanClientError,
    RateLimitedError,
    RetryLimitExceededError,
)
from ocean_client.core.types import PerformableRequest, Response, ResponseHead
from ocean_client.http import HttpRequest, RequestBuilder
from ocean_client.ratelimit import (
    QuotaState,
    Ratelimited,
    RatelimitPolicy,
    Ratelimiter,
    WindowEstimator,
)
from ocean_client.telemetry import InMemoryReporter, TelemetryContext, TelemetryReporter

try:
    __version__ = importlib.metadata.version("ocean-client")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Prevents 'No handler found' warnings when the application has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Client
    "OceanClient",
    "HttpRequest",
    "RequestBuilder",
    # Rate limiting
    "Ratelimiter",
    "RatelimitPolicy",
    "Ratelimited",
    "WindowEstimator",
    "QuotaState",
    # Core types
    "PerformableRequest",
    "Response",
    "ResponseHead",
    # Configuration
    "FrozenConfig",
    "OceanSettings",
    "resolve_config",
    # Telemetry
    "TelemetryContext",
    "TelemetryReporter",
    "InMemoryReporter",
    # Exceptions
    "OceanClientError",
    "ConfigurationError",
    "RateLimitedError",
    "HeaderProtocolViolation",
    "MissingRateLimitHeaderError",
    "MalformedRateLimitHeaderError",
    "RetryLimitExceededError",
    "GateCancelledError",
]
