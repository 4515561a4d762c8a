"""Public configuration entry point."""

import logging
from typing import Any

from pydantic import ValidationError

from ocean_client.core.exceptions import ConfigurationError

from .schema import OceanSettings
from .types import FrozenConfig

log = logging.getLogger(__name__)


def resolve_config(**overrides: Any) -> FrozenConfig:
    """Resolve configuration from ``OCEAN_*`` environment variables.

    Programmatic ``overrides`` take precedence over the environment. Keys
    set to None are treated as not provided.

    Raises:
        ConfigurationError: If any value fails validation.
    """
    explicit = {k: v for k, v in overrides.items() if v is not None}
    try:
        settings = OceanSettings(**explicit)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid ocean client configuration: {e}") from e

    config = FrozenConfig(
        api_key=settings.api_key,
        api_root=settings.api_root,
        ratelimit_policy=settings.ratelimit_policy,
        max_attempts=settings.max_attempts,
        request_timeout=settings.request_timeout,
    )
    log.debug("Resolved configuration: %s", config)
    return config
