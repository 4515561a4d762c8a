"""Configuration schema and validation using Pydantic.

Validates and coerces values from the environment (``OCEAN_*``) and from
programmatic overrides into the correct types with defaults.
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ocean_client.constants import DEFAULT_API_ROOT, NETWORK_TIMEOUT
from ocean_client.ratelimit.policy import RatelimitPolicy


class OceanSettings(BaseSettings):
    """Pydantic settings schema for the ocean client."""

    model_config = SettingsConfigDict(
        env_prefix="OCEAN_",
        env_file=None,
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="DigitalOcean personal access token",
    )

    api_root: str = Field(
        default=DEFAULT_API_ROOT,
        description="Base URL that request paths are joined to",
        min_length=1,
    )

    ratelimit_policy: RatelimitPolicy = Field(
        default=RatelimitPolicy.RESPECT_BLOCKING,
        description="Reaction to predicted or observed rate limits",
    )

    max_attempts: int | None = Field(
        default=None,
        description="Cap on requests per call while retrying 429s; unset retries forever",
        ge=1,
    )

    request_timeout: float = Field(
        default=NETWORK_TIMEOUT,
        description="HTTP timeout in seconds",
        gt=0,
    )

    @field_validator("ratelimit_policy", mode="before")
    @classmethod
    def parse_policy(cls, v: Any) -> RatelimitPolicy:
        """Accept enum members, values, names and short aliases."""
        if isinstance(v, str | RatelimitPolicy):
            return RatelimitPolicy.parse(v)
        raise ValueError(f"Invalid rate limit policy: {v!r}")

    @field_validator("api_root")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Keep the root joinable: ``urljoin`` drops a last segment without '/'."""
        return v if v.endswith("/") else f"{v}/"
