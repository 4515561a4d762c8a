"""Immutable configuration handed to the client after resolution."""

from dataclasses import dataclass

from ocean_client.ratelimit.policy import RatelimitPolicy


@dataclass(frozen=True, slots=True)
class FrozenConfig:
    """Resolved client configuration.

    The repr redacts the API key so configs can be logged safely.
    """

    api_key: str | None
    api_root: str
    ratelimit_policy: RatelimitPolicy
    max_attempts: int | None
    request_timeout: float

    def __repr__(self) -> str:
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"FrozenConfig(api_key={api_key_display!r}, api_root={self.api_root!r}, "
            f"ratelimit_policy={self.ratelimit_policy.value!r}, "
            f"max_attempts={self.max_attempts!r}, "
            f"request_timeout={self.request_timeout!r})"
        )

    __str__ = __repr__
