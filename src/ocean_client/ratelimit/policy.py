"""Rate-limit policies selectable per gate."""

from __future__ import annotations

from enum import Enum


class RatelimitPolicy(str, Enum):
    """How the gate reacts to a predicted or observed rate limit."""

    RESPECT_BLOCKING = "respect_blocking"
    """The default. Wait until a request can be sent. If the server rejects
    it anyway, wait and try again."""

    RESPECT_NONBLOCKING = "respect_nonblocking"
    """Raise ``RateLimitedError`` instead of waiting. The only policy under
    which a restriction ever reaches the caller."""

    IGNORE = "ignore"
    """Send every request regardless. A 429 response is returned as-is and
    never retried."""

    @classmethod
    def parse(cls, value: str | RatelimitPolicy) -> RatelimitPolicy:
        """Parse a policy from its value, its name, or a short alias."""
        if isinstance(value, RatelimitPolicy):
            return value
        normalized = value.strip().lower().replace("-", "_")
        aliases = {
            "block": cls.RESPECT_BLOCKING,
            "blocking": cls.RESPECT_BLOCKING,
            "fail_fast": cls.RESPECT_NONBLOCKING,
            "nonblocking": cls.RESPECT_NONBLOCKING,
        }
        if normalized in aliases:
            return aliases[normalized]
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(
                f"Invalid rate limit policy: {value!r}. Must be one of: {valid}"
            ) from None

