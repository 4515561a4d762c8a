"""Unit tests for configuration resolution.

These tests verify that:
- Settings are read from OCEAN_* environment variables.
- Programmatic overrides win over the environment.
- Invalid values surface as ConfigurationError.
"""

import os
from unittest.mock import patch

import pytest

from ocean_client.config import FrozenConfig, resolve_config
from ocean_client.core.exceptions import ConfigurationError
from ocean_client.ratelimit.policy import RatelimitPolicy


class TestResolveConfig:
    @pytest.mark.unit
    def test_defaults(self):
        config = resolve_config()

        assert config.api_key is None
        assert config.api_root == "https://api.digitalocean.com/v2/"
        assert config.ratelimit_policy is RatelimitPolicy.RESPECT_BLOCKING
        assert config.max_attempts is None
        assert config.request_timeout == 30.0

    @pytest.mark.unit
    def test_reads_environment(self):
        with patch.dict(
            os.environ,
            {
                "OCEAN_API_KEY": "env-key",
                "OCEAN_RATELIMIT_POLICY": "FAIL_FAST",
                "OCEAN_MAX_ATTEMPTS": "5",
            },
        ):
            config = resolve_config()

        assert config.api_key == "env-key"
        assert config.ratelimit_policy is RatelimitPolicy.RESPECT_NONBLOCKING
        assert config.max_attempts == 5

    @pytest.mark.unit
    def test_overrides_win_over_environment(self):
        with patch.dict(os.environ, {"OCEAN_RATELIMIT_POLICY": "ignore"}):
            config = resolve_config(ratelimit_policy=RatelimitPolicy.RESPECT_BLOCKING)

        assert config.ratelimit_policy is RatelimitPolicy.RESPECT_BLOCKING

    @pytest.mark.unit
    def test_none_override_is_not_provided(self):
        with patch.dict(os.environ, {"OCEAN_API_KEY": "env-key"}):
            config = resolve_config(api_key=None)

        assert config.api_key == "env-key"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "overrides",
        [
            {"ratelimit_policy": "sometimes"},
            {"max_attempts": 0},
            {"request_timeout": 0},
        ],
    )
    def test_invalid_values_raise(self, overrides):
        with pytest.raises(ConfigurationError):
            resolve_config(**overrides)

    @pytest.mark.unit
    def test_repr_redacts_key(self):
        config = resolve_config(api_key="super-secret")

        assert "super-secret" not in repr(config)
        assert "[REDACTED]" in str(config)

    @pytest.mark.unit
    def test_frozen(self):
        config = resolve_config()

        assert isinstance(config, FrozenConfig)
        with pytest.raises(AttributeError):
            config.api_root = "https://elsewhere/"  # type: ignore[misc]
