"""Configuration for the ocean client.

Settings are resolved once from the environment and programmatic overrides,
then frozen and handed to the client.
"""

from .api import resolve_config
from .schema import OceanSettings
from .types import FrozenConfig

__all__ = [
    "FrozenConfig",
    "OceanSettings",
    "resolve_config",
]
