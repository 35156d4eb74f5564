"""Configuration management for the studio client.

Key components:
- StudioSettings: pydantic-settings schema with validation and defaults
- FrozenConfig: immutable configuration carried by the client
- resolve_config: resolve-once entry point with origin tracking
- require_api_key: call-time credential lookup that fails fast
"""

from .api import API_KEY_ENV_VARS, require_api_key, resolve_config
from .schema import DEFAULT_POLL_INTERVAL_SECONDS, StudioSettings
from .types import ConfigOrigin, FrozenConfig, SourceMap

__all__ = [  # noqa: RUF022
    "resolve_config",
    "require_api_key",
    "API_KEY_ENV_VARS",
    "StudioSettings",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "FrozenConfig",
    "ConfigOrigin",
    "SourceMap",
]
