"""Public API for configuration resolution and credential lookup."""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError

from gemini_studio.exceptions import ConfigurationError, MissingCredentialError

from .schema import StudioSettings
from .types import ConfigOrigin, FrozenConfig

logger = logging.getLogger(__name__)

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")


def _env_names(field: str) -> tuple[str, ...]:
    if field == "api_key":
        return API_KEY_ENV_VARS
    return (f"GEMINI_{field.upper()}",)


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    env_file: str | Path | None = None,
) -> FrozenConfig:
    """Resolve configuration from all sources with proper precedence.

    Precedence: Programmatic > Environment > ``.env`` file > Defaults.

    Args:
        programmatic: Field overrides. Unknown fields are ignored.
        env_file: Optional path to a ``.env`` file. Values in the file never
            override variables already present in the environment.

    Returns:
        FrozenConfig carrying the resolved values and their origins.

    Raises:
        ConfigurationError: If a value fails validation or the env file is missing.
    """
    known = set(StudioSettings.model_fields)
    overrides = {k: v for k, v in (programmatic or {}).items() if k in known}

    file_values: dict[str, str | None] = {}
    if env_file is not None:
        env_path = Path(env_file)
        if not env_path.exists():
            raise ConfigurationError(f"Environment file not found: {env_path}")
        file_values = {k.upper(): v for k, v in dotenv_values(env_path).items()}

    try:
        settings = StudioSettings(_env_file=env_file, **overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    origin: dict[str, ConfigOrigin] = {}
    for field in known:
        names = _env_names(field)
        if field in overrides:
            origin[field] = "programmatic"
        elif any(name in os.environ for name in names):
            origin[field] = "env"
        elif any(name in file_values for name in names):
            origin[field] = "file"
        else:
            origin[field] = "default"

    frozen = FrozenConfig(**settings.to_dict(), origin=origin)
    logger.debug("Resolved configuration: %s", frozen)
    return frozen


def require_api_key(config: FrozenConfig | None = None) -> str:
    """Return the API key to use for a call, or fail fast.

    Keys given programmatically or read from an explicit ``.env`` file are
    taken from ``config``. Otherwise the process environment is read now, so a
    key exported after the client was built is still honoured.

    Raises:
        MissingCredentialError: If no non-empty key is available.
    """
    key: str | None = None
    if config is not None and config.origin.get("api_key") in ("programmatic", "file"):
        key = config.api_key
    else:
        for name in API_KEY_ENV_VARS:
            candidate = os.environ.get(name)
            if candidate and candidate.strip():
                key = candidate
                break
    if not key or not key.strip():
        raise MissingCredentialError(
            "API key is not set. Set GEMINI_API_KEY (or API_KEY) in the environment "
            "or pass api_key programmatically."
        )
    return key.strip()
