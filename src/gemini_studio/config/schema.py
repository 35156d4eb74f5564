"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from the environment, an optional ``.env`` file and programmatic
overrides into the correct types with proper defaults.
"""

from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_POLL_INTERVAL_SECONDS = 10.0


class StudioSettings(BaseSettings):
    """Pydantic settings schema for the studio client.

    Environment variables use the ``GEMINI_`` prefix. The API key additionally
    accepts the bare ``API_KEY`` variable the studio front-end has always used.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_key: str | None = Field(
        default=None,
        description="Google Gemini API key",
        validation_alias=AliasChoices("api_key", "GEMINI_API_KEY", "API_KEY"),
    )

    text_model: str = Field(
        default="gemini-3-pro-preview",
        description="Model for reasoning-heavy text generation",
        min_length=1,
    )

    fast_model: str = Field(
        default="gemini-3-flash-preview",
        description="Model for quick structured generation and transcription",
        min_length=1,
    )

    maps_model: str = Field(
        default="gemini-2.5-flash",
        description="Model used for maps-grounded queries",
        min_length=1,
    )

    tts_model: str = Field(
        default="gemini-2.5-flash-preview-tts",
        description="Multi-speaker text-to-speech model",
        min_length=1,
    )

    image_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Image generation and editing model",
        min_length=1,
    )

    video_model: str = Field(
        default="veo-3.1-fast-generate-preview",
        description="Video generation model",
        min_length=1,
    )

    poll_interval_seconds: float = Field(
        default=DEFAULT_POLL_INTERVAL_SECONDS,
        description="Fixed delay between video job status checks",
        gt=0,
    )

    thinking_budget: int = Field(
        default=16000,
        description="Thinking token budget for deep speech analysis",
        ge=0,
    )

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v: Any) -> Any:
        """Treat an empty or whitespace-only key as absent."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary keyed by field name."""
        return {name: getattr(self, name) for name in type(self).model_fields}
