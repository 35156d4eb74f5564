"""Core configuration data types.

Configuration is resolved once and then frozen; the frozen value is what the
client carries around.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Literal

# --- Source Tracking Types ---

ConfigOrigin = Literal["programmatic", "env", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration attached to a ``StudioClient``.

    ``origin`` records where each value came from so an audit can be printed
    without revealing the API key.
    """

    api_key: str | None
    text_model: str
    fast_model: str
    maps_model: str
    tts_model: str
    image_model: str
    video_model: str
    poll_interval_seconds: float
    thinking_budget: int
    origin: SourceMap = field(default_factory=dict, compare=False)

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"FrozenConfig(api_key={api_key_display!r}, "
            f"text_model={self.text_model!r}, fast_model={self.fast_model!r}, "
            f"maps_model={self.maps_model!r}, tts_model={self.tts_model!r}, "
            f"image_model={self.image_model!r}, video_model={self.video_model!r}, "
            f"poll_interval_seconds={self.poll_interval_seconds!r}, "
            f"thinking_budget={self.thinking_budget!r})"
        )

    def __repr__(self) -> str:
        """Representation with redacted API key for safe debugging."""
        return self.__str__()

    def with_overrides(self, **overrides: object) -> "FrozenConfig":
        """Return a copy with programmatic overrides applied.

        Unknown field names are ignored.
        """
        known = {f.name for f in fields(self)} - {"origin"}
        applied = {k: v for k, v in overrides.items() if k in known}
        origin = dict(self.origin)
        origin.update(dict.fromkeys(applied, "programmatic"))
        return replace(self, origin=origin, **applied)

    def audit(self) -> str:
        """Report the origin of each field, redacting the API key."""
        lines = []
        for f in fields(self):
            if f.name == "origin":
                continue
            origin = self.origin.get(f.name, "default")
            value = getattr(self, f.name)
            if f.name == "api_key":
                display = f"{origin}:None" if value is None else f"{origin}:<redacted>"
            elif origin == "env":
                display = f"env:GEMINI_{f.name.upper()}={value}"
            else:
                display = f"{origin}:{value}"
            lines.append(f"{f.name}: {display}")
        return "\n".join(lines)
