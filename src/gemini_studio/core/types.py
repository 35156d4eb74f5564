"""Core data types shared by builders, handlers and the client.

All types are immutable. Builders produce them, handlers consume them, and
nothing here talks to the network.
"""

from __future__ import annotations

import dataclasses
import typing

# --- Minimal guard helpers ---


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


# --- Result type for independent fan-out ---
# Concurrent sub-tasks report their own outcome so one failure does not
# cancel or corrupt its siblings.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful sub-task result."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failed sub-task, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]

# --- Inputs ---


@dataclasses.dataclass(frozen=True, slots=True)
class ContextDocument:
    """A knowledge-base document supplied as grounding context."""

    title: str
    content: str

    def __post_init__(self) -> None:
        """Validate invariants for type safety."""
        _require(
            condition=isinstance(self.title, str),
            message="must be str",
            field_name="title",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.content, str),
            message="must be str",
            field_name="content",
            exc=TypeError,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class GeoLocation:
    """A latitude/longitude pair used to bias maps grounding."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        _require(
            condition=-90.0 <= self.latitude <= 90.0,
            message=f"must be within [-90, 90], got {self.latitude!r}",
            field_name="latitude",
        )
        _require(
            condition=-180.0 <= self.longitude <= 180.0,
            message=f"must be within [-180, 180], got {self.longitude!r}",
            field_name="longitude",
        )


@dataclasses.dataclass(frozen=True, slots=True)
class RequestContext:
    """Auxiliary context that may shape tool selection."""

    location: GeoLocation | None = None


# --- Outgoing requests ---


@dataclasses.dataclass(frozen=True, slots=True)
class RemoteRequest:
    """A fully assembled generate-content request.

    ``contents`` and ``config`` are passed to the SDK untouched; ``schema`` is
    the pydantic type used to validate the textual response locally when the
    request is a structured generation call.
    """

    model: str
    contents: typing.Any
    config: typing.Any = None
    schema: typing.Any = None

    def __post_init__(self) -> None:
        """Validate RemoteRequest invariants."""
        _require(
            condition=isinstance(self.model, str) and self.model.strip() != "",
            message="must be a non-empty str",
            field_name="model",
            exc=TypeError,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class VideoRequest:
    """A video-generation submission."""

    model: str
    prompt: str
    config: typing.Any = None


# --- Long-running jobs ---


@dataclasses.dataclass(frozen=True, slots=True)
class AsyncJob:
    """Snapshot of a long-running remote operation.

    ``raw`` keeps the provider operation object so it can be handed back to
    the provider on the next poll.
    """

    handle: str | None
    done: bool
    uri: str | None = None
    error: str | None = None
    raw: typing.Any = dataclasses.field(default=None, compare=False, repr=False)

    @property
    def succeeded(self) -> bool:
        """Done with a result URI and no failure reason."""
        return self.done and self.error is None and self.uri is not None


# --- Results ---


@dataclasses.dataclass(frozen=True, slots=True)
class GroundedAnswer:
    """Free text plus the grounding chunks that informed it."""

    text: str
    sources: tuple[typing.Any, ...] = ()


@dataclasses.dataclass(frozen=True, slots=True)
class NotebookAnswer:
    """Answer from chat-with-context and the titles it cites."""

    text: str
    sources: tuple[str, ...] = ()
