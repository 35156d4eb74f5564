"""Core immutable types."""

from .types import (
    AsyncJob,
    ContextDocument,
    Failure,
    GeoLocation,
    GroundedAnswer,
    NotebookAnswer,
    RemoteRequest,
    RequestContext,
    Result,
    Success,
    VideoRequest,
)

__all__ = [  # noqa: RUF022
    "ContextDocument",
    "GeoLocation",
    "RequestContext",
    "RemoteRequest",
    "VideoRequest",
    "AsyncJob",
    "GroundedAnswer",
    "NotebookAnswer",
    "Result",
    "Success",
    "Failure",
]
