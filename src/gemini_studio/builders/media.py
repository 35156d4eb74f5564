"""Image editing and video generation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from google.genai import types

from gemini_studio.core.types import AsyncJob, RemoteRequest, VideoRequest
from gemini_studio.exceptions import (
    JobPollFailedError,
    MalformedResponseError,
    RemoteCallFailedError,
)
from gemini_studio.response.envelope import InlineDataPart

from .base import decode_inline_payload

if TYPE_CHECKING:
    from gemini_studio.config import FrozenConfig
    from gemini_studio.response.envelope import ResponseEnvelope

logger = logging.getLogger(__name__)

PNG_DATA_URI_PREFIX = "data:image/png;base64,"


# --- Images ---


def build_image_edit_request(
    config: FrozenConfig, image: bytes | str, prompt: str
) -> RemoteRequest:
    data = decode_inline_payload(image, "image")
    return RemoteRequest(
        model=config.image_model,
        contents=[
            types.Part.from_bytes(data=data, mime_type="image/png"),
            prompt,
        ],
    )


def handle_image_response(envelope: ResponseEnvelope) -> str:
    """Data URI for the first part carrying image bytes.

    Other parts, such as accompanying text, are ignored.

    Raises:
        MalformedResponseError: If no part carries image data.
    """
    for part in envelope.parts:
        match part:
            case InlineDataPart():
                return PNG_DATA_URI_PREFIX + part.to_base64()
            case _:
                continue
    raise MalformedResponseError("Response contained no image data", raw_text=envelope.text)


# --- Video ---


def build_video_request(config: FrozenConfig, prompt: str) -> VideoRequest:
    return VideoRequest(
        model=config.video_model,
        prompt=f"An educational visualization for: {prompt}.",
        config=types.GenerateVideosConfig(
            number_of_videos=1,
            resolution="720p",
            aspect_ratio="16:9",
        ),
    )


def _first_video_uri(operation: Any) -> str | None:
    result = getattr(operation, "response", None) or getattr(operation, "result", None)
    videos = getattr(result, "generated_videos", None) or []
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None)


def _error_reason(error: Any) -> str | None:
    if not error:
        return None
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(error)


def to_async_job(operation: Any) -> AsyncJob:
    """Snapshot a provider operation as an ``AsyncJob``."""
    done = bool(getattr(operation, "done", False))
    return AsyncJob(
        handle=getattr(operation, "name", None),
        done=done,
        uri=_first_video_uri(operation) if done else None,
        error=_error_reason(getattr(operation, "error", None)) if done else None,
        raw=operation,
    )


def handle_video_job(job: AsyncJob, api_key: str) -> str:
    """Downloadable video URI with the access credential appended.

    Raises:
        RemoteCallFailedError: If the job finished with a failure reason.
        JobPollFailedError: If the job finished with neither URI nor reason.
    """
    if job.succeeded:
        logger.debug("Video job %s produced a downloadable URI", job.handle)
        return f"{job.uri}&key={api_key}"
    if not job.done:
        raise JobPollFailedError("Video job is not done")
    if job.error is not None:
        raise RemoteCallFailedError(f"Video generation failed: {job.error}")
    raise JobPollFailedError(
        f"Video job {job.handle or '<unnamed>'} finished without a video URI"
    )
