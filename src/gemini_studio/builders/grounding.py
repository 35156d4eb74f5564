"""Grounded search, maps and video-search requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from google.genai import types

from gemini_studio.core.types import GeoLocation, GroundedAnswer, RemoteRequest, RequestContext
from gemini_studio.tools.selector import Capability, select_tools

from .base import handle_text

if TYPE_CHECKING:
    from gemini_studio.config import FrozenConfig
    from gemini_studio.response.envelope import ResponseEnvelope


def build_search_request(config: FrozenConfig, query: str) -> RemoteRequest:
    """Web-grounded answer to a free-form query."""
    tools = select_tools({Capability.WEB_SEARCH})
    return RemoteRequest(
        model=config.text_model,
        contents=query,
        config=types.GenerateContentConfig(**tools.config_fields()),
    )


def build_maps_request(
    config: FrozenConfig, query: str, location: GeoLocation | None = None
) -> RemoteRequest:
    """Maps-grounded query, biased to ``location`` when one is known."""
    tools = select_tools({Capability.MAPS}, RequestContext(location=location))
    return RemoteRequest(
        model=config.maps_model,
        contents=query,
        config=types.GenerateContentConfig(**tools.config_fields()),
    )


def build_video_search_request(config: FrozenConfig, query: str) -> RemoteRequest:
    """Search for educational videos.

    Video metadata search is a prompt framing over web search, not a tool of
    its own.
    """
    tools = select_tools({Capability.WEB_SEARCH, Capability.VIDEO_METADATA_SEARCH})
    return RemoteRequest(
        model=config.fast_model,
        contents=f'Educational YouTube videos for: "{query}"',
        config=types.GenerateContentConfig(**tools.config_fields()),
    )


def handle_grounded_response(envelope: ResponseEnvelope) -> GroundedAnswer:
    """Answer text plus grounding chunks (web pages or places)."""
    return GroundedAnswer(text=handle_text(envelope), sources=envelope.grounding_chunks)
