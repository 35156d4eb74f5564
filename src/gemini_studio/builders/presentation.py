"""Slide-deck generation, expansion and slide visuals."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import json
from typing import TYPE_CHECKING

from google.genai import types

from gemini_studio.core.types import ContextDocument, RemoteRequest
from gemini_studio.response.schemas import Slide
from gemini_studio.tools.selector import Capability, select_tools

from .base import handle_structured, join_context, knowledge_entries
from .media import handle_image_response

if TYPE_CHECKING:
    from gemini_studio.config import FrozenConfig
    from gemini_studio.response.envelope import ResponseEnvelope

SLIDE_DECK_SCHEMA = list[Slide]
EXPANSION_SLIDE_COUNT = 3
_SUPPORTED = frozenset({Capability.WEB_SEARCH})


def _deck_config(enabled: Iterable[Capability]) -> types.GenerateContentConfig:
    tools = select_tools(frozenset(enabled) & _SUPPORTED)
    return types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=SLIDE_DECK_SCHEMA,
        **tools.config_fields(),
    )


def build_presentation_request(
    config: FrozenConfig,
    topic: str,
    knowledge_base: Sequence[ContextDocument | str] = (),
    *,
    location: str | None = None,
    enabled: Iterable[Capability] = (),
) -> RemoteRequest:
    """Create a deck about ``topic`` from the knowledge base.

    Web search is attached only when that capability is enabled.
    """
    prompt = (
        f"Create a presentation about {topic}. Context/Location: {location or 'General'}.\n"
        f"Knowledge Base Context:\n{join_context(knowledge_entries(knowledge_base))}"
    )
    return RemoteRequest(
        model=config.fast_model,
        contents=prompt,
        config=_deck_config(enabled),
        schema=SLIDE_DECK_SCHEMA,
    )


def build_expand_presentation_request(
    config: FrozenConfig,
    topic: str,
    slides: Sequence[Slide],
    knowledge_base: Sequence[ContextDocument | str] = (),
    *,
    enabled: Iterable[Capability] = (),
) -> RemoteRequest:
    current = json.dumps(
        [s.model_dump(by_alias=True, exclude_none=True) for s in slides]
    )
    prompt = (
        f"Expand the following presentation deck about {topic}. Add "
        f"{EXPANSION_SLIDE_COUNT} more unique slides. Current slides: {current}.\n"
        f"Knowledge Base Context:\n{join_context(knowledge_entries(knowledge_base))}"
    )
    return RemoteRequest(
        model=config.fast_model,
        contents=prompt,
        config=_deck_config(enabled),
        schema=SLIDE_DECK_SCHEMA,
    )


def handle_slides_response(envelope: ResponseEnvelope) -> list[Slide]:
    return handle_structured(envelope, SLIDE_DECK_SCHEMA)


def build_slide_visual_request(
    config: FrozenConfig, title: str, bullets: Sequence[str] = ()
) -> RemoteRequest:
    highlights = ", ".join(bullets) if bullets else "educational visualization"
    return RemoteRequest(
        model=config.image_model,
        contents=f"Infographic for {title}. Highlights: {highlights}",
    )


def handle_slide_visual_response(envelope: ResponseEnvelope) -> str:
    return handle_image_response(envelope)
