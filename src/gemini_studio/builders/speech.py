"""Transcription, translation and deep speech analysis."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from google.genai import types

from gemini_studio.core.types import ContextDocument, RemoteRequest
from gemini_studio.response.schemas import SpeechAnalysis
from gemini_studio.tools.selector import Capability, select_tools

from .base import (
    NO_DOCUMENTS_TEXT,
    decode_inline_payload,
    handle_structured,
    handle_text,
    join_context,
    knowledge_entries,
)

if TYPE_CHECKING:
    from gemini_studio.config import FrozenConfig
    from gemini_studio.response.envelope import ResponseEnvelope

TRANSCRIBE_INSTRUCTION = "Transcribe this educational recording."
_SUPPORTED = frozenset({Capability.WEB_SEARCH})


def build_transcription_request(
    config: FrozenConfig, audio: bytes | str, mime_type: str
) -> RemoteRequest:
    """Transcribe recorded audio given as bytes or base64 text."""
    data = decode_inline_payload(audio, "audio")
    return RemoteRequest(
        model=config.fast_model,
        contents=[
            types.Part.from_bytes(data=data, mime_type=mime_type),
            TRANSCRIBE_INSTRUCTION,
        ],
    )


def handle_transcription_response(envelope: ResponseEnvelope) -> str:
    return handle_text(envelope)


def build_translation_request(
    config: FrozenConfig, text: str, target_language: str
) -> RemoteRequest:
    return RemoteRequest(
        model=config.text_model,
        contents=f'Translate to {target_language}: "{text}"',
    )


def handle_translation_response(envelope: ResponseEnvelope, original: str) -> str:
    """Translated text; falls back to ``original`` when the response is empty."""
    return handle_text(envelope, default=original)


def build_speech_analysis_request(
    config: FrozenConfig,
    transcript: str,
    knowledge_base: Sequence[ContextDocument | str] = (),
    *,
    enabled: Iterable[Capability] = (),
) -> RemoteRequest:
    """Deep-research analysis of a transcript against the knowledge base."""
    entries = knowledge_entries(knowledge_base)
    kb = join_context(entries) if entries else NO_DOCUMENTS_TEXT
    prompt = (
        f'Perform a Deep Research analysis on the following transcript: "{transcript}".\n\n'
        "TASKS:\n"
        "1. Translate the transcript into high-quality scholarly English.\n"
        '2. Synthesize a "Deep Research" hybrid summary. Use both the provided '
        "Knowledge Base context and real-time information from the web to verify "
        "facts and expand on concepts.\n"
        "3. The summary should be authoritative, detailed, and structured for "
        "research purposes.\n"
        "4. Determine if external web grounding was used.\n\n"
        f"KNOWLEDGE BASE CONTEXT:\n{kb}\n\n"
        "Return ONLY a JSON object."
    )
    tools = select_tools(frozenset(enabled) & _SUPPORTED)
    return RemoteRequest(
        model=config.text_model,
        contents=prompt,
        config=types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=SpeechAnalysis,
            thinking_config=types.ThinkingConfig(thinking_budget=config.thinking_budget),
            **tools.config_fields(),
        ),
        schema=SpeechAnalysis,
    )


def handle_speech_analysis_response(envelope: ResponseEnvelope) -> SpeechAnalysis:
    return handle_structured(envelope, SpeechAnalysis)
