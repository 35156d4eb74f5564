"""Notebook (knowledge base) requests: guide, chat, audio overview and quiz."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from google.genai import types

from gemini_studio.core.types import ContextDocument, NotebookAnswer, RemoteRequest
from gemini_studio.exceptions import MalformedResponseError
from gemini_studio.response.schemas import NotebookGuide, Quiz

from .base import format_sources, handle_structured, handle_text

if TYPE_CHECKING:
    from gemini_studio.config import FrozenConfig
    from gemini_studio.response.envelope import ResponseEnvelope

NOT_FOUND_ANSWER = "I couldn't find information about that in your notebook."

# Speaker name -> prebuilt voice
PODCAST_VOICES = (("Joe", "Kore"), ("Jane", "Puck"))


# --- Notebook guide ---


def build_notebook_guide_request(
    config: FrozenConfig, docs: Sequence[ContextDocument]
) -> RemoteRequest:
    prompt = (
        "Based on these sources, generate a Notebook Guide. Include a 2-paragraph "
        "summary, 5 FAQs, 5 key terms, and a comprehensive study guide. "
        "Return ONLY JSON."
    )
    return RemoteRequest(
        model=config.text_model,
        contents=f"{prompt}\n\nCONTEXT:\n{format_sources(docs)}",
        config=types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=NotebookGuide,
        ),
        schema=NotebookGuide,
    )


def handle_notebook_guide_response(envelope: ResponseEnvelope) -> NotebookGuide:
    return handle_structured(envelope, NotebookGuide)


# --- Chat with citations ---


def build_chat_request(
    config: FrozenConfig, query: str, docs: Sequence[ContextDocument]
) -> RemoteRequest:
    prompt = (
        "You are a research assistant. Answer the user query using ONLY the "
        "provided context. If the information is not present, say so. ALWAYS "
        "cite the source titles in brackets like [Source Title].\n\n"
        f"CONTEXT:\n{format_sources(docs)}\n\n"
        f"QUERY: {query}"
    )
    return RemoteRequest(model=config.text_model, contents=prompt)


def cite_sources(text: str, docs: Sequence[ContextDocument]) -> tuple[str, ...]:
    """Titles whose exact ``[title]`` substring appears in ``text``.

    This is a literal containment check, in document order. Titles differing
    only in case or whitespace do not match.
    """
    return tuple(d.title for d in docs if f"[{d.title}]" in text)


def handle_chat_response(
    envelope: ResponseEnvelope, docs: Sequence[ContextDocument]
) -> NotebookAnswer:
    """Answer text and cited titles; an empty response yields the not-found text."""
    text = handle_text(envelope, default=NOT_FOUND_ANSWER)
    return NotebookAnswer(text=text, sources=cite_sources(text, docs))


# --- Audio overview ---


def build_audio_overview_request(
    config: FrozenConfig, docs: Sequence[ContextDocument]
) -> RemoteRequest:
    """Two-host podcast script rendered with multi-speaker TTS."""
    prompt = (
        "Create a lively, deep-dive educational podcast conversation between Joe "
        "and Jane about these documents.\n"
        "Joe is energetic and asks great questions. Jane is an expert and explains "
        "things clearly.\n"
        "Focus on the most interesting insights from the sources.\n\n"
        "Joe: How's it going today Jane?\n"
        "Jane: Great! I've been looking at these documents and...\n\n"
        f"SOURCES:\n{format_sources(docs)}"
    )
    speech = types.SpeechConfig(
        multi_speaker_voice_config=types.MultiSpeakerVoiceConfig(
            speaker_voice_configs=[
                types.SpeakerVoiceConfig(
                    speaker=speaker,
                    voice_config=types.VoiceConfig(
                        prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice)
                    ),
                )
                for speaker, voice in PODCAST_VOICES
            ]
        )
    )
    return RemoteRequest(
        model=config.tts_model,
        contents=prompt,
        config=types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=speech,
        ),
    )


def handle_audio_overview_response(envelope: ResponseEnvelope) -> str:
    """Base64 PCM16 audio, ready for ``decode_pcm16``."""
    audio = envelope.first_inline_data()
    if audio is None:
        raise MalformedResponseError(
            "Audio generation returned no audio data", raw_text=envelope.text
        )
    return audio.to_base64()


# --- Quiz ---


def build_quiz_request(
    config: FrozenConfig,
    docs: Sequence[ContextDocument],
    *,
    num_questions: int = 5,
) -> RemoteRequest:
    if num_questions < 1:
        raise ValueError("num_questions must be >= 1")
    prompt = (
        f"Based on these sources, write a multiple-choice quiz with {num_questions} "
        "questions. Each question has 4 options, the zero-based index of the "
        "correct option, and a one-sentence explanation that cites the source. "
        "Return ONLY JSON."
    )
    return RemoteRequest(
        model=config.text_model,
        contents=f"{prompt}\n\nCONTEXT:\n{format_sources(docs)}",
        config=types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=Quiz,
        ),
        schema=Quiz,
    )


def handle_quiz_response(envelope: ResponseEnvelope) -> Quiz:
    return handle_structured(envelope, Quiz)
