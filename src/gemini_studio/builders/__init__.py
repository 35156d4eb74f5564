"""Request builders and their paired response handlers.

Builders are pure: ``(config, inputs) -> RemoteRequest``. Handlers turn a
``ResponseEnvelope`` into a domain result. ``StudioClient`` wires the two
around a network call.
"""

from .base import (
    decode_inline_payload,
    format_sources,
    handle_structured,
    handle_text,
    knowledge_entries,
)
from .code import build_code_execution_request, handle_code_execution_response
from .grounding import (
    build_maps_request,
    build_search_request,
    build_video_search_request,
    handle_grounded_response,
)
from .media import (
    PNG_DATA_URI_PREFIX,
    build_image_edit_request,
    build_video_request,
    handle_image_response,
    handle_video_job,
    to_async_job,
)
from .notebook import (
    NOT_FOUND_ANSWER,
    build_audio_overview_request,
    build_chat_request,
    build_notebook_guide_request,
    build_quiz_request,
    cite_sources,
    handle_audio_overview_response,
    handle_chat_response,
    handle_notebook_guide_response,
    handle_quiz_response,
)
from .presentation import (
    build_expand_presentation_request,
    build_presentation_request,
    build_slide_visual_request,
    handle_slide_visual_response,
    handle_slides_response,
)
from .speech import (
    build_speech_analysis_request,
    build_transcription_request,
    build_translation_request,
    handle_speech_analysis_response,
    handle_transcription_response,
    handle_translation_response,
)

__all__ = [  # noqa: RUF022
    "format_sources",
    "knowledge_entries",
    "decode_inline_payload",
    "handle_text",
    "handle_structured",
    "build_search_request",
    "build_maps_request",
    "build_video_search_request",
    "handle_grounded_response",
    "build_code_execution_request",
    "handle_code_execution_response",
    "build_notebook_guide_request",
    "handle_notebook_guide_response",
    "build_chat_request",
    "cite_sources",
    "handle_chat_response",
    "NOT_FOUND_ANSWER",
    "build_audio_overview_request",
    "handle_audio_overview_response",
    "build_quiz_request",
    "handle_quiz_response",
    "build_presentation_request",
    "build_expand_presentation_request",
    "handle_slides_response",
    "build_slide_visual_request",
    "handle_slide_visual_response",
    "build_image_edit_request",
    "handle_image_response",
    "PNG_DATA_URI_PREFIX",
    "build_video_request",
    "to_async_job",
    "handle_video_job",
    "build_transcription_request",
    "handle_transcription_response",
    "build_translation_request",
    "handle_translation_response",
    "build_speech_analysis_request",
    "handle_speech_analysis_response",
]
