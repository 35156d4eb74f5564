"""Studio client: runs request builders against the Gemini API.

Each public coroutine builds a request, resolves the API key (failing before
any provider client is created when it is missing), performs exactly one
remote call (or one submit plus polls for video), and hands the response to
the paired handler. The client holds no mutable state between calls.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Sequence
import logging
from typing import Any

from google import genai

from .audio.pcm import AudioSampleBuffer, decode_pcm16
from .builders.code import build_code_execution_request, handle_code_execution_response
from .builders.grounding import (
    build_maps_request,
    build_search_request,
    build_video_search_request,
    handle_grounded_response,
)
from .builders.media import (
    build_image_edit_request,
    build_video_request,
    handle_image_response,
    handle_video_job,
    to_async_job,
)
from .builders.notebook import (
    build_audio_overview_request,
    build_chat_request,
    build_notebook_guide_request,
    build_quiz_request,
    handle_audio_overview_response,
    handle_chat_response,
    handle_notebook_guide_response,
    handle_quiz_response,
)
from .builders.presentation import (
    build_expand_presentation_request,
    build_presentation_request,
    build_slide_visual_request,
    handle_slide_visual_response,
    handle_slides_response,
)
from .builders.speech import (
    build_speech_analysis_request,
    build_transcription_request,
    build_translation_request,
    handle_speech_analysis_response,
    handle_transcription_response,
    handle_translation_response,
)
from .client_errors import to_remote_call_failed
from .config import FrozenConfig, require_api_key, resolve_config
from .core.types import (
    AsyncJob,
    ContextDocument,
    Failure,
    GeoLocation,
    GroundedAnswer,
    NotebookAnswer,
    RemoteRequest,
    Result,
    Success,
)
from .exceptions import StudioError
from .jobs.poller import wait_for_completion
from .response.envelope import ResponseEnvelope
from .response.schemas import NotebookGuide, Quiz, Slide, SpeechAnalysis
from .telemetry import TelemetryContext, TelemetryContextProtocol
from .tools.selector import Capability, parse_capabilities

logger = logging.getLogger(__name__)

type ClientFactory = Callable[[str], Any]


def _default_client_factory(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


class StudioClient:
    """Async facade over every studio capability.

    Args:
        config: Frozen configuration; resolved from the environment if omitted.
        client_factory: Builds a provider client from an API key. Defaults to
            ``google.genai.Client``; tests inject fakes here.
        telemetry: Optional telemetry context.
        sleep: Awaitable sleep used between video polls.
    """

    def __init__(
        self,
        config: FrozenConfig | None = None,
        *,
        client_factory: ClientFactory | None = None,
        telemetry: TelemetryContextProtocol | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.config = config or resolve_config()
        self._client_factory = client_factory or _default_client_factory
        self._tele = telemetry or TelemetryContext()
        self._sleep = sleep

    # --- Plumbing ---

    def _provider(self) -> tuple[Any, str]:
        api_key = require_api_key(self.config)
        return self._client_factory(api_key), api_key

    async def _generate(self, request: RemoteRequest, operation: str) -> ResponseEnvelope:
        provider, _ = self._provider()
        logger.debug("Calling %s for %s", request.model, operation)
        with self._tele("studio.generate", operation=operation, model=request.model):
            try:
                response = await provider.aio.models.generate_content(
                    model=request.model,
                    contents=request.contents,
                    config=request.config,
                )
            except Exception as e:
                raise to_remote_call_failed(e, operation) from e
        return ResponseEnvelope.from_sdk(response)

    @staticmethod
    def _capabilities(enabled: Iterable[Capability | str]) -> frozenset[Capability]:
        return parse_capabilities(enabled)

    # --- Grounding plugins ---

    async def search(self, query: str) -> GroundedAnswer:
        envelope = await self._generate(build_search_request(self.config, query), "search")
        return handle_grounded_response(envelope)

    async def maps_query(
        self, query: str, location: GeoLocation | None = None
    ) -> GroundedAnswer:
        request = build_maps_request(self.config, query, location)
        return handle_grounded_response(await self._generate(request, "maps"))

    async def search_videos(self, query: str) -> GroundedAnswer:
        request = build_video_search_request(self.config, query)
        return handle_grounded_response(await self._generate(request, "video_search"))

    async def execute_code(self, code: str) -> str:
        request = build_code_execution_request(self.config, code)
        return handle_code_execution_response(await self._generate(request, "code"))

    # --- Notebook ---

    async def notebook_guide(self, docs: Sequence[ContextDocument]) -> NotebookGuide:
        request = build_notebook_guide_request(self.config, docs)
        return handle_notebook_guide_response(await self._generate(request, "guide"))

    async def chat(self, query: str, docs: Sequence[ContextDocument]) -> NotebookAnswer:
        request = build_chat_request(self.config, query, docs)
        return handle_chat_response(await self._generate(request, "chat"), docs)

    async def audio_overview(self, docs: Sequence[ContextDocument]) -> str:
        """Podcast-style overview as base64 PCM16 (24 kHz mono)."""
        request = build_audio_overview_request(self.config, docs)
        return handle_audio_overview_response(await self._generate(request, "audio"))

    async def audio_overview_samples(
        self, docs: Sequence[ContextDocument]
    ) -> AudioSampleBuffer:
        return decode_pcm16(await self.audio_overview(docs))

    async def quiz(self, docs: Sequence[ContextDocument], *, num_questions: int = 5) -> Quiz:
        request = build_quiz_request(self.config, docs, num_questions=num_questions)
        return handle_quiz_response(await self._generate(request, "quiz"))

    # --- Presentations ---

    async def presentation(
        self,
        topic: str,
        knowledge_base: Sequence[ContextDocument | str] = (),
        *,
        location: str | None = None,
        enabled: Iterable[Capability | str] = (),
    ) -> list[Slide]:
        request = build_presentation_request(
            self.config,
            topic,
            knowledge_base,
            location=location,
            enabled=self._capabilities(enabled),
        )
        return handle_slides_response(await self._generate(request, "presentation"))

    async def expand_presentation(
        self,
        topic: str,
        slides: Sequence[Slide],
        knowledge_base: Sequence[ContextDocument | str] = (),
        *,
        enabled: Iterable[Capability | str] = (),
    ) -> list[Slide]:
        request = build_expand_presentation_request(
            self.config, topic, slides, knowledge_base, enabled=self._capabilities(enabled)
        )
        return handle_slides_response(await self._generate(request, "expand"))

    async def slide_visual(self, title: str, bullets: Sequence[str] = ()) -> str:
        request = build_slide_visual_request(self.config, title, bullets)
        return handle_slide_visual_response(await self._generate(request, "slide_visual"))

    async def slide_visuals(
        self, slides: Sequence[Slide], *, start_index: int = 0
    ) -> dict[int, Result[str, StudioError]]:
        """Generate visuals for several slides concurrently.

        Each slide's outcome is keyed by its deck index (``start_index`` plus
        its position). A failing slide never affects the others.
        """

        async def _one(index: int, slide: Slide) -> tuple[int, Result[str, StudioError]]:
            try:
                return index, Success(await self.slide_visual(slide.title, slide.bullets))
            except StudioError as e:
                logger.warning("Visual for slide %d failed: %s", index, e)
                return index, Failure(e)

        pairs = await asyncio.gather(
            *(_one(start_index + i, s) for i, s in enumerate(slides))
        )
        return dict(pairs)

    # --- Images and video ---

    async def edit_image(self, image: bytes | str, prompt: str) -> str:
        request = build_image_edit_request(self.config, image, prompt)
        return handle_image_response(await self._generate(request, "image_edit"))

    async def educational_video(self, prompt: str, *, deadline: float | None = None) -> str:
        """Generate a video and return its URI with the access key appended.

        Polls every ``config.poll_interval_seconds`` with no ceiling unless
        ``deadline`` (seconds) is given.
        """
        provider, api_key = self._provider()
        request = build_video_request(self.config, prompt)

        async def submit() -> AsyncJob:
            try:
                operation = await provider.aio.models.generate_videos(
                    model=request.model,
                    prompt=request.prompt,
                    config=request.config,
                )
            except Exception as e:
                raise to_remote_call_failed(e, "video.submit") from e
            logger.info("Submitted video job %s", getattr(operation, "name", None))
            return to_async_job(operation)

        async def poll(job: AsyncJob) -> AsyncJob:
            return to_async_job(await provider.aio.operations.get(job.raw))

        job = await wait_for_completion(
            submit,
            poll,
            self.config.poll_interval_seconds,
            deadline=deadline,
            sleep=self._sleep,
            telemetry=self._tele,
        )
        return handle_video_job(job, api_key)

    # --- Speech ---

    async def transcribe(self, audio: bytes | str, mime_type: str) -> str:
        request = build_transcription_request(self.config, audio, mime_type)
        return handle_transcription_response(await self._generate(request, "transcribe"))

    async def translate(self, text: str, target_language: str) -> str:
        request = build_translation_request(self.config, text, target_language)
        return handle_translation_response(await self._generate(request, "translate"), text)

    async def speech_analysis(
        self,
        transcript: str,
        knowledge_base: Sequence[ContextDocument | str] = (),
        *,
        enabled: Iterable[Capability | str] = (),
    ) -> SpeechAnalysis:
        request = build_speech_analysis_request(
            self.config, transcript, knowledge_base, enabled=self._capabilities(enabled)
        )
        return handle_speech_analysis_response(
            await self._generate(request, "speech_analysis")
        )
