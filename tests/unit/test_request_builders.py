import base64
import json
from types import SimpleNamespace

from google.genai import types
import pytest

from gemini_studio.builders import (
    NOT_FOUND_ANSWER,
    PNG_DATA_URI_PREFIX,
    build_audio_overview_request,
    build_chat_request,
    build_code_execution_request,
    build_expand_presentation_request,
    build_image_edit_request,
    build_maps_request,
    build_notebook_guide_request,
    build_presentation_request,
    build_quiz_request,
    build_search_request,
    build_slide_visual_request,
    build_speech_analysis_request,
    build_transcription_request,
    build_video_request,
    build_video_search_request,
    cite_sources,
    handle_audio_overview_response,
    handle_chat_response,
    handle_image_response,
    handle_notebook_guide_response,
    handle_quiz_response,
    handle_slides_response,
    handle_speech_analysis_response,
    handle_translation_response,
    handle_video_job,
    knowledge_entries,
    to_async_job,
)
from gemini_studio.core.types import AsyncJob, ContextDocument, GeoLocation
from gemini_studio.exceptions import (
    JobPollFailedError,
    MalformedResponseError,
    RemoteCallFailedError,
)
from gemini_studio.response.envelope import InlineDataPart, ResponseEnvelope, TextPart
from gemini_studio.response.schemas import NotebookGuide, Quiz, Slide, SpeechAnalysis
from gemini_studio.tools.selector import Capability

pytestmark = pytest.mark.unit

DOCS = (
    ContextDocument("Physics 101", "Energy is conserved."),
    ContextDocument("Unrelated Doc", "Cooking with herbs."),
)


def _text(body: str) -> ResponseEnvelope:
    return ResponseEnvelope(parts=(TextPart(body),))


# --- Citations ---


def test_citation_is_exact_bracketed_title():
    answer = handle_chat_response(_text("Energy is conserved [Physics 101]."), DOCS)
    assert answer.sources == ("Physics 101",)


@pytest.mark.parametrize(
    "text",
    [
        "Energy is conserved (Physics 101).",
        "Energy is conserved [physics 101].",
        "Energy is conserved [ Physics 101 ].",
        "Physics 101 says energy is conserved.",
    ],
)
def test_citation_requires_literal_match(text):
    assert cite_sources(text, DOCS) == ()


def test_citations_follow_document_order():
    text = "[Unrelated Doc] and [Physics 101]"
    assert cite_sources(text, DOCS) == ("Physics 101", "Unrelated Doc")


def test_empty_chat_response_uses_not_found_text():
    answer = handle_chat_response(ResponseEnvelope(), DOCS)
    assert answer.text == NOT_FOUND_ANSWER
    assert answer.sources == ()


def test_chat_prompt_carries_sources_and_query(config):
    req = build_chat_request(config, "What is conserved?", DOCS)
    assert "SOURCE: Physics 101\nCONTENT: Energy is conserved." in req.contents
    assert "\n---\n" in req.contents
    assert req.contents.endswith("QUERY: What is conserved?")


# --- Structured generation ---


def test_structured_requests_declare_schema_and_keep_local_validator(config):
    guide = build_notebook_guide_request(config, DOCS)
    quiz = build_quiz_request(config, DOCS, num_questions=3)
    deck = build_presentation_request(config, "Entropy")
    speech = build_speech_analysis_request(config, "hola")

    for req, schema in (
        (guide, NotebookGuide),
        (quiz, Quiz),
        (deck, list[Slide]),
        (speech, SpeechAnalysis),
    ):
        assert req.config.response_mime_type == "application/json"
        assert req.config.response_schema is not None
        assert req.schema == schema


def test_notebook_guide_parses_fenced_response():
    body = {
        "summary": "s",
        "faqs": [{"question": "q", "answer": "a"}],
        "keyTerms": [{"term": "t", "definition": "d"}],
        "studyGuide": "g",
    }
    guide = handle_notebook_guide_response(_text(f"```json\n{json.dumps(body)}\n```"))
    assert guide.key_terms[0].term == "t"
    assert guide.study_guide == "g"


def test_structured_empty_response_is_malformed():
    with pytest.raises(MalformedResponseError):
        handle_notebook_guide_response(ResponseEnvelope())


def test_quiz_answer_index_must_point_at_an_option():
    body = {
        "title": "T",
        "questions": [
            {"question": "q", "options": ["a", "b"], "answerIndex": 2, "explanation": "e"}
        ],
    }
    with pytest.raises(MalformedResponseError):
        handle_quiz_response(_text(json.dumps(body)))


def test_slides_and_speech_analysis_handlers():
    slides = handle_slides_response(
        _text('[{"title": "T", "bullets": ["b"], "speakerNotes": "n", "footer": "f"}]')
    )
    assert slides == [Slide(title="T", bullets=["b"], speaker_notes="n", footer="f")]

    analysis = handle_speech_analysis_response(
        _text('Result: {"translation": "hello", "summary": "s", "ragUsed": true}')
    )
    assert analysis.rag_used is True


def test_presentation_attaches_search_only_when_enabled(config):
    plain = build_presentation_request(config, "Entropy", ["[A]: a"], location="Lisbon")
    assert plain.config.tools is None
    assert "Context/Location: Lisbon" in plain.contents
    assert "[A]: a" in plain.contents

    searched = build_presentation_request(
        config, "Entropy", enabled={Capability.WEB_SEARCH, Capability.MAPS}
    )
    # Maps is enabled but presentations only support web search.
    assert len(searched.config.tools) == 1
    assert searched.config.tools[0].google_search is not None
    assert "Context/Location: General" in searched.contents


def test_expand_presentation_embeds_current_slides(config):
    current = [Slide(title="Intro", bullets=["x"], speaker_notes="n")]
    req = build_expand_presentation_request(config, "Entropy", current)
    assert '"speakerNotes": "n"' in req.contents
    assert "footer" not in req.contents
    assert "Add 3 more unique slides" in req.contents


def test_speech_analysis_defaults(config):
    req = build_speech_analysis_request(config, "hola", enabled={Capability.WEB_SEARCH})
    assert "No personal documents provided." in req.contents
    assert req.config.thinking_config.thinking_budget == 16000
    assert req.config.tools[0].google_search is not None


def test_knowledge_entries_accept_documents_and_rendered_entries():
    assert knowledge_entries([DOCS[0], "[Notes]: already rendered"]) == [
        "[Physics 101]: Energy is conserved.",
        "[Notes]: already rendered",
    ]


def test_deck_and_speech_requests_render_knowledge_documents(config):
    deck = build_presentation_request(config, "Entropy", DOCS)
    expected = "[Physics 101]: Energy is conserved.\n---\n[Unrelated Doc]: Cooking with herbs."
    assert expected in deck.contents

    current = [Slide(title="Intro", bullets=["x"], speaker_notes="n")]
    expanded = build_expand_presentation_request(config, "Entropy", current, DOCS[:1])
    assert "[Physics 101]: Energy is conserved." in expanded.contents

    speech = build_speech_analysis_request(config, "hola", DOCS[:1])
    assert "KNOWLEDGE BASE CONTEXT:\n[Physics 101]: Energy is conserved." in speech.contents
    assert "No personal documents provided." not in speech.contents


# --- Grounding and prompt framings ---


def test_search_and_maps_requests(config):
    search = build_search_request(config, "entropy")
    assert search.config.tools[0].google_search is not None

    maps = build_maps_request(config, "museums", GeoLocation(38.7, -9.1))
    assert maps.model == config.maps_model
    assert maps.config.tool_config.retrieval_config.lat_lng.latitude == 38.7

    no_location = build_maps_request(config, "museums")
    assert no_location.config.tools[0].google_maps is not None
    assert no_location.config.tool_config is None


def test_prompt_framed_capabilities_declare_no_extra_tools(config):
    # Code execution is pure prompt framing; video search rides on web search.
    code = build_code_execution_request(config, "print(2 + 2)")
    assert code.config.tools is None
    assert "CODE:\nprint(2 + 2)" in code.contents
    assert "Python execution environment" in code.config.system_instruction

    videos = build_video_search_request(config, "photosynthesis")
    assert len(videos.config.tools) == 1
    assert videos.config.tools[0].google_search is not None
    assert videos.contents == 'Educational YouTube videos for: "photosynthesis"'


# --- Media ---


def test_image_handler_takes_first_image_part():
    env = ResponseEnvelope(
        parts=(
            TextPart("A caption"),
            InlineDataPart(data=b"first", mime_type="image/jpeg"),
            InlineDataPart(data=b"second", mime_type="image/png"),
        )
    )
    uri = handle_image_response(env)
    assert uri == PNG_DATA_URI_PREFIX + base64.b64encode(b"first").decode()


def test_image_handler_without_image_is_malformed():
    with pytest.raises(MalformedResponseError):
        handle_image_response(_text("I cannot draw that"))


def test_image_edit_accepts_data_uri(config):
    payload = base64.b64encode(b"png-bytes").decode()
    req = build_image_edit_request(config, PNG_DATA_URI_PREFIX + payload, "make it blue")
    image_part, prompt = req.contents
    assert image_part.inline_data.data == b"png-bytes"
    assert image_part.inline_data.mime_type == "image/png"
    assert prompt == "make it blue"


def test_slide_visual_prompt(config):
    req = build_slide_visual_request(config, "Entropy", ["disorder", "heat"])
    assert req.contents == "Infographic for Entropy. Highlights: disorder, heat"
    assert req.model == config.image_model


def test_audio_overview_request_and_handler(config):
    req = build_audio_overview_request(config, DOCS)
    speakers = req.config.speech_config.multi_speaker_voice_config.speaker_voice_configs
    assert [(s.speaker, s.voice_config.prebuilt_voice_config.voice_name) for s in speakers] == [
        ("Joe", "Kore"),
        ("Jane", "Puck"),
    ]
    env = ResponseEnvelope(parts=(InlineDataPart(data=bytes([0, 0x40]), mime_type="audio/pcm"),))
    assert handle_audio_overview_response(env) == "AEA="

    with pytest.raises(MalformedResponseError):
        handle_audio_overview_response(ResponseEnvelope())


def test_transcription_request_decodes_base64_audio(config):
    req = build_transcription_request(config, base64.b64encode(b"wav").decode(), "audio/webm")
    audio_part, instruction = req.contents
    assert audio_part.inline_data.data == b"wav"
    assert audio_part.inline_data.mime_type == "audio/webm"
    assert instruction == "Transcribe this educational recording."


def test_translation_falls_back_to_original():
    assert handle_translation_response(ResponseEnvelope(), "bonjour") == "bonjour"
    assert handle_translation_response(_text("hello"), "bonjour") == "hello"


def test_video_request_config(config):
    req = build_video_request(config, "the water cycle")
    assert req.prompt == "An educational visualization for: the water cycle."
    assert isinstance(req.config, types.GenerateVideosConfig)
    assert req.config.number_of_videos == 1
    assert req.config.aspect_ratio == "16:9"


def test_video_job_appends_credential():
    job = AsyncJob(handle="ops/1", done=True, uri="https://example/video.mp4")
    assert handle_video_job(job, "XYZ") == "https://example/video.mp4&key=XYZ"


def test_video_job_failure_and_missing_result():
    with pytest.raises(RemoteCallFailedError, match="safety"):
        handle_video_job(AsyncJob(handle="ops/1", done=True, error="safety filter"), "k")
    with pytest.raises(JobPollFailedError):
        handle_video_job(AsyncJob(handle="ops/1", done=True), "k")
    with pytest.raises(JobPollFailedError):
        handle_video_job(AsyncJob(handle="ops/1", done=False), "k")


def test_to_async_job_reads_operation_fields():
    video = SimpleNamespace(video=SimpleNamespace(uri="https://v"))
    op = SimpleNamespace(
        name="ops/9",
        done=True,
        error=None,
        response=SimpleNamespace(generated_videos=[video]),
    )
    job = to_async_job(op)
    assert (job.handle, job.done, job.uri, job.error) == ("ops/9", True, "https://v", None)
    assert job.raw is op

    failed = to_async_job(SimpleNamespace(name="ops/9", done=True, error={"message": "boom"}, response=None))
    assert failed.error == "boom"
    assert failed.uri is None


@pytest.mark.parametrize("payload", ["not*base64!", "abc", "data:audio/webm;base64,%%%"])
def test_transcription_rejects_malformed_base64(config, payload):
    with pytest.raises(ValueError, match="audio must be bytes or base64 text"):
        build_transcription_request(config, payload, "audio/webm")


def test_transcription_accepts_data_uri_and_raw_bytes(config):
    uri = "data:audio/webm;base64," + base64.b64encode(b"wav").decode()
    from_uri = build_transcription_request(config, uri, "audio/webm")
    from_bytes = build_transcription_request(config, b"wav", "audio/webm")
    assert from_uri.contents[0].inline_data.data == b"wav"
    assert from_bytes.contents[0].inline_data.data == b"wav"


def test_image_edit_rejects_malformed_base64(config):
    with pytest.raises(ValueError, match="image must be bytes or base64 text"):
        build_image_edit_request(config, "not*base64!", "make it blue")


@pytest.mark.parametrize(
    ("job", "succeeded"),
    [
        (AsyncJob(handle="ops/1", done=True, uri="https://v"), True),
        (AsyncJob(handle="ops/1", done=False, uri="https://v"), False),
        (AsyncJob(handle="ops/1", done=True, uri="https://v", error="blocked"), False),
        (AsyncJob(handle="ops/1", done=True), False),
    ],
)
def test_job_success_requires_done_uri_and_no_error(job, succeeded):
    assert job.succeeded is succeeded


def test_video_job_with_uri_and_error_reports_the_failure():
    job = AsyncJob(handle="ops/1", done=True, uri="https://v", error="blocked")
    with pytest.raises(RemoteCallFailedError, match="blocked"):
        handle_video_job(job, "k")
