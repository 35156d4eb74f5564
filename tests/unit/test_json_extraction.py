import json

import pytest

from gemini_studio.exceptions import MalformedResponseError
from gemini_studio.response.json_extraction import extract_json, extract_structured
from gemini_studio.response.schemas import NotebookGuide, Slide

pytestmark = pytest.mark.unit

PAYLOAD = {"title": "Entropy", "bullets": ["a", "b"], "speakerNotes": "n"}
RAW = '{"title": "Entropy", "bullets": ["a", "b"], "speakerNotes": "n"}'


@pytest.mark.parametrize(
    "text",
    [
        RAW,
        '[{"a": 1}, {"b": [2, 3]}]',
        '  {"nested": {"deep": true}}\n',
    ],
)
def test_verbatim_json_round_trips(text):
    assert extract_json(text) == json.loads(text)


def test_fenced_json_block_is_recovered():
    text = f"Here is your deck:\n```json\n{RAW}\n```\nEnjoy!"
    assert extract_json(text) == PAYLOAD


def test_untagged_fence_is_recovered():
    text = f"```\n{RAW}\n```"
    assert extract_json(text) == PAYLOAD


def test_prose_around_single_object_is_recovered():
    text = f"Sure! The answer is {RAW} -- let me know if you need more."
    assert extract_json(text) == PAYLOAD


def test_fenced_array_is_recovered():
    text = 'Slides:\n```json\n[{"x": 1}]\n```'
    assert extract_json(text) == [{"x": 1}]


def test_no_json_raises_malformed_with_raw_text():
    text = "Sorry, I can't help with that."
    with pytest.raises(MalformedResponseError) as exc_info:
        extract_json(text)
    assert exc_info.value.raw_text == text


def test_brace_span_requires_open_before_close():
    with pytest.raises(MalformedResponseError):
        extract_json("} nothing here {")


def test_no_lenient_repair_of_trailing_commas():
    with pytest.raises(MalformedResponseError):
        extract_json('{"a": 1,}')


def test_bare_scalars_are_not_structured_results():
    with pytest.raises(MalformedResponseError):
        extract_json("null")
    with pytest.raises(MalformedResponseError):
        extract_json("42")


def test_unparseable_fence_falls_through_to_brace_span():
    text = '```json\nnot json\n``` but later {"ok": true}'
    # Brace span runs from the first "{" to the last "}".
    assert extract_json(text) == {"ok": True}


def test_extract_structured_validates_schema():
    slides = extract_structured(f"[{RAW}]", list[Slide])
    assert slides[0].speaker_notes == "n"
    assert slides[0].footer is None


def test_extract_structured_rejects_missing_required_fields():
    with pytest.raises(MalformedResponseError) as exc_info:
        extract_structured('{"summary": "only a summary"}', NotebookGuide)
    assert "schema" in str(exc_info.value)
    assert exc_info.value.raw_text == '{"summary": "only a summary"}'
