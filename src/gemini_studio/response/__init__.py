"""Response processing: envelopes, JSON extraction and output schemas."""

from .envelope import InlineDataPart, ResponseEnvelope, ResponsePart, TextPart
from .json_extraction import extract_json, extract_structured
from .schemas import FAQ, KeyTerm, NotebookGuide, Quiz, QuizQuestion, Slide, SpeechAnalysis

__all__ = [  # noqa: RUF022
    "ResponseEnvelope",
    "ResponsePart",
    "TextPart",
    "InlineDataPart",
    "extract_json",
    "extract_structured",
    "NotebookGuide",
    "FAQ",
    "KeyTerm",
    "Quiz",
    "QuizQuestion",
    "Slide",
    "SpeechAnalysis",
]
