"""Output schemas for structured generation calls.

Each model is declared to the remote service as ``response_schema`` and is
used again locally to validate the extracted JSON. Field names are
snake_case in Python and camelCase on the wire.
"""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class FAQ(_WireModel):
    question: str
    answer: str


class KeyTerm(_WireModel):
    term: str
    definition: str


class NotebookGuide(_WireModel):
    """Summary, FAQs, key terms and a study guide for a set of sources."""

    summary: str
    faqs: list[FAQ]
    key_terms: list[KeyTerm]
    study_guide: str


class QuizQuestion(_WireModel):
    question: str
    options: list[str] = Field(min_length=2)
    answer_index: int = Field(ge=0)
    explanation: str

    @model_validator(mode="after")
    def answer_in_range(self) -> Self:
        if self.answer_index >= len(self.options):
            raise ValueError("answer_index must point at one of the options")
        return self


class Quiz(_WireModel):
    """Multiple-choice quiz over a set of sources."""

    title: str
    questions: list[QuizQuestion]


class Slide(_WireModel):
    """One presentation slide."""

    title: str = Field(description="The title of the slide.")
    bullets: list[str] = Field(description="A list of 3-5 key points for the slide.")
    speaker_notes: str = Field(description="Detailed notes for the presenter.")
    footer: str | None = Field(default=None, description="Contextual footer text.")


class SpeechAnalysis(_WireModel):
    """Deep-research analysis of a transcript."""

    translation: str
    summary: str
    rag_used: bool
