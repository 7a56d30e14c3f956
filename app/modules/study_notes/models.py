"""Pydantic models for generated study notes and exam questions.

Models are deliberately loose (extra keys allowed, no length constraints):
the shape is enforced by the parsing layer, and whatever the model emitted
beyond the required fields is passed through to the client untouched.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

QuestionType = Literal["short", "long"]


def _scalar_to_str(v: Any) -> Any:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


class Note(BaseModel):
    """One topic/subtopic entry with bullet-point description."""

    model_config = ConfigDict(extra="allow")

    title: str = ""
    subtitle: str = ""
    description: list[str] = Field(default_factory=list)

    @field_validator("title", "subtitle", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Any:
        return "" if v is None else _scalar_to_str(v)

    @field_validator("description", mode="before")
    @classmethod
    def _bullets(cls, v: Any) -> Any:
        if v is None:
            return []
        if not isinstance(v, list):
            v = [v]
        return [_scalar_to_str(b) for b in v]


class QuestionAnswer(BaseModel):
    """Exam-style question with its answer and depth label.

    ``question`` and ``answer`` keep whatever JSON value the model produced
    (a numeric answer stays numeric); only ``type`` is constrained.
    """

    model_config = ConfigDict(extra="allow")

    question: Any
    answer: Any
    type: QuestionType


class RelevanceBucket(BaseModel):
    """Transcript topics split by how well they match the user's request."""

    high_relevance: list[Note] = Field(default_factory=list)
    medium_relevance: list[Note] = Field(default_factory=list)
    low_relevance: list[Note] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.high_relevance or self.medium_relevance or self.low_relevance)
