"""Study notes service class.

Wraps prompt building, generation and parsing for the three tasks (notes,
exam questions, relevance analysis). Every task is fail-soft: on any error
the failure is logged and an empty result is returned, so callers treat an
empty list / empty bucket as "generation failed".

Example:
    svc = StudyNotesGenerator(AgentTextGenerator(settings.generation),
                              settings.generation)
    notes = await svc.generate_notes(transcript)
    questions = await svc.generate_questions(notes, "semester")
"""

from __future__ import annotations

from typing import Any

from app.core.config import GenerationSettings
from app.core.logging import get_logger
from app.modules.study_notes.generator import TextGenerator
from app.modules.study_notes.models import Note, QuestionAnswer, RelevanceBucket
from app.modules.study_notes.parsing import (
    parse_notes,
    parse_questions,
    parse_relevance,
)
from app.modules.study_notes.prompts import (
    build_notes_prompt,
    build_questions_prompt,
    build_relevance_prompt,
)

logger = get_logger(__name__)


class StudyNotesGenerator:
    def __init__(self, generator: TextGenerator, cfg: GenerationSettings) -> None:
        self.generator = generator
        self.cfg = cfg

    async def generate_notes(self, transcript: str) -> list[Note]:
        try:
            raw = await self.generator.generate_text(
                build_notes_prompt(transcript),
                temperature=self.cfg.notes_temperature,
            )
            return parse_notes(raw)
        except Exception as e:  # noqa: BLE001
            logger.error("Error generating notes: %s", e, extra={"task": "notes"})
            return []

    async def generate_questions(
        self, notes: Any, exam_type: str
    ) -> list[QuestionAnswer]:
        try:
            raw = await self.generator.generate_text(
                build_questions_prompt(notes, exam_type),
                temperature=self.cfg.questions_temperature,
            )
            questions = parse_questions(raw)
        except Exception as e:  # noqa: BLE001
            logger.error(
                "Error generating questions: %s", e, extra={"task": "questions"}
            )
            return []
        logger.info(
            "Generated %d questions (%d short, %d long)",
            len(questions),
            sum(1 for q in questions if q.type == "short"),
            sum(1 for q in questions if q.type == "long"),
            extra={"task": "questions"},
        )
        return questions

    async def generate_relevance_notes(
        self, transcript: str, user_prompt: str
    ) -> RelevanceBucket:
        try:
            raw = await self.generator.generate_text(
                build_relevance_prompt(transcript, user_prompt),
                temperature=self.cfg.relevance_temperature,
            )
            return parse_relevance(raw)
        except Exception as e:  # noqa: BLE001
            logger.error(
                "Failed to build relevance notes: %s", e, extra={"task": "relevance"}
            )
            return RelevanceBucket()

    @staticmethod
    def to_jsonable(result: list[Note] | list[QuestionAnswer] | RelevanceBucket) -> Any:
        """Convert a task result into plain JSON data."""
        if isinstance(result, RelevanceBucket):
            return result.model_dump()
        return [item.model_dump() for item in result]
