"""Turn raw model text into validated notes, questions or relevance buckets.

Each parser runs the same steps: pull the JSON out of a fenced block (or take
the whole text), sanitize it for the expected contract, ``json.loads`` it and
check the structure. Every parser raises ``ResponseFormatError`` on failure;
callers decide whether to fail soft.
"""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any

from pydantic import ValidationError

from app.core.errors import ResponseFormatError
from app.core.logging import get_logger
from app.modules.study_notes.models import Note, QuestionAnswer, RelevanceBucket

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)
_CONTROL_RE = re.compile(r"[\u0000-\u001f]")

QUESTION_TYPES = ("short", "long")
RELEVANCE_KEYS = ("high_relevance", "medium_relevance", "low_relevance")

logger = get_logger(__name__)


class SanitizeMode(str, Enum):
    # Array expected; a bare object (or object list without brackets) is wrapped.
    WRAP = "wrap"
    # Array expected; keep only what lies between the first "[" and last "]".
    SLICE = "slice"
    # Object expected; no array repair.
    OBJECT = "object"


def extract_fenced_block(text: str) -> str:
    """Return the interior of the first ``` / ```json block, else the text itself."""
    m = _FENCE_RE.search(text or "")
    return m.group(1) if m else (text or "")


def sanitize(text: str, mode: SanitizeMode = SanitizeMode.OBJECT) -> str:
    cleaned = _CONTROL_RE.sub("", text or "").strip()
    if mode is SanitizeMode.OBJECT or cleaned.startswith("["):
        return cleaned
    if mode is SanitizeMode.WRAP:
        return f"[{cleaned}]"

    start = cleaned.find("[")
    end = cleaned.rfind("]")
    if start < 0 or end < start:
        raise ResponseFormatError("No JSON array found in model output.")
    return cleaned[start : end + 1]


def load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ResponseFormatError(f"Invalid JSON format received: {e}") from e


def validate_notes(payload: Any) -> list[Note]:
    if not isinstance(payload, list):
        raise ResponseFormatError("Invalid Response Format: Expected an array.")
    out: list[Note] = []
    for item in payload:
        if not isinstance(item, dict):
            raise ResponseFormatError("Invalid Note: each entry must be an object.")
        try:
            out.append(Note.model_validate(item))
        except ValidationError as e:
            raise ResponseFormatError(f"Invalid Note: {e}") from e
    return out


def validate_questions(payload: Any) -> list[QuestionAnswer]:
    if not isinstance(payload, list):
        raise ResponseFormatError("Invalid Response Format: Expected an array.")
    out: list[QuestionAnswer] = []
    for item in payload:
        if (
            not isinstance(item, dict)
            or not item.get("question")
            or not item.get("answer")
            or item.get("type") not in QUESTION_TYPES
        ):
            raise ResponseFormatError(
                "Invalid Object Structure: Each entry must have 'question', "
                "'answer', and 'type' ('short' or 'long')."
            )
        try:
            out.append(QuestionAnswer.model_validate(item))
        except ValidationError as e:
            raise ResponseFormatError(f"Invalid question entry: {e}") from e
    return out


def validate_relevance(payload: Any) -> RelevanceBucket:
    """Each bucket defaults to [] on its own and drops only its own bad entries.

    Only a non-object payload fails.
    """
    if not isinstance(payload, dict):
        raise ResponseFormatError("Invalid Response Format: Expected an object.")
    buckets: dict[str, list[Note]] = {}
    for key in RELEVANCE_KEYS:
        items = payload.get(key)
        buckets[key] = []
        if not isinstance(items, list):
            continue
        for item in items:
            if not isinstance(item, dict):
                continue
            try:
                buckets[key].append(Note.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping %s entry: %s", key, e, extra={"task": "relevance"})
    return RelevanceBucket(**buckets)


def parse_notes(raw: str) -> list[Note]:
    text = sanitize(extract_fenced_block(raw), SanitizeMode.WRAP)
    return validate_notes(load_json(text))


def parse_questions(raw: str) -> list[QuestionAnswer]:
    text = sanitize(extract_fenced_block(raw), SanitizeMode.SLICE)
    return validate_questions(load_json(text))


def parse_relevance(raw: str) -> RelevanceBucket:
    text = sanitize(extract_fenced_block(raw), SanitizeMode.OBJECT)
    return validate_relevance(load_json(text))
