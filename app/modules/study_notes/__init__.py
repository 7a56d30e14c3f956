"""Study notes module exports."""

from .models import Note, QuestionAnswer, RelevanceBucket
from .generator import AgentTextGenerator, TextGenerator
from .main import StudyNotesGenerator

__all__ = [
    "Note",
    "QuestionAnswer",
    "RelevanceBucket",
    "AgentTextGenerator",
    "TextGenerator",
    "StudyNotesGenerator",
]
