from __future__ import annotations

from fastapi import Depends

from app.core.config import Settings, get_settings
from app.modules.media import CloudinaryStorage, SpeechToTextClient, YouTubeAudioClient
from app.modules.study_notes import AgentTextGenerator, StudyNotesGenerator
from app.modules.video_notes import VideoNotesService


def get_study_notes_generator(
    settings: Settings = Depends(get_settings),
) -> StudyNotesGenerator:
    """Build the generation pipeline from settings; tests override this."""
    return StudyNotesGenerator(
        AgentTextGenerator(settings.generation), settings.generation
    )


def get_video_notes_service(
    settings: Settings = Depends(get_settings),
    notes: StudyNotesGenerator = Depends(get_study_notes_generator),
) -> VideoNotesService:
    return VideoNotesService(
        audio=YouTubeAudioClient(settings.rapidapi),
        storage=CloudinaryStorage(settings.cloudinary),
        transcriber=SpeechToTextClient(settings.rapidapi),
        notes=notes,
    )
