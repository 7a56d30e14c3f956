from __future__ import annotations

import pytest

from app.core.config import GenerationSettings
from app.modules.study_notes.main import StudyNotesGenerator
from app.modules.video_notes.main import VideoNotesService
from tests.fakes import FakeAudio, FakeStorage, FakeTranscriber, ScriptedGenerator


@pytest.fixture
def gen_settings() -> GenerationSettings:
    return GenerationSettings()


@pytest.fixture
def make_notes_service(gen_settings):
    def _make(*responses) -> tuple[StudyNotesGenerator, ScriptedGenerator]:
        scripted = ScriptedGenerator(*responses)
        return StudyNotesGenerator(scripted, gen_settings), scripted

    return _make


@pytest.fixture
def make_video_service(make_notes_service):
    def _make(*responses, audio=None, storage=None, transcriber=None):
        notes, scripted = make_notes_service(*responses)
        svc = VideoNotesService(
            audio=audio or FakeAudio(),
            storage=storage or FakeStorage(),
            transcriber=transcriber or FakeTranscriber(),
            notes=notes,
        )
        return svc, scripted

    return _make
