"""Video notes service: YouTube video id in, transcript and study notes out.

Each call runs one sequential chain of awaited network calls:

    audio link lookup -> download + upload -> transcription -> generation

Nothing is shared between calls beyond the injected collaborators, which
are stateless apart from their configuration. Collaborator errors
propagate; only the generation step is fail-soft (see StudyNotesGenerator).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from app.core.logging import get_logger
from app.modules.media.audio import AudioLink
from app.modules.study_notes.main import StudyNotesGenerator
from app.modules.study_notes.models import Note, RelevanceBucket

logger = get_logger(__name__)


class AudioLinkFetcher(Protocol):
    async def fetch_audio_link(self, video_id: str) -> AudioLink: ...


class AudioUploader(Protocol):
    async def download_and_upload(self, url: str) -> str: ...


class Transcriber(Protocol):
    async def transcribe(self, url: str) -> str: ...


@dataclass
class TranscribedVideo:
    video_id: str
    audio: AudioLink
    hosted_url: str
    text: str


@dataclass
class VideoNotes:
    video: TranscribedVideo
    notes: list[Note]


@dataclass
class VideoRelevance:
    video: TranscribedVideo
    buckets: RelevanceBucket


class VideoNotesService:
    def __init__(
        self,
        *,
        audio: AudioLinkFetcher,
        storage: AudioUploader,
        transcriber: Transcriber,
        notes: StudyNotesGenerator,
    ) -> None:
        self.audio = audio
        self.storage = storage
        self.transcriber = transcriber
        self.notes = notes

    async def transcribe_video(self, video_id: str) -> TranscribedVideo:
        ctx = {"video_id": video_id}
        audio = await self.audio.fetch_audio_link(video_id)
        logger.info("Fetched audio link (%s)", audio.title or "untitled", extra=ctx)

        hosted_url = await self.storage.download_and_upload(audio.link or "")
        logger.info("Audio hosted at %s", hosted_url, extra=ctx)

        text = await self.transcriber.transcribe(hosted_url)
        logger.info("Transcribed %d characters", len(text), extra=ctx)
        return TranscribedVideo(
            video_id=video_id, audio=audio, hosted_url=hosted_url, text=text
        )

    async def convert(self, video_id: str, note_type: Optional[str] = None) -> VideoNotes:
        """Transcribe the video and turn the transcript into study notes."""
        logger.info("Converting video (note type: %s)", note_type, extra={"video_id": video_id})
        video = await self.transcribe_video(video_id)
        notes = await self.notes.generate_notes(video.text)
        return VideoNotes(video=video, notes=notes)

    async def analyze(self, video_id: str, user_prompt: str) -> VideoRelevance:
        """Transcribe the video and bucket its topics by relevance to ``user_prompt``."""
        video = await self.transcribe_video(video_id)
        buckets = await self.notes.generate_relevance_notes(video.text, user_prompt)
        return VideoRelevance(video=video, buckets=buckets)
