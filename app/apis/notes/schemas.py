from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.modules.study_notes.models import Note, QuestionAnswer, RelevanceBucket


class ConvertRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    video_id: Optional[str] = Field(default=None, alias="videoId")
    note_type: Optional[str] = Field(default=None, alias="noteType")


class ContentAnalysisRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    video_id: Optional[str] = Field(default=None, alias="videoId")
    user_prompt: Optional[str] = Field(default="", alias="userPrompt")


class GenerateQuestionsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Accepted as-is; usually the structureNotes of a previous conversion.
    notes: Any = None
    exam_type: Optional[str] = Field(default=None, alias="examType")


class VideoEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: bool = True
    video_id: str = Field(alias="videoId")
    video_audio: Optional[str] = Field(default=None, alias="videoAudio")
    audio_cloudinary_link: str = Field(alias="audioCloudinaryLink")
    audio_text: str = Field(alias="audioText")
    audio_title: Optional[str] = Field(default=None, alias="audioTitle")
    audio_file_size: int | float | None = Field(default=None, alias="audioFileSize")


class ConvertResponse(VideoEnvelope):
    structure_notes: list[Note] = Field(default_factory=list, alias="structureNotes")


class ContentAnalysisResponse(VideoEnvelope):
    structure_notes: RelevanceBucket = Field(
        default_factory=RelevanceBucket, alias="structureNotes"
    )


class GenerateQuestionsResponse(BaseModel):
    data: list[QuestionAnswer] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    status: bool = False
    error: Optional[str] = None
    message: Optional[str] = None
