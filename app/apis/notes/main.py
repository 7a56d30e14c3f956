from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.apis.deps import get_study_notes_generator, get_video_notes_service
from app.core.errors import AudioLinkMissingError, UpstreamServiceError
from app.core.logging import get_logger
from app.modules.study_notes.main import StudyNotesGenerator
from app.modules.video_notes.main import TranscribedVideo, VideoNotesService
from .schemas import (
    ContentAnalysisRequest,
    ContentAnalysisResponse,
    ConvertRequest,
    ConvertResponse,
    ErrorResponse,
    GenerateQuestionsRequest,
    GenerateQuestionsResponse,
)

logger = get_logger(__name__)

router = APIRouter()


def _fail(status_code: int, *, error: str | None = None, message: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def _missing(value) -> bool:
    # Empty arrays and objects count as present.
    return value is None or value == "" or value == 0


def _video_error_response(e: Exception, video_id: str) -> JSONResponse:
    if isinstance(e, UpstreamServiceError):
        logger.warning("%s", e, extra={"video_id": video_id})
        return _fail(status.HTTP_400_BAD_REQUEST, message="Something went wrong")
    if isinstance(e, AudioLinkMissingError):
        return _fail(status.HTTP_400_BAD_REQUEST, error="Failed to fetch MP3 link")
    logger.exception("Video processing failed: %s", e, extra={"video_id": video_id})
    return _fail(status.HTTP_500_INTERNAL_SERVER_ERROR, error=str(e))


def _envelope(video: TranscribedVideo) -> dict:
    return {
        "video_id": video.video_id,
        "video_audio": video.audio.link,
        "audio_cloudinary_link": video.hosted_url,
        "audio_text": video.text,
        "audio_title": video.audio.title,
        "audio_file_size": video.audio.filesize,
    }


@router.post(
    "/convert-mp3",
    response_model=ConvertResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["notes"],
)
async def convert_mp3(
    req: ConvertRequest,
    svc: VideoNotesService = Depends(get_video_notes_service),
):
    """Transcribe a YouTube video and return structured study notes."""
    if not req.video_id:
        return _fail(status.HTTP_400_BAD_REQUEST, error="Video ID is required")
    try:
        result = await svc.convert(req.video_id, req.note_type)
    except Exception as e:  # noqa: BLE001
        return _video_error_response(e, req.video_id)
    return ConvertResponse(**_envelope(result.video), structure_notes=result.notes)


@router.post(
    "/content-analysis",
    response_model=ContentAnalysisResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["notes"],
)
async def content_analysis(
    req: ContentAnalysisRequest,
    svc: VideoNotesService = Depends(get_video_notes_service),
):
    """Transcribe a YouTube video and rank its topics against the user's request."""
    if not req.video_id:
        return _fail(status.HTTP_400_BAD_REQUEST, error="Video ID is required")
    try:
        result = await svc.analyze(req.video_id, req.user_prompt or "")
    except Exception as e:  # noqa: BLE001
        return _video_error_response(e, req.video_id)
    return ContentAnalysisResponse(
        **_envelope(result.video), structure_notes=result.buckets
    )


@router.post(
    "/generate-questions",
    response_model=GenerateQuestionsResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["questions"],
)
async def generate_questions(
    req: GenerateQuestionsRequest,
    notes_gen: StudyNotesGenerator = Depends(get_study_notes_generator),
):
    if _missing(req.notes) or not req.exam_type:
        return _fail(status.HTTP_400_BAD_REQUEST, message="Required data need")
    try:
        questions = await notes_gen.generate_questions(req.notes, req.exam_type)
    except Exception as e:  # noqa: BLE001
        logger.exception("Question generation failed: %s", e)
        return _fail(status.HTTP_500_INTERNAL_SERVER_ERROR, message="Internal server error")
    return GenerateQuestionsResponse(data=questions)
