from .main import TranscribedVideo, VideoNotes, VideoNotesService, VideoRelevance

__all__ = ["TranscribedVideo", "VideoNotes", "VideoNotesService", "VideoRelevance"]
