"""External media collaborators: audio lookup, storage upload, transcription."""

from .audio import AudioLink, YouTubeAudioClient
from .storage import CloudinaryStorage
from .transcription import SpeechToTextClient

__all__ = [
    "AudioLink",
    "YouTubeAudioClient",
    "CloudinaryStorage",
    "SpeechToTextClient",
]
