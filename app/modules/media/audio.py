"""YouTube audio link lookup through the RapidAPI ``youtube-mp36`` service."""

from __future__ import annotations

from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict

from app.core.config import RapidAPISettings
from app.core.errors import AudioLinkMissingError, UpstreamServiceError
from app.core.logging import get_logger
from app.modules.media.http import borrow_client, error_detail

logger = get_logger(__name__)


class AudioLink(BaseModel):
    """Downloadable MP3 link plus the metadata the lookup reports."""

    model_config = ConfigDict(extra="allow")

    link: Optional[str] = None
    title: Optional[str] = None
    filesize: int | float | None = None


class YouTubeAudioClient:
    service = "youtube-mp36"

    def __init__(
        self, cfg: RapidAPISettings, client: Optional[httpx.AsyncClient] = None
    ) -> None:
        self.cfg = cfg
        self._client = client

    async def fetch_audio_link(self, video_id: str) -> AudioLink:
        headers = {
            "x-rapidapi-key": self.cfg.api_key,
            "x-rapidapi-host": self.cfg.audio_host,
        }
        async with borrow_client(self._client, self.cfg.audio_timeout) as client:
            r = await client.get(
                f"{self.cfg.audio_base_url}/dl",
                params={"id": video_id},
                headers=headers,
            )
        if not r.is_success:
            logger.warning(
                "Audio lookup failed with HTTP %s",
                r.status_code,
                extra={"video_id": video_id},
            )
            raise UpstreamServiceError(self.service, r.status_code, error_detail(r))

        audio = AudioLink.model_validate(r.json())
        if not audio.link:
            raise AudioLinkMissingError(f"No MP3 link returned for video {video_id}")
        return audio
