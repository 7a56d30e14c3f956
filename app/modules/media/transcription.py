"""Speech-to-text through the RapidAPI ``speech-to-text-ai`` service."""

from __future__ import annotations

from typing import Optional

import httpx

from app.core.config import RapidAPISettings
from app.core.errors import UpstreamServiceError
from app.core.logging import get_logger
from app.modules.media.http import borrow_client, error_detail

logger = get_logger(__name__)


class SpeechToTextClient:
    service = "speech-to-text-ai"

    def __init__(
        self, cfg: RapidAPISettings, client: Optional[httpx.AsyncClient] = None
    ) -> None:
        self.cfg = cfg
        self._client = client

    async def transcribe(self, url: str) -> str:
        """Transcribe the audio hosted at ``url`` and return its text."""
        headers = {
            "x-rapidapi-key": self.cfg.api_key,
            "x-rapidapi-host": self.cfg.transcribe_host,
            "Content-Type": "application/x-www-form-urlencoded",
        }
        params = {"url": url, "lang": self.cfg.transcribe_lang, "task": "transcribe"}
        async with borrow_client(self._client, self.cfg.transcribe_timeout) as client:
            r = await client.post(
                f"{self.cfg.transcribe_base_url}/transcribe",
                params=params,
                headers=headers,
            )
        if not r.is_success:
            raise UpstreamServiceError(self.service, r.status_code, error_detail(r))

        text = r.json().get("text")
        if not isinstance(text, str):
            logger.warning("Transcription response carried no text for %s", url)
            return ""
        return text
