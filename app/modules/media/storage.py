"""Cloudinary upload of downloaded audio.

Uses the signed REST upload endpoint with ``resource_type=auto`` so the
returned ``secure_url`` is a durable, publicly fetchable address the
transcription service can read.
"""

from __future__ import annotations

import hashlib
import tempfile
import time
from typing import AsyncIterable, Optional

import httpx

from app.core.config import CloudinarySettings
from app.core.errors import UpstreamServiceError
from app.core.logging import get_logger
from app.modules.media.http import borrow_client, error_detail

logger = get_logger(__name__)

SPOOL_MAX_BYTES = 8 * 1024 * 1024


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary signature: sha1 of sorted ``k=v`` pairs joined by ``&`` plus secret."""
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryStorage:
    service = "cloudinary"

    def __init__(
        self, cfg: CloudinarySettings, client: Optional[httpx.AsyncClient] = None
    ) -> None:
        self.cfg = cfg
        self._client = client

    async def upload_stream(
        self, chunks: AsyncIterable[bytes], *, filename: str = "audio.mp3"
    ) -> str:
        if not (self.cfg.cloud_name and self.cfg.api_key and self.cfg.api_secret):
            raise RuntimeError(
                "Cloudinary is not configured. Set CLOUDINARY_CLOUD_NAME, "
                "CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET."
            )

        params = {"timestamp": str(int(time.time()))}
        form = {
            **params,
            "api_key": self.cfg.api_key,
            "signature": sign_params(params, self.cfg.api_secret),
        }
        # Large files roll over from memory to disk.
        with tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_BYTES) as spool:
            async for chunk in chunks:
                spool.write(chunk)
            size = spool.tell()
            spool.seek(0)
            async with borrow_client(self._client, self.cfg.upload_timeout) as client:
                r = await client.post(
                    self.cfg.upload_url,
                    data=form,
                    files={"file": (filename, spool, "audio/mpeg")},
                )
        if not r.is_success:
            raise UpstreamServiceError(self.service, r.status_code, error_detail(r))

        url = r.json().get("secure_url")
        if not url:
            raise UpstreamServiceError(self.service, r.status_code, "missing secure_url")
        logger.info("Uploaded %d bytes to %s", size, url)
        return url

    async def download_and_upload(self, url: str) -> str:
        """Stream ``url`` straight into an upload and return the hosted URL."""
        async with borrow_client(self._client, self.cfg.upload_timeout) as client:
            async with client.stream("GET", url) as r:
                if not r.is_success:
                    raise UpstreamServiceError(
                        "audio-download", r.status_code, "Failed to download file"
                    )
                return await self.upload_stream(r.aiter_bytes())
