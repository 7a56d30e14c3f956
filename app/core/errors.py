"""Exceptions shared by the media collaborators and the generation pipeline."""

from __future__ import annotations

from typing import Optional


class UpstreamServiceError(Exception):
    """Raised when an external API answers with a non-2xx status."""

    def __init__(
        self, service: str, status_code: int, detail: Optional[str] = None
    ) -> None:
        self.service = service
        self.status_code = status_code
        self.detail = detail
        msg = f"{service} returned HTTP {status_code}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class AudioLinkMissingError(Exception):
    """The audio lookup succeeded but carried no downloadable link."""

    pass


class GenerationConfigError(RuntimeError):
    """A model provider was selected without the credentials it needs."""

    pass


class ResponseFormatError(ValueError):
    """Model output did not satisfy the expected JSON contract."""

    pass
