import hashlib

import httpx
import pytest

from app.core.config import CloudinarySettings, RapidAPISettings
from app.core.errors import AudioLinkMissingError, UpstreamServiceError
from app.modules.media import storage
from app.modules.media.audio import YouTubeAudioClient
from app.modules.media.storage import CloudinaryStorage, sign_params
from app.modules.media.transcription import SpeechToTextClient


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def rapid() -> RapidAPISettings:
    return RapidAPISettings(RAPIDAPI_KEY="test-key")


@pytest.fixture
def cloud() -> CloudinarySettings:
    return CloudinarySettings(
        CLOUDINARY_CLOUD_NAME="demo",
        CLOUDINARY_API_KEY="123",
        CLOUDINARY_API_SECRET="shh",
    )


async def test_fetch_audio_link_sends_rapidapi_headers(rapid):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["headers"] = request.headers
        return httpx.Response(
            200,
            json={"link": "https://cdn/a.mp3", "title": "Lecture 1", "filesize": 2048, "status": "ok"},
        )

    async with _client(handler) as c:
        audio = await YouTubeAudioClient(rapid, c).fetch_audio_link("abc123")

    assert seen["url"].host == "youtube-mp36.p.rapidapi.com"
    assert seen["url"].path == "/dl"
    assert seen["url"].params["id"] == "abc123"
    assert seen["headers"]["x-rapidapi-key"] == "test-key"
    assert seen["headers"]["x-rapidapi-host"] == "youtube-mp36.p.rapidapi.com"
    assert audio.link == "https://cdn/a.mp3"
    assert audio.title == "Lecture 1"
    assert audio.filesize == 2048


async def test_fetch_audio_link_non_2xx_raises_upstream_error(rapid):
    async with _client(lambda r: httpx.Response(429, text="quota")) as c:
        with pytest.raises(UpstreamServiceError) as exc:
            await YouTubeAudioClient(rapid, c).fetch_audio_link("abc123")
    assert exc.value.service == YouTubeAudioClient.service
    assert exc.value.status_code == 429


async def test_fetch_audio_link_without_link_raises(rapid):
    async with _client(lambda r: httpx.Response(200, json={"status": "processing"})) as c:
        with pytest.raises(AudioLinkMissingError):
            await YouTubeAudioClient(rapid, c).fetch_audio_link("abc123")


async def test_transcribe_returns_text(rapid):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json={"text": "hello class"})

    async with _client(handler) as c:
        text = await SpeechToTextClient(rapid, c).transcribe("https://res/a.mp3")

    req = seen["request"]
    assert req.method == "POST"
    assert req.url.path == "/transcribe"
    assert req.url.params["url"] == "https://res/a.mp3"
    assert req.url.params["lang"] == "en"
    assert req.url.params["task"] == "transcribe"
    assert text == "hello class"


async def test_transcribe_non_2xx_raises(rapid):
    async with _client(lambda r: httpx.Response(500)) as c:
        with pytest.raises(UpstreamServiceError):
            await SpeechToTextClient(rapid, c).transcribe("https://res/a.mp3")


def test_sign_params_matches_cloudinary_scheme():
    expected = hashlib.sha1(b"public_id=x&timestamp=10shh").hexdigest()
    assert sign_params({"timestamp": "10", "public_id": "x"}, "shh") == expected


async def test_download_and_upload_streams_audio_into_cloudinary(cloud):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, content=b"ID3-audio-bytes")
        seen["upload"] = request
        return httpx.Response(200, json={"secure_url": "https://res.cloudinary.com/demo/a.mp3"})

    async with _client(handler) as c:
        url = await CloudinaryStorage(cloud, c).download_and_upload("https://cdn/a.mp3")

    upload = seen["upload"]
    body = upload.read()
    assert url == "https://res.cloudinary.com/demo/a.mp3"
    assert upload.url.path == "/v1_1/demo/auto/upload"
    assert b"ID3-audio-bytes" in body
    assert b'name="signature"' in body
    assert b'name="api_key"' in body


async def test_download_failure_raises(cloud):
    async with _client(lambda r: httpx.Response(404)) as c:
        with pytest.raises(UpstreamServiceError) as exc:
            await CloudinaryStorage(cloud, c).download_and_upload("https://cdn/a.mp3")
    assert exc.value.service == "audio-download"


async def test_upload_requires_configuration():
    async def chunks():
        yield b"x"

    with pytest.raises(RuntimeError):
        await CloudinaryStorage(CloudinarySettings()).upload_stream(chunks())


async def test_upload_spools_large_audio_to_disk(cloud, monkeypatch):
    monkeypatch.setattr(storage, "SPOOL_MAX_BYTES", 4)
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = request.read()
        return httpx.Response(200, json={"secure_url": "https://res.cloudinary.com/demo/b.mp3"})

    async def chunks():
        for part in (b"ID3-", b"large-", b"audio"):
            yield part

    async with _client(handler) as c:
        url = await CloudinaryStorage(cloud, c).upload_stream(chunks(), filename="b.mp3")

    assert url == "https://res.cloudinary.com/demo/b.mp3"
    assert b"ID3-large-audio" in seen["body"]
    assert b'filename="b.mp3"' in seen["body"]
