import json
from functools import lru_cache
from typing import Annotated, Any, Optional

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="yt-study-notes", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=5000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"], alias="CORS_ORIGINS"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, v: Any) -> Any:
        # Comma-separated, or a JSON array.
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [o.strip() for o in v.split(",") if o.strip()]
        return v

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class GenerationSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # Model provider selection: "google", "cohere" or "openrouter"
    provider: str = Field(default="google", alias="MODEL_PROVIDER")

    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-pro", alias="GEMINI_MODEL")

    cohere_api_key: Optional[str] = Field(default=None, alias="COHERE_API_KEY")
    cohere_model: str = Field(default="command-r-plus", alias="COHERE_MODEL")

    openrouter_api_key: Optional[str] = Field(default=None, alias="OPENROUTER_API_KEY")
    openrouter_model: str = Field(
        default="google/gemini-2.5-pro", alias="OPENROUTER_MODEL"
    )

    notes_temperature: float = Field(default=0.3, alias="NOTES_TEMPERATURE")
    questions_temperature: float = Field(default=0.3, alias="QUESTIONS_TEMPERATURE")
    relevance_temperature: float = Field(default=0.2, alias="RELEVANCE_TEMPERATURE")


class RapidAPISettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    api_key: str = Field(default="", alias="RAPIDAPI_KEY")
    audio_host: str = Field(
        default="youtube-mp36.p.rapidapi.com", alias="RAPIDAPI_AUDIO_HOST"
    )
    transcribe_host: str = Field(
        default="speech-to-text-ai.p.rapidapi.com", alias="RAPIDAPI_TRANSCRIBE_HOST"
    )
    transcribe_lang: str = Field(default="en", alias="TRANSCRIBE_LANG")
    audio_timeout: float = Field(default=60.0, alias="AUDIO_LOOKUP_TIMEOUT")
    transcribe_timeout: float = Field(default=600.0, alias="TRANSCRIBE_TIMEOUT")

    @computed_field
    def audio_base_url(self) -> str:
        return f"https://{self.audio_host}"

    @computed_field
    def transcribe_base_url(self) -> str:
        return f"https://{self.transcribe_host}"


class CloudinarySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    cloud_name: str = Field(default="", alias="CLOUDINARY_CLOUD_NAME")
    api_key: str = Field(default="", alias="CLOUDINARY_API_KEY")
    api_secret: str = Field(default="", alias="CLOUDINARY_API_SECRET")
    upload_timeout: float = Field(default=300.0, alias="CLOUDINARY_UPLOAD_TIMEOUT")

    @computed_field
    def upload_url(self) -> str:
        return f"https://api.cloudinary.com/v1_1/{self.cloud_name}/auto/upload"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    generation: GenerationSettings = Field(default_factory=lambda: GenerationSettings())
    rapidapi: RapidAPISettings = Field(default_factory=lambda: RapidAPISettings())
    cloudinary: CloudinarySettings = Field(default_factory=lambda: CloudinarySettings())


@lru_cache
def get_settings() -> Settings:
    """Build settings once per process; components receive the pieces they need."""
    return Settings()
