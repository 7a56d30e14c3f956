"""Plain-text generation through pydantic-ai.

The pipeline only needs ``generate_text(prompt, temperature=...) -> str``;
``TextGenerator`` is that capability and ``AgentTextGenerator`` implements
it over the configured model provider. Provider imports stay lazy to avoid
import-time errors when credentials or optional SDKs are missing.
"""

from __future__ import annotations

from typing import Optional, Protocol

from pydantic_ai import Agent

from app.core.config import GenerationSettings
from app.core.errors import GenerationConfigError


class TextGenerator(Protocol):
    async def generate_text(
        self, prompt: str, *, temperature: Optional[float] = None
    ) -> str: ...


def _build_google_model(cfg: GenerationSettings):
    """Build Google Gemini model for pydantic-ai (lazy import)."""
    if not cfg.gemini_api_key:
        raise GenerationConfigError(
            "Gemini API key not configured. Set GEMINI_API_KEY in your environment."
        )
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    provider = GoogleProvider(api_key=cfg.gemini_api_key)
    return GoogleModel(cfg.gemini_model, provider=provider)


def _build_cohere_model(cfg: GenerationSettings):
    """Build Cohere chat model for pydantic-ai (lazy import)."""
    if not cfg.cohere_api_key:
        raise GenerationConfigError(
            "Cohere API key not configured. Set COHERE_API_KEY in your environment."
        )
    from pydantic_ai.models.cohere import CohereModel
    from pydantic_ai.providers.cohere import CohereProvider

    provider = CohereProvider(api_key=cfg.cohere_api_key)
    return CohereModel(cfg.cohere_model, provider=provider)


def _build_openrouter_model(cfg: GenerationSettings):
    """Build OpenRouter model via OpenAI-compatible provider (lazy import)."""
    if not cfg.openrouter_api_key:
        raise GenerationConfigError(
            "OpenRouter API key not configured. Set OPENROUTER_API_KEY in your environment."
        )
    from pydantic_ai.models.openai import OpenAIChatModel
    from pydantic_ai.providers.openai import OpenAIProvider

    provider = OpenAIProvider(
        api_key=cfg.openrouter_api_key,
        base_url="https://openrouter.ai/api/v1",
    )
    return OpenAIChatModel(cfg.openrouter_model, provider=provider)


def build_model_by_settings(cfg: GenerationSettings):
    provider = (cfg.provider or "google").lower()
    if provider == "cohere":
        return _build_cohere_model(cfg)
    if provider == "openrouter":
        return _build_openrouter_model(cfg)
    return _build_google_model(cfg)


class AgentTextGenerator:
    """Runs a free-text pydantic-ai agent; the model is built on first use."""

    def __init__(self, cfg: GenerationSettings) -> None:
        self.cfg = cfg
        self._agent: Optional[Agent[None, str]] = None

    def _get_agent(self) -> Agent[None, str]:
        if self._agent is None:
            model = build_model_by_settings(self.cfg)
            self._agent = Agent[None, str](model=model, output_type=str, retries=0)
        return self._agent

    async def generate_text(
        self, prompt: str, *, temperature: Optional[float] = None
    ) -> str:
        agent = self._get_agent()
        model_settings = {"temperature": temperature} if temperature is not None else None
        res = await agent.run(prompt, model_settings=model_settings)
        return res.output
