import pytest
from pydantic_ai.messages import ModelResponse, TextPart, UserPromptPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

from app.core.config import GenerationSettings
from app.core.errors import GenerationConfigError
from app.modules.study_notes import generator
from app.modules.study_notes.generator import AgentTextGenerator, build_model_by_settings


def _recording_model(reply: str):
    seen: dict = {}

    def respond(messages, info: AgentInfo) -> ModelResponse:
        seen["prompt"] = [
            p.content for p in messages[-1].parts if isinstance(p, UserPromptPart)
        ][-1]
        seen["settings"] = info.model_settings
        return ModelResponse(parts=[TextPart(reply)])

    return FunctionModel(respond), seen


async def test_generate_text_returns_agent_output(monkeypatch):
    model, seen = _recording_model('[{"title": "OS"}]')
    monkeypatch.setattr(generator, "build_model_by_settings", lambda cfg: model)
    gen = AgentTextGenerator(GenerationSettings())

    out = await gen.generate_text("summarise this", temperature=0.3)

    assert out == '[{"title": "OS"}]'
    assert seen["prompt"] == "summarise this"
    assert seen["settings"]["temperature"] == 0.3


async def test_generate_text_without_temperature_sends_no_override(monkeypatch):
    model, seen = _recording_model("ok")
    monkeypatch.setattr(generator, "build_model_by_settings", lambda cfg: model)
    gen = AgentTextGenerator(GenerationSettings())

    assert await gen.generate_text("hi") == "ok"
    assert not (seen["settings"] or {}).get("temperature")


async def test_agent_is_built_once(monkeypatch):
    built = []
    model, _ = _recording_model("ok")

    def build(cfg):
        built.append(cfg)
        return model

    monkeypatch.setattr(generator, "build_model_by_settings", build)
    gen = AgentTextGenerator(GenerationSettings())
    await gen.generate_text("one")
    await gen.generate_text("two")

    assert len(built) == 1


@pytest.mark.parametrize(
    "provider, builder",
    [
        ("google", "_build_google_model"),
        ("GOOGLE", "_build_google_model"),
        ("cohere", "_build_cohere_model"),
        ("openrouter", "_build_openrouter_model"),
        ("unknown", "_build_google_model"),
    ],
)
def test_build_model_picks_provider(monkeypatch, provider, builder):
    for name in ("_build_google_model", "_build_cohere_model", "_build_openrouter_model"):
        monkeypatch.setattr(generator, name, lambda cfg, name=name: name)

    cfg = GenerationSettings(MODEL_PROVIDER=provider)
    assert build_model_by_settings(cfg) == builder


@pytest.mark.parametrize(
    "provider, key_env",
    [
        ("google", "GEMINI_API_KEY"),
        ("cohere", "COHERE_API_KEY"),
        ("openrouter", "OPENROUTER_API_KEY"),
    ],
)
def test_missing_api_key_raises_config_error(provider, key_env):
    cfg = GenerationSettings(MODEL_PROVIDER=provider, **{key_env: None})
    with pytest.raises(GenerationConfigError, match=key_env):
        build_model_by_settings(cfg)


async def test_missing_key_surfaces_on_first_generation():
    gen = AgentTextGenerator(GenerationSettings(MODEL_PROVIDER="cohere", COHERE_API_KEY=None))
    with pytest.raises(GenerationConfigError):
        await gen.generate_text("hi")
