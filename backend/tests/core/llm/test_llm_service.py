import pytest

from chartgpt.core.config import settings
from chartgpt.core.llm import create_llm
from chartgpt.core.llm.providers.anthropic import AnthropicProvider
from chartgpt.core.llm.providers.openai import OpenAIProvider
from chartgpt.core.llm.providers.xai import XaiProvider


@pytest.fixture()
def server_key(monkeypatch):
    monkeypatch.setattr(settings, "CHART_DEFAULT_LLM", "openai")
    monkeypatch.setattr(settings, "CHART_DEFAULT_MODEL", "gpt-4o-mini")
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "server-key")


def test_server_keyed_instances_are_cached(server_key):
    first = create_llm()
    second = create_llm()

    assert isinstance(first, OpenAIProvider)
    assert first is second


def test_user_key_bypasses_cache(server_key):
    cached = create_llm()
    first = create_llm(api_key="sk-user")
    second = create_llm(api_key="sk-user")

    assert first is not cached
    assert first is not second
    assert first._client.api_key == "sk-user"
    assert create_llm() is cached


def test_user_key_used_when_server_key_missing(monkeypatch):
    monkeypatch.setattr(settings, "CHART_DEFAULT_LLM", "openai")
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")

    llm = create_llm(api_key="sk-user")

    assert llm._client.api_key == "sk-user"


def test_missing_key_raises(monkeypatch):
    monkeypatch.setattr(settings, "CHART_DEFAULT_LLM", "openai")
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")

    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        create_llm()


def test_unsupported_provider_raises(server_key):
    with pytest.raises(ValueError, match="Unsupported LLM provider"):
        create_llm(provider="mystery")


def test_role_model_override(server_key, monkeypatch):
    monkeypatch.setattr(settings, "CHART_CLASSIFIER_MODEL", "gpt-4.1-nano")
    monkeypatch.setattr(settings, "CHART_GENERATOR_MODEL", "")

    assert create_llm(role="classifier")._model == "gpt-4.1-nano"
    assert create_llm(role="generator")._model == "gpt-4o-mini"


def test_provider_aliases(monkeypatch):
    monkeypatch.setattr(settings, "XAI_API_KEY", "xai-key")
    monkeypatch.setattr(settings, "ANTHROPIC_API_KEY", "anthropic-key")

    grok = create_llm(provider="grok", model="grok-3-mini")
    claude = create_llm(provider="Claude", model="claude-3-5-haiku-latest")

    assert isinstance(grok, XaiProvider)
    assert str(grok._client.base_url).rstrip("/") == "https://api.x.ai/v1"
    assert isinstance(claude, AnthropicProvider)
