from types import SimpleNamespace
from unittest.mock import MagicMock

from chartgpt.core.llm.providers.openai import OpenAIProvider
from chartgpt.core.llm.schemas import GenerateConfig


def test_build_params_omits_none_optionals():
    provider = OpenAIProvider(api_key="test", model="gpt-4o-mini")

    params = provider._build_params(
        messages=[{"role": "user", "content": "hello"}],
        config=GenerateConfig(max_tokens=None, stop=None),
    )

    assert params["model"] == "gpt-4o-mini"
    assert "max_tokens" not in params
    assert "stop" not in params


def test_build_params_includes_optional_values_when_provided():
    provider = OpenAIProvider(api_key="test", model="gpt-4o-mini")

    params = provider._build_params(
        messages=[{"role": "user", "content": "hello"}],
        config=GenerateConfig(max_tokens=128, stop=["DONE"]),
    )

    assert params["max_tokens"] == 128
    assert params["stop"] == ["DONE"]


def test_generate_maps_text_and_usage():
    provider = OpenAIProvider(api_key="test", model="gpt-4o-mini")
    completion = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content="bar"))],
        usage=SimpleNamespace(prompt_tokens=7, completion_tokens=1, total_tokens=8),
    )
    provider._client = MagicMock()
    provider._client.chat.completions.create.return_value = completion

    response = provider.generate([{"role": "user", "content": "bar chart please"}])

    assert response.text == "bar"
    assert response.usage == {"prompt_tokens": 7, "completion_tokens": 1, "total_tokens": 8}
    kwargs = provider._client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["messages"] == [{"role": "user", "content": "bar chart please"}]


def test_generate_tolerates_missing_content_and_usage():
    provider = OpenAIProvider(api_key="test", model="gpt-4o-mini")
    completion = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=None))],
        usage=None,
    )
    provider._client = MagicMock()
    provider._client.chat.completions.create.return_value = completion

    response = provider.generate([{"role": "user", "content": "hi"}])

    assert response.text == ""
    assert response.usage == {}
