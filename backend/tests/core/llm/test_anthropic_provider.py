from types import SimpleNamespace
from unittest.mock import MagicMock

from chartgpt.core.llm.providers.anthropic import AnthropicProvider
from chartgpt.core.llm.schemas import GenerateConfig


def test_split_messages_moves_system_prompts_out_of_history():
    provider = AnthropicProvider(api_key="test", model="claude-3-5-haiku-latest")

    system_text, history = provider._split_messages(
        [
            {"role": "system", "content": "Pick a chart type."},
            {"role": "system", "content": ""},
            {"role": "user", "content": "fruit"},
            {"role": "assistant", "content": "bar"},
            {"role": "tool", "content": 3},
        ]
    )

    assert system_text == "Pick a chart type."
    assert history == [
        {"role": "user", "content": "fruit"},
        {"role": "assistant", "content": "bar"},
        {"role": "user", "content": "3"},
    ]


def test_split_messages_without_system_prompt():
    provider = AnthropicProvider(api_key="test", model="claude-3-5-haiku-latest")

    system_text, history = provider._split_messages([{"role": "user", "content": "hi"}])

    assert system_text is None
    assert history == [{"role": "user", "content": "hi"}]


def test_build_params_defaults():
    provider = AnthropicProvider(api_key="test", model="claude-3-5-haiku-latest")

    params = provider._build_params(GenerateConfig(temperature=0.0), system_text=None)

    assert params == {"temperature": 0.0, "max_tokens": 1024}


def test_build_params_includes_optional_values_when_provided():
    provider = AnthropicProvider(api_key="test", model="claude-3-5-haiku-latest")

    params = provider._build_params(
        GenerateConfig(max_tokens=64, top_p=0.5, stop=["DONE"]),
        system_text="Pick a chart type.",
    )

    assert params["max_tokens"] == 64
    assert params["top_p"] == 0.5
    assert params["stop_sequences"] == ["DONE"]
    assert params["system"] == "Pick a chart type."


def test_generate_joins_text_blocks_and_usage():
    provider = AnthropicProvider(api_key="test", model="claude-3-5-haiku-latest")
    message = SimpleNamespace(
        content=[SimpleNamespace(text="ba"), SimpleNamespace(type="tool_use"), SimpleNamespace(text="r")],
        usage=SimpleNamespace(input_tokens=9, output_tokens=2),
    )
    provider._client = MagicMock()
    provider._client.messages.create.return_value = message

    response = provider.generate(
        [{"role": "system", "content": "Pick a chart type."}, {"role": "user", "content": "fruit"}],
        config=GenerateConfig(max_tokens=16),
    )

    assert response.text == "bar"
    assert response.usage == {"prompt_tokens": 9, "completion_tokens": 2, "total_tokens": 11}
    kwargs = provider._client.messages.create.call_args.kwargs
    assert kwargs["model"] == "claude-3-5-haiku-latest"
    assert kwargs["system"] == "Pick a chart type."
    assert kwargs["messages"] == [{"role": "user", "content": "fruit"}]
    assert kwargs["max_tokens"] == 16
