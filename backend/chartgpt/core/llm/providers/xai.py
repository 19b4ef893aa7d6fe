from chartgpt.core.llm.providers.openai import OpenAIProvider

XAI_BASE_URL = "https://api.x.ai/v1"


class XaiProvider(OpenAIProvider):
    """xAI exposes an OpenAI-compatible chat completions API."""

    def __init__(self, api_key: str, model: str):
        super().__init__(api_key=api_key, model=model, base_url=XAI_BASE_URL)
