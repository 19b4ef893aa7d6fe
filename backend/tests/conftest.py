import pytest
from fastapi.testclient import TestClient

from chartgpt.core.llm import clear_llm_cache
from chartgpt.core.llm.base import BaseLLM
from chartgpt.core.llm.schemas import GenerateConfig, LLMResponse
from chartgpt.main import app


class FakeLLM(BaseLLM):
    """Returns canned replies in order (the last one repeats) and records calls."""

    def __init__(self, replies: list[str]):
        self.replies = list(replies)
        self.calls: list[dict] = []

    def generate(self, messages: list[dict], config: GenerateConfig | None = None) -> LLMResponse:
        self.calls.append({"messages": messages, "config": config})
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        return LLMResponse(text=reply, usage={"total_tokens": 1})


@pytest.fixture()
def fake_llm():
    def _make(*replies: str) -> FakeLLM:
        return FakeLLM(list(replies))

    return _make


@pytest.fixture(autouse=True)
def _reset_llm_cache():
    clear_llm_cache()
    yield
    clear_llm_cache()


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c
