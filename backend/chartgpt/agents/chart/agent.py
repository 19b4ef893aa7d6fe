import re

from chartgpt.agents.base import AgentResult, BaseAgent
from chartgpt.agents.chart.prompts import (
    CHART_DATA_SYSTEM,
    CHART_TYPE_SYSTEM,
    CHART_TYPE_USER,
)
from chartgpt.agents.chart.schemas import ChartType
from chartgpt.core.config import settings
from chartgpt.core.llm.schemas import GenerateConfig


def _strip_think_tags(raw_text: str) -> str:
    cleaned = re.sub(r"<think>.*?</think>", "", raw_text or "", flags=re.DOTALL)
    return cleaned.strip()


class ChartTypeAgent(BaseAgent):
    """Asks the model which chart kind a description calls for.

    The reply is returned as-is (minus reasoning tags); deciding whether it
    is a supported label is the orchestrator's job.
    """

    def _build_messages(self, input_data: str) -> list[dict[str, str]]:
        chart_types = "\n".join(f"- {chart_type.value}" for chart_type in ChartType)
        return [
            {"role": "system", "content": CHART_TYPE_SYSTEM.format(chart_types=chart_types)},
            {"role": "user", "content": CHART_TYPE_USER.format(input_data=input_data)},
        ]

    def execute(self, input_text: str, context: dict | None = None) -> AgentResult:
        response = self.llm.generate(
            messages=self._build_messages(input_text),
            config=GenerateConfig(temperature=settings.CHART_TEMPERATURE, max_tokens=16),
        )
        return AgentResult(
            output=_strip_think_tags(response.text),
            metadata={"usage": response.usage},
        )


class ChartDataAgent(BaseAgent):
    """Sends a prepared data instruction and returns the raw model text."""

    def execute(self, input_text: str, context: dict | None = None) -> AgentResult:
        messages = [
            {"role": "system", "content": CHART_DATA_SYSTEM},
            {"role": "user", "content": input_text},
        ]
        response = self.llm.generate(
            messages=messages,
            config=GenerateConfig(
                temperature=settings.CHART_TEMPERATURE,
                max_tokens=settings.CHART_MAX_TOKENS,
            ),
        )
        return AgentResult(
            output=_strip_think_tags(response.text),
            metadata={"usage": response.usage},
        )
