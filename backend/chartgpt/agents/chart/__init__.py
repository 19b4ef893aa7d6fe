from chartgpt.agents.chart.agent import ChartDataAgent, ChartTypeAgent
from chartgpt.agents.chart.orchestrator import ChartOrchestrator, ClassifyFn, GenerateFn
from chartgpt.agents.chart.sessions import ChartSessionRegistry
from chartgpt.core.config import settings
from chartgpt.core.llm import create_llm
from chartgpt.core.llm.base import BaseLLM


def create_chart_type_agent(
    llm: BaseLLM | None = None,
    api_key: str | None = None,
) -> ChartTypeAgent:
    type_llm = llm or create_llm(api_key=api_key, role="classifier")
    return ChartTypeAgent(llm=type_llm)


def create_chart_data_agent(
    llm: BaseLLM | None = None,
    api_key: str | None = None,
) -> ChartDataAgent:
    data_llm = llm or create_llm(api_key=api_key, role="generator")
    return ChartDataAgent(llm=data_llm)


def get_chart_type(input_data: str, api_key: str | None = None) -> str:
    """Outbound call #1: raw chart type label for a description."""
    return create_chart_type_agent(api_key=api_key).execute(input_data).output


def generate_chart_data(prompt: str, api_key: str | None = None) -> str:
    """Outbound call #2: raw (expected JSON) chart data for a prepared prompt."""
    return create_chart_data_agent(api_key=api_key).execute(prompt).output


def create_chart_orchestrator(
    classify: ClassifyFn | None = None,
    generate: GenerateFn | None = None,
) -> ChartOrchestrator:
    return ChartOrchestrator(
        classify=classify or get_chart_type,
        generate=generate or generate_chart_data,
    )


_session_registry = ChartSessionRegistry(
    factory=create_chart_orchestrator,
    max_sessions=settings.CHART_MAX_SESSIONS,
)


def get_session_registry() -> ChartSessionRegistry:
    return _session_registry


__all__ = [
    "ChartDataAgent",
    "ChartOrchestrator",
    "ChartSessionRegistry",
    "ChartTypeAgent",
    "create_chart_data_agent",
    "create_chart_orchestrator",
    "create_chart_type_agent",
    "generate_chart_data",
    "get_chart_type",
    "get_session_registry",
]
