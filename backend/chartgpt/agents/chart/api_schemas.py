from typing import Any

from pydantic import BaseModel

from chartgpt.agents.chart.schemas import ChartType


class ChartRequest(BaseModel):
    text: str
    api_key: str | None = None
    session_id: str | None = None


class ChartResponse(BaseModel):
    status: str
    request_id: int = 0
    chart_type: ChartType | None = None
    data: Any = None
    error: str | None = None


class ChartExportRequest(BaseModel):
    chart_type: ChartType
    data: list[Any] | None = None
    filename: str | None = None


# ── Raw call contracts used by the web page ──


class ChartTypeRequest(BaseModel):
    inputData: str
    apiKey: str | None = None


class ChartDataRequest(BaseModel):
    prompt: str
    apiKey: str | None = None
