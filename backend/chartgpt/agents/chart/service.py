import json
import re
from collections.abc import Generator

from chartgpt.agents.chart import (
    create_chart_orchestrator,
    generate_chart_data,
    get_chart_type,
    get_session_registry,
)
from chartgpt.agents.chart.api_schemas import (
    ChartDataRequest,
    ChartExportRequest,
    ChartRequest,
    ChartResponse,
    ChartTypeRequest,
)
from chartgpt.agents.chart.export import render_chart_png
from chartgpt.agents.chart.orchestrator import ChartOrchestrator
from chartgpt.agents.chart.schemas import Error, RequestResult, Success
from chartgpt.core.config import settings

DEFAULT_EXPORT_FILENAME = "chart.png"


def _to_response(result: RequestResult) -> ChartResponse:
    if isinstance(result, Success):
        return ChartResponse(
            status=result.status,
            request_id=result.request_id,
            chart_type=result.chart_type,
            data=result.data,
        )
    if isinstance(result, Error):
        return ChartResponse(status=result.status, request_id=result.request_id, error=result.message)
    return ChartResponse(status=result.status, request_id=result.request_id)


def _orchestrator_for(request: ChartRequest) -> ChartOrchestrator:
    if request.session_id:
        return get_session_registry().get_or_create(request.session_id)
    return create_chart_orchestrator()


def generate_chart(request: ChartRequest) -> ChartResponse:
    result = _orchestrator_for(request).submit(request.text, api_key=request.api_key)
    return _to_response(result)


def generate_chart_stream(request: ChartRequest) -> Generator[str, None, None]:
    orchestrator = _orchestrator_for(request)
    for state in orchestrator.submit_stream(request.text, api_key=request.api_key):
        payload = {"type": "state", **_to_response(state).model_dump(mode="json")}
        yield f"data: {json.dumps(payload)}\n\n"
    yield f"data: {json.dumps({'type': 'done'})}\n\n"


def get_chart_state(session_id: str) -> ChartResponse:
    orchestrator = get_session_registry().get(session_id)
    if orchestrator is None:
        return ChartResponse(status="idle")
    return _to_response(orchestrator.state)


def discard_chart_session(session_id: str) -> bool:
    return get_session_registry().discard(session_id)


def classify_chart_type(request: ChartTypeRequest) -> str:
    return get_chart_type(request.inputData, api_key=request.apiKey)


def parse_graph(request: ChartDataRequest) -> str:
    return generate_chart_data(request.prompt, api_key=request.apiKey)


def derive_png_filename(filename: str | None) -> str:
    name = (filename or DEFAULT_EXPORT_FILENAME).strip()
    # keep a bare file name safe for a Content-Disposition header
    name = re.sub(r"[^A-Za-z0-9._-]", "_", name.replace("\\", "/").rsplit("/", 1)[-1])
    if name.lower().endswith(".png") and name[:-4].strip("._"):
        return name
    stem = re.sub(r"\.[^.]+$", "", name).strip("._")
    if not stem:
        stem = "chart"
    return f"{stem}.png"


def export_chart(request: ChartExportRequest) -> bytes | None:
    if not request.data:
        return None
    return render_chart_png(request.chart_type, request.data, dpi=settings.EXPORT_DPI)
