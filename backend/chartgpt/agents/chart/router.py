import logging

from fastapi import APIRouter, HTTPException, Response
from fastapi.responses import StreamingResponse

from chartgpt.agents.chart.api_schemas import (
    ChartDataRequest,
    ChartExportRequest,
    ChartRequest,
    ChartResponse,
    ChartTypeRequest,
)
from chartgpt.agents.chart.schemas import ChartType
from chartgpt.agents.chart.service import (
    classify_chart_type,
    derive_png_filename,
    discard_chart_session,
    export_chart,
    generate_chart,
    generate_chart_stream,
    get_chart_state,
    parse_graph,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Chart"], prefix="/v1/chart")

# Endpoints the single-page client calls directly, one per model call
page_router = APIRouter(tags=["Chart"], prefix="/api")


@router.post("/generate", response_model=ChartResponse)
def generate_chart_endpoint(request: ChartRequest):
    return generate_chart(request=request)


@router.post("/generate/stream")
def generate_chart_stream_endpoint(request: ChartRequest):
    return StreamingResponse(
        generate_chart_stream(request),
        media_type="text/event-stream",
    )


@router.get("/types", response_model=list[str])
def list_chart_types_endpoint():
    return [chart_type.value for chart_type in ChartType]


@router.get("/sessions/{session_id}", response_model=ChartResponse)
def get_chart_state_endpoint(session_id: str):
    return get_chart_state(session_id)


@router.delete("/sessions/{session_id}")
def delete_chart_session_endpoint(session_id: str):
    if not discard_chart_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"status": "deleted"}


@router.post("/export")
def export_chart_endpoint(request: ChartExportRequest):
    png = export_chart(request)
    if png is None:
        return Response(status_code=204)
    filename = derive_png_filename(request.filename)
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@page_router.post("/get-type", response_model=str)
def get_type_endpoint(request: ChartTypeRequest):
    try:
        return classify_chart_type(request)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Chart type request failed")
        raise HTTPException(status_code=502, detail="Chart type request failed.") from exc


@page_router.post("/parse-graph", response_model=str)
def parse_graph_endpoint(request: ChartDataRequest):
    try:
        return parse_graph(request)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Chart data request failed")
        raise HTTPException(status_code=502, detail="Chart data request failed.") from exc
