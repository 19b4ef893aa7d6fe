import json
import logging
import re
import threading
from collections.abc import Callable, Generator
from typing import Any

from chartgpt.agents.chart.prompts import build_chart_data_prompt
from chartgpt.agents.chart.schemas import (
    ChartRequest,
    Error,
    Idle,
    Loading,
    RequestResult,
    Success,
    normalize_chart_type,
)

logger = logging.getLogger(__name__)

# (input_data, api_key) -> raw chart type label
ClassifyFn = Callable[[str, str | None], str]
# (prompt, api_key) -> raw JSON text
GenerateFn = Callable[[str, str | None], str]


def strip_json_fence(raw_text: str) -> str:
    raw = (raw_text or "").strip()
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json)?\s*", "", raw)
        raw = re.sub(r"\s*```$", "", raw)
    return raw


def parse_chart_data(raw_text: str) -> Any:
    """Parse generator output. Raises ValueError when it is not JSON."""
    if not isinstance(raw_text, str):
        raise ValueError(f"Expected chart data text, got {type(raw_text).__name__}")
    try:
        return json.loads(strip_json_fence(raw_text))
    except RecursionError as exc:
        raise ValueError("Chart data is nested too deeply to parse") from exc


class ChartOrchestrator:
    """Runs the classify -> generate -> parse round trip and owns its result slot.

    Every submission takes a new, increasing request id. Only the result of
    the latest submission is written to ``state``; an older submission that
    finishes late still returns its result to its own caller but leaves the
    slot alone.
    """

    def __init__(self, classify: ClassifyFn, generate: GenerateFn):
        self._classify = classify
        self._generate = generate
        self._lock = threading.Lock()
        self._state: RequestResult = Idle()
        self._latest_request_id = 0

    @property
    def state(self) -> RequestResult:
        with self._lock:
            return self._state

    def submit(self, text: str, api_key: str | None = None) -> RequestResult:
        request = ChartRequest(text=text, api_key=api_key)
        loading = self._begin()
        return self._commit(self._settle(loading.request_id, request))

    def submit_stream(
        self, text: str, api_key: str | None = None
    ) -> Generator[RequestResult, None, None]:
        """Like ``submit`` but yields the Loading state before the final one.

        Closing the generator before the round trip finishes ends that request
        in Error, so the slot never stays at Loading.
        """
        request = ChartRequest(text=text, api_key=api_key)
        loading = self._begin()
        result: RequestResult | None = None
        try:
            yield loading
            result = self._commit(self._settle(loading.request_id, request))
            yield result
        finally:
            if result is None:
                logger.info("Request %d: stream closed before completion", loading.request_id)
                self._commit(Error(request_id=loading.request_id))

    def _begin(self) -> Loading:
        with self._lock:
            self._latest_request_id += 1
            loading = Loading(request_id=self._latest_request_id)
            self._state = loading
        return loading

    def _commit(self, result: RequestResult) -> RequestResult:
        with self._lock:
            if result.request_id != self._latest_request_id:
                logger.info(
                    "Discarding stale chart result for request %d (latest is %d)",
                    result.request_id,
                    self._latest_request_id,
                )
                return result
            self._state = result
        return result

    def _settle(self, request_id: int, request: ChartRequest) -> Error | Success:
        try:
            return self._run(request_id, request)
        except Exception:
            logger.exception("Request %d: chart round trip failed", request_id)
            return Error(request_id=request_id)

    def _run(self, request_id: int, request: ChartRequest) -> Error | Success:
        try:
            raw_label = self._classify(request.text, request.api_key)
        except Exception:
            logger.exception("Request %d: chart type call failed", request_id)
            return Error(request_id=request_id)

        chart_type = normalize_chart_type(raw_label)
        if chart_type is None:
            logger.warning("Request %d: unsupported chart type %r", request_id, raw_label)
            return Error(request_id=request_id)

        prompt = build_chart_data_prompt(request.text)
        try:
            raw_data = self._generate(prompt, request.api_key)
        except Exception:
            logger.exception("Request %d: chart data call failed", request_id)
            return Error(request_id=request_id)

        try:
            data = parse_chart_data(raw_data)
        except ValueError as exc:
            logger.warning("Request %d: failed to parse chart data: %s", request_id, exc)
            return Error(request_id=request_id)

        logger.info("Request %d: built %s chart", request_id, chart_type.value)
        return Success(request_id=request_id, chart_type=chart_type, data=data)
