from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, TypedDict, Union


class ChartType(str, Enum):
    AREA = "area"
    BAR = "bar"
    LINE = "line"
    COMPOSED = "composed"
    SCATTER = "scatter"
    PIE = "pie"
    RADAR = "radar"
    RADIALBAR = "radialbar"
    TREEMAP = "treemap"
    FUNNEL = "funnel"


CHART_TYPES = frozenset(chart_type.value for chart_type in ChartType)

CHART_ERROR_MESSAGE = (
    "Something went wrong while drawing the chart. "
    "Check your API key quota, make the prompt as clear as possible, "
    "and ask for a single supported chart type."
)


def normalize_chart_type(raw_label: object) -> ChartType | None:
    """Return the ChartType for a classifier reply, or None if unsupported.

    Matching ignores case and also surrounding whitespace, since model replies
    often end in a newline. Anything else (e.g. "bar chart") is unsupported.
    """
    if not isinstance(raw_label, str):
        return None
    label = raw_label.strip().lower()
    if label not in CHART_TYPES:
        return None
    return ChartType(label)


class ChartDataPoint(TypedDict):
    name: str
    value: float
    color: str


@dataclass(frozen=True)
class ChartRequest:
    text: str
    api_key: str | None = None


# ── Request result states ──
# Exactly one of these occupies an orchestrator's result slot at a time.


@dataclass(frozen=True)
class Idle:
    status: ClassVar[str] = "idle"
    request_id: int = 0


@dataclass(frozen=True)
class Loading:
    status: ClassVar[str] = "loading"
    request_id: int


@dataclass(frozen=True)
class Error:
    status: ClassVar[str] = "error"
    request_id: int
    message: str = CHART_ERROR_MESSAGE


@dataclass(frozen=True)
class Success:
    status: ClassVar[str] = "success"
    request_id: int
    chart_type: ChartType
    # Parsed generator output, passed through without schema checks
    data: Any


RequestResult = Union[Idle, Loading, Error, Success]
