from __future__ import annotations

import io
import logging
import math
from typing import Any

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.colors import is_color_like  # noqa: E402

from chartgpt.agents.chart.schemas import ChartDataPoint, ChartType  # noqa: E402

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#4285F4"
_NON_VALUE_KEYS = {"name", "color"}


def _coerce_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    raw = str(value).strip().replace(",", "")
    if not raw:
        return None
    try:
        number = float(raw)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def point_value(point: ChartDataPoint | dict[str, Any]) -> float | None:
    """Numeric value of a data point.

    ``value`` wins when present; otherwise the first numeric field that is not
    ``name``/``color`` (the generator may name it after the user's metric).
    """
    if "value" in point:
        return _coerce_number(point.get("value"))
    for key, raw in point.items():
        if key in _NON_VALUE_KEYS:
            continue
        number = _coerce_number(raw)
        if number is not None:
            return number
    return None


def value_label(data: list[ChartDataPoint] | list[Any]) -> str:
    for point in data:
        if not isinstance(point, dict):
            continue
        for key, raw in point.items():
            if key not in _NON_VALUE_KEYS and _coerce_number(raw) is not None:
                return str(key)
    return "value"


def extract_series(data: Any) -> tuple[list[str], list[float], list[str]]:
    """Split data points into parallel (labels, values, colors), keeping order.

    Points that are not objects or carry no number are skipped.
    """
    labels: list[str] = []
    values: list[float] = []
    colors: list[str] = []
    if not isinstance(data, list):
        return labels, values, colors

    for idx, point in enumerate(data):
        if not isinstance(point, dict):
            continue
        number = point_value(point)
        if number is None:
            continue
        color = point.get("color")
        labels.append(str(point.get("name", idx + 1)))
        values.append(number)
        colors.append(color if isinstance(color, str) and is_color_like(color) else DEFAULT_COLOR)
    return labels, values, colors


def _draw_radar(fig, labels: list[str], values: list[float], colors: list[str]) -> None:
    ax = fig.add_subplot(projection="polar")
    count = len(labels)
    angles = [2 * math.pi * idx / count for idx in range(count)]
    ax.plot(angles + angles[:1], values + values[:1], color=colors[0], linewidth=2)
    ax.fill(angles + angles[:1], values + values[:1], color=colors[0], alpha=0.25)
    ax.set_xticks(angles)
    ax.set_xticklabels(labels)


def _draw_treemap(ax, labels: list[str], values: list[float], colors: list[str]) -> None:
    # single-row treemap: widths proportional to each share of the total
    sizes = [max(value, 0.0) for value in values]
    total = sum(sizes) or 1.0
    left = 0.0
    for label, size, color in zip(labels, sizes, colors):
        width = size / total
        ax.barh([0], [width], left=[left], color=color, edgecolor="white")
        if width > 0:
            ax.text(left + width / 2, 0, label, ha="center", va="center", fontsize=9)
        left += width
    ax.set_xlim(0, 1)
    ax.axis("off")


def _draw_pie(ax, labels: list[str], values: list[float], colors: list[str]) -> None:
    sizes = [max(value, 0.0) for value in values]
    if sum(sizes) <= 0:
        positions = list(range(len(labels)))
        ax.bar(positions, values, color=colors)
        ax.set_xticks(positions, labels)
        return
    ax.pie(sizes, labels=labels, colors=colors, autopct="%1.1f%%", startangle=90)
    ax.axis("equal")


def render_chart_png(chart_type: ChartType | str, data: Any, dpi: int = 140) -> bytes | None:
    """Render data points as a PNG. Returns None when there is nothing to draw."""
    chart_type = ChartType(chart_type)
    labels, values, colors = extract_series(data)
    if not values:
        logger.info("Nothing to export for %s chart", chart_type.value)
        return None

    fig = plt.figure(figsize=(9, 5))
    try:
        if chart_type == ChartType.RADAR:
            _draw_radar(fig, labels, values, colors)
        else:
            ax = fig.add_subplot()
            positions = list(range(len(labels)))
            if chart_type in (ChartType.BAR, ChartType.COMPOSED):
                ax.bar(positions, values, color=colors)
                ax.set_xticks(positions, labels)
                ax.set_ylabel(value_label(data))
            elif chart_type == ChartType.LINE:
                ax.plot(positions, values, marker="o", color=colors[0])
                ax.set_xticks(positions, labels)
                ax.set_ylabel(value_label(data))
            elif chart_type == ChartType.AREA:
                ax.fill_between(positions, values, color=colors[0], alpha=0.4)
                ax.plot(positions, values, color=colors[0])
                ax.set_xticks(positions, labels)
                ax.set_ylabel(value_label(data))
            elif chart_type == ChartType.SCATTER:
                ax.scatter(positions, values, c=colors)
                ax.set_xticks(positions, labels)
                ax.set_ylabel(value_label(data))
            elif chart_type in (ChartType.PIE, ChartType.RADIALBAR):
                _draw_pie(ax, labels, values, colors)
            elif chart_type == ChartType.FUNNEL:
                ax.barh(positions, values, color=colors)
                ax.set_yticks(positions, labels)
                ax.invert_yaxis()
            elif chart_type == ChartType.TREEMAP:
                _draw_treemap(ax, labels, values, colors)
            if chart_type not in (ChartType.PIE, ChartType.RADIALBAR, ChartType.TREEMAP, ChartType.FUNNEL):
                ax.tick_params(axis="x", rotation=35)

        fig.tight_layout()
        buffer = io.BytesIO()
        fig.savefig(buffer, format="png", dpi=dpi)
    finally:
        plt.close(fig)
    return buffer.getvalue()
