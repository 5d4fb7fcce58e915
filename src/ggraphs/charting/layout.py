"""Layout engine: font sizing, margin insets and the visible window size."""

from __future__ import annotations

from typing import Sequence

from .. import settings
from ..options import ChartOptions
from .types import FontMetrics, Margin, Series


def calculate_fonts(chart_type: str, options: ChartOptions, width: float, height: float) -> FontMetrics:
    """Scale fonts to the container; gauges keep the inherited size."""
    if chart_type == "gauge":
        return FontMetrics(options.font_size, options.font_size * settings.GAUGE_LABEL_FONT_RATIO)
    min_dimension = min(width, height)
    font_size = max(
        settings.MIN_FONT_SIZE,
        min(options.font_size, min_dimension / settings.FONT_SIZE_DIVISOR),
    )
    return FontMetrics(font_size, font_size * settings.LABEL_FONT_RATIO)


def compute_margin(chart_type: str, options: ChartOptions) -> Margin:
    """Insets around the plot area.

    A visible legend reserves extra room on its side. Without a legend, pie
    and donut charts use a small uniform inset, gauges inset by half the arc
    width, and axis-less cartesian charts shrink to a compact inset.
    """
    base = settings.BASE_MARGIN
    if options.show_legend:
        top = right = bottom = left = base
        position = options.legend_position
        if position == "top":
            top += settings.LEGEND_MARGIN_VERTICAL
        elif position == "left":
            left += settings.LEGEND_MARGIN_HORIZONTAL
        elif position == "right":
            right += settings.LEGEND_MARGIN_HORIZONTAL
        else:
            bottom += settings.LEGEND_MARGIN_VERTICAL
        return Margin(top, right, bottom, left)
    if chart_type in ("pie", "donut"):
        m = settings.PIE_MARGIN
        return Margin(m, m, m, m)
    if chart_type == "gauge":
        offset = options.gauge_curve_width / 2
        return Margin(offset, offset, offset, offset)
    if not options.show_axis_labels:
        m = settings.COMPACT_MARGIN
        return Margin(m, m, m, m)
    return Margin(base, base, base, base)


def visible_data_count(series: Sequence[Series], max_data_points: int) -> int:
    """Points per series eligible for drawing, bounded by the first series."""
    if not series or not series[0].data:
        return 0
    length = len(series[0].data)
    if max_data_points == 0:
        return length
    return min(max_data_points, length)


__all__ = ["calculate_fonts", "compute_margin", "visible_data_count"]
