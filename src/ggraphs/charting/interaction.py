"""Interaction layer: tooltips, click payloads, legend overlay, hit testing."""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from .. import settings
from ..options import ChartOptions
from .geometry import Point
from .palette import series_color
from .types import DataPoint, FontMetrics, Frame, HitShape, Margin, Primitive, Series

log = logging.getLogger(__name__)


def plain_number(value: float) -> str:
    """Render a value the way it was entered (``10`` rather than ``10.0``)."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_value(value: float) -> str:
    """Axis/data label text: integers verbatim, everything else one decimal."""
    if float(value).is_integer():
        return str(int(value))
    return str(Decimal(repr(float(value))).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def tooltip_content(series: Series, point: DataPoint, options: ChartOptions) -> str:
    if options.tooltip_formatter is not None:
        return str(options.tooltip_formatter(series, point))
    if point.tooltip:
        return point.tooltip
    return f"{series.name}: {point.label} - {plain_number(point.value)}"


def attach(
    prim: Primitive,
    role: str,
    series: Series,
    data,
    options: ChartOptions,
    *,
    hit: HitShape | None = None,
    tooltip: DataPoint | None = None,
) -> Primitive:
    """Mark a primitive as interactive (tooltip and/or click target)."""
    if tooltip is not None and options.show_tooltip:
        prim.title = tooltip_content(series, tooltip, options)
        prim.attrs["cursor"] = "pointer"
    if options.on_click is not None:
        prim.attrs["cursor"] = "pointer"
    prim.role = role
    prim.series = series
    prim.point = data
    prim.hit = hit
    return prim


def legend_origin(options: ChartOptions, margin: Margin, width: float, height: float):
    """Return (start_x, start_y, step_x, step_y) for the legend baseline."""
    pad = settings.LEGEND_PADDING
    position = options.legend_position
    if position == "top":
        return margin.left, pad, settings.LEGEND_STRIDE_X, 0
    if position == "left":
        return pad, margin.top, 0, settings.LEGEND_STRIDE_Y
    if position == "right":
        return width - margin.right - settings.LEGEND_LABEL_WIDTH - pad, margin.top, 0, settings.LEGEND_STRIDE_Y
    return margin.left, height - pad, settings.LEGEND_STRIDE_X, 0


def build_legend(
    series: Sequence[Series],
    options: ChartOptions,
    margin: Margin,
    width: float,
    height: float,
    fonts: FontMetrics,
) -> Primitive:
    legend = Primitive("g", {"class": "legend"})
    start_x, start_y, step_x, step_y = legend_origin(options, margin, width, height)
    swatch = settings.LEGEND_SWATCH
    for index, s in enumerate(series):
        x = start_x + index * step_x
        y = start_y + index * step_y
        legend.add(
            Primitive(
                "rect",
                {"x": x, "y": y - swatch / 2, "width": swatch, "height": swatch, "fill": series_color(s, index, options)},
            )
        )
        legend.add(
            Primitive(
                "text",
                {
                    "x": x + swatch + 5,
                    "y": y + 5,
                    "font-size": fonts.label_font_size,
                    "font-family": options.font_family,
                    "fill": options.text_color,
                },
                text=s.name or f"Series {index + 1}",
            )
        )
    return legend


# ---------------- hit testing ------------------------------------------------


def _segment_distance(p: Point, a: Point, b: Point) -> float:
    ax, ay = a
    bx, by = b
    dx, dy = bx - ax, by - ay
    if dx == 0 and dy == 0:
        return math.hypot(p[0] - ax, p[1] - ay)
    t = max(0.0, min(1.0, ((p[0] - ax) * dx + (p[1] - ay) * dy) / (dx * dx + dy * dy)))
    return math.hypot(p[0] - (ax + t * dx), p[1] - (ay + t * dy))


def contains(shape: HitShape, x: float, y: float) -> bool:
    k, p = shape.kind, shape.params
    if k == "circle":
        cx, cy, r = p
        return math.hypot(x - cx, y - cy) <= r
    if k == "rect":
        rx, ry, rw, rh = p
        return min(rx, rx + rw) <= x <= max(rx, rx + rw) and min(ry, ry + rh) <= y <= max(ry, ry + rh)
    if k == "sector":
        cx, cy, inner, outer, start, end = p
        dist = math.hypot(x - cx, y - cy)
        if dist < inner or dist > outer:
            return False
        offset = (math.atan2(y - cy, x - cx) - start) % (2 * math.pi)
        return offset <= end - start
    if k == "polyline":
        tolerance, coords = p[0], p[1:]
        pts = list(zip(coords[0::2], coords[1::2]))
        return any(_segment_distance((x, y), pts[i - 1], pts[i]) <= tolerance for i in range(1, len(pts)))
    return False


def hit_test(frame: Frame, x: float, y: float) -> Optional[Primitive]:
    """Top-most interactive primitive under (x, y); later primitives win."""
    found = None
    for prim in frame.walk():
        if prim.hit is not None and contains(prim.hit, x, y):
            found = prim
    return found


def dispatch_click(frame: Frame, x: float, y: float, options: ChartOptions) -> Optional[Primitive]:
    prim = hit_test(frame, x, y)
    if prim is None or options.on_click is None:
        return prim
    event = prim.click_event()
    if event is not None:
        try:
            options.on_click(event)
        except Exception:  # handler errors are logged, never raised
            log.exception("on_click callback failed for %s", event.type)
    return prim


__all__ = [
    "plain_number",
    "format_value",
    "tooltip_content",
    "attach",
    "legend_origin",
    "build_legend",
    "contains",
    "hit_test",
    "dispatch_click",
]
