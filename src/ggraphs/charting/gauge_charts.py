"""Gauge renderer.

A single value drawn as a 270 degree dial. Angles are measured clockwise
from 12 o'clock, so the dial runs from -135 to +135 degrees with the
opening at the bottom.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from .. import settings
from ..errors import warn_degenerate
from .context import RenderContext
from .geometry import arc_path
from .interaction import attach, format_value
from .palette import series_color
from .types import Frame, HitShape, Primitive

if TYPE_CHECKING:  # pragma: no cover
    from .registry import GaugeConfig

log = logging.getLogger(__name__)

SWEEP = math.radians(270)
_CLOCK_OFFSET = -math.pi / 2  # 12 o'clock in screen-space radians
START = math.radians(-135) + _CLOCK_OFFSET
END = START + SWEEP


def gauge_fraction(value: float, max_value: float) -> float:
    """Share of the dial covered by ``value`` (clamped to the arc span)."""
    return min(1.0, max(0.0, value / max_value))


def gauge_radius(ctx: RenderContext) -> float:
    m = ctx.mapper
    shortest = min(m.plot_width, m.plot_height)
    divisor = settings.GAUGE_RADIUS_DIVISOR_LEGEND if ctx.options.show_legend else settings.GAUGE_RADIUS_DIVISOR
    return shortest / divisor


def draw_gauge_chart(frame: Frame, ctx: RenderContext, config: "GaugeConfig") -> None:
    if not ctx.series or not ctx.series[0].data:
        warn_degenerate(log, "Gauge chart needs at least one data point.")
        return
    opts = ctx.options
    series = ctx.series[0]
    point = series.data[0]
    cx, cy = ctx.mapper.center
    radius = gauge_radius(ctx)

    background_d, _ = arc_path(cx, cy, radius, START, END)
    frame.add(
        Primitive(
            "path",
            {"d": background_d, "fill": "none", "stroke": opts.grid_color, "stroke-width": config.curve_width},
        )
    )

    percentage = point.value / config.max_value * 100
    fraction = gauge_fraction(point.value, config.max_value)
    value_end = START + fraction * SWEEP
    frame.meta["gauge"] = {"percentage": percentage, "fraction": fraction, "sweep": fraction * SWEEP}

    value_d, length = arc_path(cx, cy, radius, START, value_end)
    value_arc = Primitive(
        "path",
        {
            "d": value_d,
            "fill": "none",
            "stroke": series_color(series, 0, opts),
            "stroke-width": config.curve_width,
            "stroke-linecap": "round",
        },
    )
    half_width = config.curve_width / 2
    attach(
        value_arc,
        "gauge",
        series,
        point,
        opts,
        hit=HitShape("sector", (cx, cy, max(0.0, radius - half_width), radius + half_width, START, value_end)),
        tooltip=point,
    )
    ctx.timeline.draw_stroke(value_arc, length)
    frame.add(value_arc)

    if opts.show_center_text:
        center = opts.center_text if opts.center_text is not None else f"{format_value(percentage)}%"
        frame.add(
            ctx.text(
                cx,
                cy,
                center,
                size=ctx.fonts.font_size,
                **{"text-anchor": "middle", "dominant-baseline": "middle", "font-weight": "bold"},
            )
        )
        frame.add(ctx.text(cx, cy + settings.GAUGE_LABEL_OFFSET, point.label or "", **{"text-anchor": "middle"}))


__all__ = ["SWEEP", "START", "END", "gauge_fraction", "gauge_radius", "draw_gauge_chart"]
