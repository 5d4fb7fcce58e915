"""Pie and donut renderer.

Slices cover every point of every series, start at 12 o'clock and proceed
clockwise; each slice spans ``value / total * 2π``. A donut is a pie with a
concentric hole painted in the background color.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, List, Tuple

from .. import settings
from ..errors import warn_degenerate
from .context import RenderContext, draw_center_text
from .geometry import polar_to_cartesian, slice_path
from .interaction import attach, format_value, plain_number
from .palette import point_color
from .types import Frame, HitShape, Primitive

if TYPE_CHECKING:  # pragma: no cover
    from .registry import PieConfig

log = logging.getLogger(__name__)

START_ANGLE = -math.pi / 2


def pie_total(ctx: RenderContext) -> float:
    return sum(p.value for s in ctx.series for p in s.data)


def slice_angles(values: List[float], total: float) -> List[Tuple[float, float]]:
    """(start, end) angle for each value, clockwise from 12 o'clock."""
    spans = []
    start = START_ANGLE
    for value in values:
        end = start + (value / total) * 2 * math.pi
        spans.append((start, end))
        start = end
    return spans


def pie_radius(ctx: RenderContext) -> float:
    m = ctx.mapper
    shortest = min(m.plot_width, m.plot_height)
    divisor = settings.PIE_RADIUS_DIVISOR_LEGEND if ctx.options.show_legend else settings.PIE_RADIUS_DIVISOR
    return shortest / divisor


def _slice_stroke(config: "PieConfig", background: str) -> dict:
    if config.gap > 0:
        return {"stroke": background, "stroke-width": config.gap}
    if config.border_width > 0:
        return {"stroke": config.border_color or "#000", "stroke-width": config.border_width}
    return {}


def draw_pie_chart(frame: Frame, ctx: RenderContext, config: "PieConfig") -> None:
    if not ctx.series:
        return
    total = pie_total(ctx)
    if total == 0:
        warn_degenerate(log, "Total value of pie chart is 0. Cannot draw pie chart.")
        return

    opts = ctx.options
    cx, cy = ctx.mapper.center
    radius = pie_radius(ctx)
    hole = max(0.0, radius - config.donut_thickness) if config.donut else 0.0
    half = opts.animation_duration / 2
    step_ms = settings.MARKER_ANIMATION_MS

    entries = [(s, p, i) for s in ctx.series for i, p in enumerate(s.data)]
    spans = slice_angles([p.value for _s, p, _i in entries], total)
    frame.meta["slices"] = spans

    group = frame.add(Primitive("g", {"class": "pie-group"}))
    for (s, point, index), (start, end) in zip(entries, spans):
        sweep = end - start
        mid = start + sweep / 2
        color = point_color(point, s, index, opts)

        d, length = slice_path(cx, cy, radius, start, end)
        piece = Primitive("path", {"d": d, "fill": color, **_slice_stroke(config, opts.background_color)})
        attach(
            piece,
            "pie",
            s,
            point,
            opts,
            hit=HitShape("sector", (cx, cy, hole, radius, start, end)),
            tooltip=point,
        )
        ctx.timeline.draw_stroke(piece, length)
        group.add(piece)

        if opts.show_data_labels:
            edge_x, edge_y = polar_to_cartesian(cx, cy, radius, mid)
            label_x, label_y = polar_to_cartesian(cx, cy, radius * settings.PIE_LABEL_RADIUS_FACTOR, mid)
            right_side = label_x > cx
            tick_x = label_x + settings.LEADER_TICK if right_side else label_x - settings.LEADER_TICK

            leader = group.add(
                Primitive(
                    "line",
                    {"x1": edge_x, "y1": edge_y, "x2": label_x, "y2": label_y, "stroke": color, "stroke-width": 1},
                )
            )
            ctx.timeline.tween(leader, "x2", edge_x, label_x, duration_ms=step_ms)
            ctx.timeline.tween(leader, "y2", edge_y, label_y, duration_ms=step_ms)

            tick = group.add(
                Primitive(
                    "line",
                    {"x1": label_x, "y1": label_y, "x2": tick_x, "y2": label_y, "stroke": color, "stroke-width": 1},
                )
            )
            ctx.timeline.tween(tick, "x2", label_x, tick_x, begin_ms=half, duration_ms=step_ms)

            pct = format_value(point.value / total * 100)
            label = group.add(
                ctx.text(
                    tick_x + (5 if right_side else -5),
                    label_y,
                    f"{point.label}: {pct}%",
                    fill=color,
                    **{"text-anchor": "start" if right_side else "end", "alignment-baseline": "middle"},
                )
            )
            shift = settings.LEADER_TICK + 5
            ctx.timeline.tween(label, "opacity", 0, 1, begin_ms=half, duration_ms=step_ms)
            ctx.timeline.translate(
                label,
                f"-{shift},0" if right_side else f"{shift},0",
                "0,0",
                begin_ms=half,
                duration_ms=step_ms,
            )

    if config.donut:
        donut_hole = group.add(Primitive("circle", {"cx": cx, "cy": cy, "r": hole, "fill": opts.background_color}))
        if config.gap <= 0 and config.border_width > 0:
            donut_hole.attrs["stroke"] = config.border_color or "#000"
            donut_hole.attrs["stroke-width"] = config.border_width

    if opts.center_text is not None:
        center = opts.center_text
    else:
        center = f"Total: {plain_number(total)}" if config.donut else ""
    draw_center_text(frame, ctx, cx, cy, center)


__all__ = ["START_ANGLE", "pie_total", "slice_angles", "pie_radius", "draw_pie_chart"]
