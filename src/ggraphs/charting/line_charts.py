"""Line chart renderer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import settings
from .context import (
    RenderContext,
    draw_axes,
    draw_center_text,
    draw_horizontal_grid,
    draw_vertical_grid,
    draw_x_labels,
)
from .geometry import close_to_baseline, flatten, series_path
from .interaction import attach, format_value
from .palette import series_color
from .types import Frame, HitShape, Primitive

if TYPE_CHECKING:  # pragma: no cover
    from .registry import LineConfig


def draw_line_chart(frame: Frame, ctx: RenderContext, config: "LineConfig") -> None:
    n = ctx.visible_count
    if n == 0:
        return
    opts = ctx.options
    m = ctx.mapper
    xs = [m.point_x(i) for i in range(n)]

    if opts.show_grid:
        draw_horizontal_grid(frame, ctx)
        draw_vertical_grid(frame, ctx, xs)
    if opts.show_axis_labels:
        draw_x_labels(frame, ctx, xs)
    if opts.show_axis:
        draw_axes(frame, ctx)

    clip_ref = None
    if ctx.animate:
        clip_id = frame.new_id("clipPath")
        clip = frame.add(Primitive("clipPath", {"id": clip_id}))
        rect = clip.add(
            Primitive(
                "rect",
                {"x": ctx.margin.left, "y": ctx.margin.top, "width": m.plot_width, "height": m.plot_height},
            )
        )
        ctx.timeline.tween(rect, "width", 0, m.plot_width)
        clip_ref = f"url(#{clip_id})"

    lines = frame.add(Primitive("g", {"class": "lines"}))
    baseline_y = m.point_y(ctx.scale.baseline)
    for index, s in enumerate(ctx.series):
        color = series_color(s, index, opts)
        visible = ctx.visible(s)
        if not visible:
            continue
        points = [(m.point_x(i), m.point_y(p.value)) for i, p in enumerate(visible)]
        d, length = series_path(points, config.curve_type)
        path = Primitive(
            "path", {"d": d, "stroke": color, "fill": "none", "stroke-width": config.line_width}
        )
        if config.fill_area:
            final_d = close_to_baseline(d, points, baseline_y)
            fill = lines.add(
                Primitive("path", {"d": final_d, "fill": color, "fill-opacity": config.fill_opacity})
            )
            if clip_ref is not None:
                fill.attrs["clip-path"] = clip_ref
                path.attrs["clip-path"] = clip_ref
                flat_d, _ = series_path(flatten(points, baseline_y), config.curve_type)
                ctx.timeline.tween(fill, "d", close_to_baseline(flat_d, points, baseline_y), final_d)
        ctx.timeline.draw_stroke(path, length)
        coords = tuple(c for pt in points for c in pt)
        attach(
            path,
            "line",
            s,
            list(visible),
            opts,
            hit=HitShape("polyline", (max(4.0, float(config.line_width)),) + coords),
        )
        lines.add(path)

    markers = frame.add(Primitive("g", {"class": "points"}))
    step_ms = settings.MARKER_ANIMATION_MS
    for index, s in enumerate(ctx.series):
        color = series_color(s, index, opts)
        for i, point in enumerate(ctx.visible(s)):
            x, y = m.point_x(i), m.point_y(point.value)
            rise_x = x + settings.LEADER_TICK
            rise_y = y - settings.LEADER_RISE
            tick_x = rise_x + settings.LEADER_TICK

            leader = markers.add(
                Primitive("line", {"x1": x, "y1": y, "x2": rise_x, "y2": rise_y, "stroke": color, "stroke-width": 1})
            )
            ctx.timeline.tween(leader, "y2", y, rise_y, duration_ms=step_ms)
            tick = markers.add(
                Primitive(
                    "line", {"x1": rise_x, "y1": rise_y, "x2": tick_x, "y2": rise_y, "stroke": color, "stroke-width": 1}
                )
            )
            ctx.timeline.tween(tick, "x2", rise_x, tick_x, begin_ms=step_ms, duration_ms=step_ms)

            if opts.show_data_labels:
                label = markers.add(
                    ctx.text(
                        tick_x,
                        rise_y,
                        format_value(point.value),
                        fill=color,
                        **{"text-anchor": "start", "alignment-baseline": "middle"},
                    )
                )
                ctx.timeline.tween(label, "opacity", 0, 1, begin_ms=step_ms, duration_ms=step_ms)
                ctx.timeline.translate(
                    label, f"-{settings.LEADER_TICK},0", "0,0", begin_ms=step_ms, duration_ms=step_ms
                )

            circle = Primitive(
                "circle",
                {
                    "cx": x,
                    "cy": y,
                    "r": config.point_radius,
                    "fill": opts.background_color,
                    "stroke": color,
                    "stroke-width": 2,
                },
            )
            attach(
                circle,
                "point",
                s,
                point,
                opts,
                hit=HitShape("circle", (x, y, max(6.0, float(config.point_radius) + 2))),
                tooltip=point,
            )
            ctx.timeline.tween(circle, "r", 0, config.point_radius)
            ctx.timeline.tween(circle, "opacity", 0, 1)
            markers.add(circle)

    if opts.center_text:
        draw_center_text(frame, ctx, ctx.width / 2, ctx.height / 2, opts.center_text)


__all__ = ["draw_line_chart"]
