"""Grouped bar chart renderer.

The plot width is split into one group per visible index; each group holds
one bar per series. Bars grow from the zero line when the nice range
straddles zero, otherwise from the range boundary nearest to zero.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from .context import RenderContext, draw_axes, draw_horizontal_grid, draw_vertical_grid, draw_x_labels
from .interaction import attach, format_value
from .palette import point_color
from .types import Frame, HitShape, Primitive

if TYPE_CHECKING:  # pragma: no cover
    from .registry import BarConfig


def bar_extent(ctx: RenderContext, value: float) -> Tuple[float, float]:
    """Return (y, height) in pixels for a bar of ``value``."""
    m = ctx.mapper
    scale = ctx.scale
    y_value = m.point_y(value)
    if scale.min_nice >= 0 and scale.max_nice >= 0:
        return y_value, m.point_y(scale.min_nice) - y_value
    if scale.min_nice <= 0 and scale.max_nice <= 0:
        top = m.point_y(scale.max_nice)
        return top, y_value - top
    zero_y = m.point_y(0)
    return min(zero_y, y_value), abs(zero_y - y_value)


def bar_origin(ctx: RenderContext) -> float:
    """Pixel row bars start growing from during animation."""
    m = ctx.mapper
    scale = ctx.scale
    if scale.min_nice >= 0 and scale.max_nice >= 0:
        return m.point_y(scale.min_nice)
    if scale.min_nice < 0 and scale.max_nice < 0:
        return m.point_y(scale.max_nice)
    return m.point_y(0)


def draw_bar_chart(frame: Frame, ctx: RenderContext, config: "BarConfig") -> None:
    n = ctx.visible_count
    if n == 0:
        return
    opts = ctx.options
    margin = ctx.margin
    series_count = len(ctx.series)
    group_width = ctx.mapper.plot_width / n
    bar_width = group_width / (series_count + 1)
    bar_gap = (group_width - series_count * bar_width) / (series_count + 1)
    group_xs = [margin.left + i * group_width for i in range(n)]

    if opts.show_grid:
        draw_horizontal_grid(frame, ctx)
        draw_vertical_grid(frame, ctx, [x + group_width for x in group_xs])
    if opts.show_axis_labels:
        draw_x_labels(frame, ctx, [x + group_width / 2 for x in group_xs])
    if opts.show_axis:
        draw_axes(frame, ctx)

    origin = bar_origin(ctx)
    bars = frame.add(Primitive("g", {"class": "bars"}))
    for s_index, s in enumerate(ctx.series):
        for i, point in enumerate(ctx.visible(s)):
            x = group_xs[i] + bar_gap + s_index * (bar_width + bar_gap)
            y, height = bar_extent(ctx, point.value)
            color = point_color(point, s, s_index, opts)

            bar = Primitive("rect", {"x": x, "y": y, "width": bar_width, "height": height, "fill": color})
            if config.border_color:
                bar.attrs["stroke"] = config.border_color
                bar.attrs["stroke-width"] = config.border_width
            attach(bar, "bar", s, point, opts, hit=HitShape("rect", (x, y, bar_width, height)), tooltip=point)
            ctx.timeline.tween(bar, "height", 0, height)
            ctx.timeline.tween(bar, "y", origin, y)
            bars.add(bar)

            if not opts.show_data_labels:
                continue
            if point.value >= 0:
                label_y, start_y = y - 5, origin - 5
            else:
                label_y, start_y = y + height + 15, origin + 15
            label = bars.add(
                ctx.text(x + bar_width / 2, label_y, format_value(point.value), fill=color, **{"text-anchor": "middle"})
            )
            ctx.timeline.tween(label, "y", start_y, label_y)


__all__ = ["bar_extent", "bar_origin", "draw_bar_chart"]
