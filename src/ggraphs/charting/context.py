"""Render context and the cartesian furniture shared by line and bar charts."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Any, List, Sequence

from .. import settings
from ..options import ChartOptions
from .animation import Timeline
from .backends import TextMetricsProtocol
from .interaction import format_value
from .responsive import plan_x_labels
from .scale import CoordinateMapper, ScaleState
from .types import DataPoint, FontMetrics, Frame, Margin, Primitive, Series


@dataclass(frozen=True)
class RenderContext:
    """Everything a renderer may read during one pass (read-only)."""

    series: Sequence[Series]
    options: ChartOptions
    chart_type: str
    width: float
    height: float
    margin: Margin
    fonts: FontMetrics
    scale: ScaleState
    visible_count: int
    metrics: TextMetricsProtocol
    timeline: Timeline

    @cached_property
    def mapper(self) -> CoordinateMapper:
        return CoordinateMapper(self.width, self.height, self.margin, self.scale, self.visible_count)

    @property
    def animate(self) -> bool:
        return self.timeline.enabled

    def visible(self, series: Series) -> List[DataPoint]:
        return series.data[: self.visible_count]

    def text(self, x: float, y: float, content: str, *, size: float | None = None, **attrs: Any) -> Primitive:
        base = {
            "x": x,
            "y": y,
            "font-size": self.fonts.label_font_size if size is None else size,
            "font-family": self.options.font_family,
            "fill": self.options.text_color,
        }
        base.update(attrs)
        return Primitive("text", base, text=content)


def draw_horizontal_grid(frame: Frame, ctx: RenderContext) -> None:
    m = ctx.mapper
    group = frame.add(Primitive("g", {"class": "horizontal-grid"}))
    for value in m.value_steps(settings.GRID_STEPS):
        y = m.point_y(value)
        group.add(
            Primitive(
                "line",
                {
                    "x1": ctx.margin.left,
                    "y1": y,
                    "x2": ctx.width - ctx.margin.right,
                    "y2": y,
                    "stroke": ctx.options.grid_color,
                    "stroke-width": 1,
                    "stroke-dasharray": "5,5",
                },
            )
        )


def draw_vertical_grid(frame: Frame, ctx: RenderContext, xs: Sequence[float]) -> None:
    group = frame.add(Primitive("g", {"class": "vertical-grid"}))
    seen = set()
    for x in xs:
        if x in seen:
            continue
        seen.add(x)
        group.add(
            Primitive(
                "line",
                {
                    "x1": x,
                    "y1": ctx.margin.top,
                    "x2": x,
                    "y2": ctx.height - ctx.margin.bottom,
                    "stroke": ctx.options.grid_color,
                    "stroke-dasharray": "5,5",
                },
            )
        )


def draw_axes(frame: Frame, ctx: RenderContext) -> None:
    m = ctx.mapper
    axes = frame.add(Primitive("g", {"class": "axes"}))
    base_y = m.point_y(ctx.scale.baseline)
    stroke = {"stroke": ctx.options.axis_color, "stroke-width": 2}
    axes.add(
        Primitive("line", {"x1": ctx.margin.left, "y1": base_y, "x2": ctx.width - ctx.margin.right, "y2": base_y, **stroke})
    )
    axes.add(
        Primitive(
            "line",
            {"x1": ctx.margin.left, "y1": ctx.margin.top, "x2": ctx.margin.left, "y2": ctx.height - ctx.margin.bottom, **stroke},
        )
    )
    if not ctx.options.show_axis_labels:
        return
    for value in m.value_steps(settings.GRID_STEPS):
        axes.add(
            ctx.text(
                ctx.margin.left - settings.Y_LABEL_OFFSET,
                m.point_y(value),
                format_value(value),
                **{"text-anchor": "end", "alignment-baseline": "middle"},
            )
        )


def draw_x_labels(frame: Frame, ctx: RenderContext, xs: Sequence[float]) -> None:
    if not ctx.series:
        return
    labels = [p.label for p in ctx.visible(ctx.series[0])]
    plan = plan_x_labels(
        labels, ctx.mapper.plot_width, ctx.fonts.label_font_size, ctx.options.font_family, ctx.metrics
    )
    y = ctx.height - ctx.margin.bottom + settings.X_LABEL_OFFSET
    group = frame.add(Primitive("g", {"class": "x-labels"}))
    for i, (label, x) in enumerate(zip(labels, xs)):
        if not plan.shows(i):
            continue
        attrs = {"text-anchor": "middle"}
        if plan.rotate:
            attrs["transform"] = f"rotate(45, {x:.3f}, {y:.3f})"
        group.add(ctx.text(x, y, label, **attrs))


def draw_center_text(frame: Frame, ctx: RenderContext, x: float, y: float, content: str) -> None:
    if not ctx.options.show_center_text or not content:
        return
    frame.add(
        ctx.text(
            x,
            y,
            content,
            size=ctx.fonts.font_size,
            **{"text-anchor": "middle", "dominant-baseline": "middle", "font-weight": "bold"},
        )
    )


__all__ = [
    "RenderContext",
    "draw_horizontal_grid",
    "draw_vertical_grid",
    "draw_axes",
    "draw_x_labels",
    "draw_center_text",
]
