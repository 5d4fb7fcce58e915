"""Chart kind registry.

The five chart kinds form a closed tagged variant. Each variant carries only
its own sizing/styling knobs and exposes a single ``draw(frame, ctx)``
capability; the registry maps the option ``type`` tag onto a variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Callable, ClassVar, Dict, Optional, Union

from ..errors import UnknownChartTypeError
from ..options import ChartOptions
from .bar_charts import draw_bar_chart
from .context import RenderContext
from .gauge_charts import draw_gauge_chart
from .interaction import build_legend
from .line_charts import draw_line_chart
from .pie_charts import draw_pie_chart
from .types import Frame


@dataclass(frozen=True)
class LineConfig:
    kind: ClassVar[str] = "line"
    curve_type: str = "linear"
    fill_area: bool = False
    fill_opacity: float = 0.1
    line_width: float = 2
    point_radius: float = 4

    @classmethod
    def from_options(cls, o: ChartOptions) -> "LineConfig":
        return cls(o.curve_type, o.fill_area, o.fill_opacity, o.line_width, o.point_radius)

    def draw(self, frame: Frame, ctx: RenderContext) -> None:
        draw_line_chart(frame, ctx, self)


@dataclass(frozen=True)
class BarConfig:
    kind: ClassVar[str] = "bar"
    border_width: float = 1
    border_color: Optional[str] = "#000000"

    @classmethod
    def from_options(cls, o: ChartOptions) -> "BarConfig":
        return cls(o.border_width, o.border_color)

    def draw(self, frame: Frame, ctx: RenderContext) -> None:
        draw_bar_chart(frame, ctx, self)


@dataclass(frozen=True)
class PieConfig:
    kind: ClassVar[str] = "pie"
    donut: ClassVar[bool] = False
    gap: float = 2
    border_width: float = 1
    border_color: Optional[str] = "#000000"
    donut_thickness: float = 0

    @classmethod
    def from_options(cls, o: ChartOptions) -> "PieConfig":
        return cls(o.gap, o.border_width, o.border_color, o.donut_thickness)

    def draw(self, frame: Frame, ctx: RenderContext) -> None:
        draw_pie_chart(frame, ctx, self)


@dataclass(frozen=True)
class DonutConfig(PieConfig):
    kind: ClassVar[str] = "donut"
    donut: ClassVar[bool] = True


@dataclass(frozen=True)
class GaugeConfig:
    kind: ClassVar[str] = "gauge"
    max_value: float = 100
    curve_width: float = 20

    @classmethod
    def from_options(cls, o: ChartOptions) -> "GaugeConfig":
        return cls(o.max_gauge_value, o.gauge_curve_width)

    def draw(self, frame: Frame, ctx: RenderContext) -> None:
        draw_gauge_chart(frame, ctx, self)


ChartConfig = Union[LineConfig, BarConfig, PieConfig, DonutConfig, GaugeConfig]


@dataclass
class ChartType:
    """Metadata for a registered chart kind."""

    chart_type: str
    factory: Callable[[ChartOptions], ChartConfig]
    description: str


class ChartRegistry:
    def __init__(self) -> None:
        self._types: Dict[str, ChartType] = {}

    def register(self, chart_type: str, factory: Callable[[ChartOptions], ChartConfig], description: str) -> None:
        if chart_type in self._types:
            raise ValueError(f"Chart type already registered: {chart_type}")
        self._types[chart_type] = ChartType(chart_type, factory, description)

    def config_for(self, chart_type: str, options: ChartOptions) -> ChartConfig:
        ct = self._types.get(chart_type)
        if ct is None:
            raise UnknownChartTypeError(
                f"Unknown chart type: {chart_type}", context={"known": sorted(self._types)}
            )
        return ct.factory(options)

    def __contains__(self, chart_type: object) -> bool:
        return chart_type in self._types

    def list_types(self) -> Dict[str, str]:
        return {k: v.description for k, v in self._types.items()}


chart_registry = ChartRegistry()
chart_registry.register("line", LineConfig.from_options, "Multi-series line chart")
chart_registry.register("bar", BarConfig.from_options, "Grouped bar chart")
chart_registry.register("pie", PieConfig.from_options, "Pie chart over all points")
chart_registry.register("donut", DonutConfig.from_options, "Pie chart with a center hole")
chart_registry.register("gauge", GaugeConfig.from_options, "Single value 270 degree dial")


def render_frame(ctx: RenderContext, config: ChartConfig) -> Frame:
    """Pure render pass: series + options + layout in, primitives out."""
    start = perf_counter()
    frame = Frame(ctx.width, ctx.height, timeline=ctx.timeline)
    config.draw(frame, ctx)
    if ctx.options.show_legend:
        frame.add(build_legend(ctx.series, ctx.options, ctx.margin, ctx.width, ctx.height, ctx.fonts))
    frame.meta["chart_type"] = config.kind
    frame.meta["build_ms"] = (perf_counter() - start) * 1000.0
    return frame


__all__ = [
    "LineConfig",
    "BarConfig",
    "PieConfig",
    "DonutConfig",
    "GaugeConfig",
    "ChartConfig",
    "ChartType",
    "ChartRegistry",
    "chart_registry",
    "render_frame",
]
