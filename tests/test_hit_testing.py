"""Tests for tooltips, legend layout, hit testing and click dispatch."""

from __future__ import annotations

import logging
import math

from ggraphs.charting.interaction import (
    build_legend,
    contains,
    format_value,
    hit_test,
    legend_origin,
    tooltip_content,
)
from ggraphs.charting.types import FontMetrics, Frame, HitShape, Margin, Primitive, normalize_series
from ggraphs.options import resolve_options


def test_format_value():
    assert format_value(10) == "10"
    assert format_value(10.0) == "10"
    assert format_value(2.25) == "2.3"
    assert format_value(-0.05) == "-0.1"


def test_tooltip_default_and_formatter():
    series = normalize_series([{"name": "Sales", "data": [{"label": "Q1", "value": 12.5}]}])[0]
    point = series.data[0]
    assert tooltip_content(series, point, resolve_options()) == "Sales: Q1 - 12.5"
    opts = resolve_options({"tooltipFormatter": lambda s, p: f"{p.label}={p.value:g}"})
    assert tooltip_content(series, point, opts) == "Q1=12.5"


def test_point_tooltip_beats_default_text():
    series = normalize_series([{"name": "S", "data": [{"label": "Q1", "value": 3, "tooltip": "S in Q1: 3"}]}])[0]
    assert tooltip_content(series, series.data[0], resolve_options()) == "S in Q1: 3"


def test_legend_origins():
    margin = Margin(50, 150, 50, 50)
    assert legend_origin(resolve_options({"legendPosition": "top"}), margin, 600, 400) == (50, 10, 120, 0)
    assert legend_origin(resolve_options({"legendPosition": "bottom"}), margin, 600, 400) == (50, 390, 120, 0)
    assert legend_origin(resolve_options({"legendPosition": "left"}), margin, 600, 400) == (10, 50, 0, 25)
    assert legend_origin(resolve_options({"legendPosition": "right"}), margin, 600, 400) == (340, 50, 0, 25)


def test_build_legend_one_entry_per_series():
    series = normalize_series([{"name": "A", "data": []}, {"name": "", "data": [], "color": "#123456"}])
    legend = build_legend(series, resolve_options(), Margin(50, 50, 100, 50), 600, 400, FontMetrics(16, 12.8))
    rects = [c for c in legend.children if c.tag == "rect"]
    texts = [c.text for c in legend.children if c.tag == "text"]
    assert len(rects) == 2
    assert rects[1].attrs["fill"] == "#123456"
    assert rects[1].attrs["x"] - rects[0].attrs["x"] == 120
    assert texts == ["A", "Series 2"]


def test_contains_shapes():
    assert contains(HitShape("circle", (0, 0, 5)), 3, 4)
    assert not contains(HitShape("circle", (0, 0, 5)), 4, 4)
    assert contains(HitShape("rect", (0, 10, 5, -10)), 2, 5)
    assert contains(HitShape("polyline", (2, 0, 0, 10, 0, 10, 10)), 5, 1)
    assert not contains(HitShape("polyline", (2, 0, 0, 10, 0)), 5, 3)
    quarter = HitShape("sector", (0, 0, 0, 10, -math.pi / 2, 0))
    assert contains(quarter, 5, -5)
    assert not contains(quarter, 5, 5)
    ring = HitShape("sector", (0, 0, 4, 10, 0, 2 * math.pi))
    assert not contains(ring, 1, 1)


def test_later_primitives_win():
    below = Primitive("rect", hit=HitShape("rect", (0, 0, 10, 10)), role="bar")
    above = Primitive("circle", hit=HitShape("circle", (5, 5, 2)), role="point")
    frame = Frame(10, 10, [below, above])
    assert hit_test(frame, 5, 5) is above
    assert hit_test(frame, 1, 1) is below
    assert hit_test(frame, 50, 50) is None


def test_click_dispatches_event(make_chart, sales):
    events = []
    chart = make_chart({"type": "bar", "data": sales, "animation": False, "onClick": events.append})
    bar = [p for p in chart.frame.find("rect") if p.role == "bar"][0]
    x, y = bar.attrs["x"] + 1, bar.attrs["y"] + 1
    event = chart.handle_click(x, y)
    assert event.type == "bar"
    assert event.series.name == "Revenue"
    assert events[0].data.label == "Jan"
    assert chart.tooltip_at(x, y) == "Revenue: Jan - 12"


def test_failing_click_handler_is_logged(make_chart, sales, caplog):
    def boom(event):
        raise RuntimeError("handler failed")

    chart = make_chart({"type": "bar", "data": sales, "animation": False, "onClick": boom})
    bar = [p for p in chart.frame.find("rect") if p.role == "bar"][0]
    with caplog.at_level(logging.ERROR):
        chart.handle_click(bar.attrs["x"] + 1, bar.attrs["y"] + 1)
    assert any("on_click" in r.getMessage() for r in caplog.records)


def test_tooltips_can_be_disabled(make_chart, sales):
    chart = make_chart({"data": sales, "animation": False, "showTooltip": False})
    circle = [p for p in chart.frame.find("circle") if p.role == "point"][0]
    assert circle.title is None
    assert chart.tooltip_at(circle.attrs["cx"], circle.attrs["cy"]) is None
