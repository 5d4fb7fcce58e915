"""Tests for the chart kind registry and tagged configs."""

from __future__ import annotations

import pytest

from ggraphs.charting.registry import (
    BarConfig,
    ChartRegistry,
    DonutConfig,
    GaugeConfig,
    LineConfig,
    PieConfig,
    chart_registry,
)
from ggraphs.errors import UnknownChartTypeError
from ggraphs.options import resolve_options


def test_builtin_kinds_registered():
    assert set(chart_registry.list_types()) == {"line", "bar", "pie", "donut", "gauge"}
    assert "line" in chart_registry
    assert "radar" not in chart_registry


@pytest.mark.parametrize(
    "kind,cls",
    [("line", LineConfig), ("bar", BarConfig), ("pie", PieConfig), ("donut", DonutConfig), ("gauge", GaugeConfig)],
)
def test_config_for_returns_variant(kind, cls):
    config = chart_registry.config_for(kind, resolve_options())
    assert type(config) is cls
    assert config.kind == kind


def test_configs_carry_only_their_knobs():
    opts = resolve_options({"donutThickness": 30, "maxGaugeValue": 250, "gaugeCurveWidth": 12, "curveType": "curve"})
    assert chart_registry.config_for("donut", opts).donut_thickness == 30
    assert chart_registry.config_for("donut", opts).donut is True
    assert chart_registry.config_for("pie", opts).donut is False
    gauge = chart_registry.config_for("gauge", opts)
    assert (gauge.max_value, gauge.curve_width) == (250, 12)
    assert chart_registry.config_for("line", opts).curve_type == "curve"


def test_unknown_kind_raises():
    with pytest.raises(UnknownChartTypeError) as exc:
        chart_registry.config_for("radar", resolve_options())
    assert "line" in exc.value.context["known"]


def test_duplicate_registration_rejected():
    registry = ChartRegistry()
    registry.register("line", LineConfig.from_options, "Line")
    with pytest.raises(ValueError):
        registry.register("line", LineConfig.from_options, "Again")
