"""Tests for option resolution and validation."""

from __future__ import annotations

import pytest

from ggraphs.errors import ConfigurationError
from ggraphs.options import EnvironmentDefaults, canonical_key, resolve_options, with_changes
from ggraphs import settings


def test_defaults():
    opts = resolve_options()
    assert opts.colors[0] == "#FF6B6B"
    assert len(opts.colors) == 12
    assert opts.grid_color == "#E0E0E0"
    assert opts.max_gauge_value == 100
    assert opts.legend_position == "bottom"
    assert opts.max_data_points == 20
    assert opts.type == "line"


def test_environment_overrides_builtin_and_caller_overrides_environment():
    env = EnvironmentDefaults(font_size=12, font_family="Georgia", text_color="#111", background_color="#222")
    opts = resolve_options({"textColor": "#333"}, env)
    assert opts.font_size == 12
    assert opts.font_family == "Georgia"
    assert opts.text_color == "#333"
    assert opts.background_color == "#222"


def test_camel_case_aliases():
    assert canonical_key("legendPosition") == "legend_position"
    assert canonical_key("show_grid") == "show_grid"
    opts = resolve_options({"showGrid": False, "maxDataPoints": 0})
    assert opts.show_grid is False
    assert opts.max_data_points == 0


def test_list_colors_become_tuple():
    opts = resolve_options({"colors": ["#000", "#fff"]})
    assert opts.colors == ("#000", "#fff")
    assert opts.color_at(3) == "#fff"


@pytest.mark.parametrize(
    "bad",
    [
        {"colors": "#FF0000"},
        {"colors": []},
        {"showGrid": "yes"},
        {"legendPosition": 3},
        {"legendPosition": "middle"},
        {"maxGaugeValue": "100"},
        {"maxGaugeValue": 0},
        {"curveType": "spline"},
        {"maxDataPoints": -1},
        {"onClick": "not callable"},
        {"noSuchOption": 1},
    ],
)
def test_invalid_options_raise_configuration_error(bad):
    with pytest.raises(ConfigurationError):
        resolve_options(bad)


def test_configuration_error_is_type_error():
    with pytest.raises(TypeError):
        resolve_options({"animation": 1})


def test_with_changes_revalidates():
    opts = resolve_options()
    updated = with_changes(opts, legendPosition="left")
    assert updated.legend_position == "left"
    assert opts.legend_position == "bottom"
    with pytest.raises(ConfigurationError):
        with_changes(opts, show_legend=None)


def test_settings_defaults_are_sane():
    assert settings.RESIZE_DEBOUNCE_MS >= 0
    assert settings.MIN_FONT_SIZE < settings.DEFAULT_FONT_SIZE


def test_color_precedence_point_then_series_then_palette():
    from ggraphs.charting.palette import point_color, series_color
    from ggraphs.charting.types import DataPoint, Series

    opts = resolve_options({"colors": ["#111111", "#222222"]})
    plain = Series("a", [DataPoint("x", 1)])
    tinted = Series("b", [DataPoint("x", 1, color="#abcdef")], color="#999999")
    assert series_color(plain, 3, opts) == "#222222"
    assert series_color(tinted, 0, opts) == "#999999"
    assert point_color(plain.data[0], plain, 2, opts) == "#111111"
    assert point_color(tinted.data[0], tinted, 0, opts) == "#abcdef"
