"""Tests for nice-range quantization and coordinate mapping."""

from __future__ import annotations

import pytest

from ggraphs.charting.scale import (
    CoordinateMapper,
    RangeTracker,
    ScaleState,
    data_range,
    nice_range,
    nice_step,
)
from ggraphs.charting.types import Margin, normalize_series


def test_nice_range_example_dataset():
    s = nice_range(12, 83)
    assert nice_step(12, 83) == 20
    assert (s.min_nice, s.max_nice) == (0, 100)


def test_nice_range_is_fixed_point_for_zero_anchored_range():
    first = nice_range(12, 83)
    again = nice_range(first.min_nice, first.max_nice)
    assert (again.min_nice, again.max_nice) == (first.min_nice, first.max_nice)


def test_equal_bounds_widen_by_one():
    s = nice_range(10, 10)
    assert (s.min_nice, s.max_nice) == (9, 11)


def test_positive_range_on_step_boundary_is_padded():
    s = nice_range(20, 100)
    assert (s.min_nice, s.max_nice) == (0, 120)


def test_negative_range_mirrors_padding():
    s = nice_range(-100, -20)
    assert (s.min_nice, s.max_nice) == (-120, 0)


def test_straddling_range():
    s = nice_range(-30, 70)
    assert (s.min_nice, s.max_nice) == (-40, 80)
    assert s.baseline == 0


def test_fractional_steps_print_cleanly():
    s = nice_range(0.1, 0.7)
    assert s.min_nice == 0
    assert s.max_nice == 0.8


@pytest.mark.parametrize("lo,hi", [(1e-13, 3e-13), (2e-20, 9e-20), (-5e-15, 5e-15)])
def test_tiny_magnitudes_keep_a_nonzero_step(lo, hi):
    step = nice_step(lo, hi)
    assert step > 0
    s = nice_range(lo, hi)
    assert s.min_nice <= lo < hi <= s.max_nice
    assert s.span > 0


def test_tiny_range_maps_and_labels():
    s = nice_range(1e-13, 3e-13)
    mapper = CoordinateMapper(600, 400, Margin(50, 50, 50, 50), s, 3)
    steps = mapper.value_steps()
    assert steps[0] == s.min_nice
    assert steps[-1] == s.max_nice
    assert len(set(steps)) == 6
    assert mapper.point_y(s.max_nice) == pytest.approx(50)


@pytest.mark.parametrize(
    "lo,hi",
    [(0, 1), (1, 2), (-5, 5), (3.3, 3.31), (0.001, 0.009), (-1e6, 2e6), (7, 1234), (-0.5, -0.1), (99, 101)],
)
def test_nice_range_encloses_data(lo, hi):
    s = nice_range(lo, hi)
    assert s.min_nice <= lo
    assert s.max_nice >= hi


def test_swapped_bounds_are_normalized():
    assert nice_range(83, 12) == nice_range(12, 83)


def test_baseline_picks_nearest_edge():
    assert ScaleState(10, 20, 5, 25).baseline == 5
    assert ScaleState(-20, -10, -25, -5).baseline == -5


def test_data_range_over_visible_window():
    series = normalize_series(
        [{"name": "a", "data": [{"label": "x", "value": v} for v in (4, 9, 100)]}]
    )
    assert data_range(series, 2) == (4, 9)
    assert data_range([], 0) == (0.0, 0.0)


def test_range_tracker_rescans_only_for_extremes():
    tracker = RangeTracker.from_values([5, 1, 9])
    assert tracker.evicted(5, [1, 9, 4]) is False
    assert tracker.rescans == 0
    assert tracker.evicted(9, [1, 4, 5]) is True
    assert (tracker.min_value, tracker.max_value) == (1, 5)
    assert tracker.rescans == 1


def test_range_tracker_observe_first_resets():
    tracker = RangeTracker()
    tracker.observe(42, first=True)
    assert (tracker.min_value, tracker.max_value) == (42, 42)
    tracker.observe(-3)
    assert (tracker.min_value, tracker.max_value) == (-3, 42)


def _mapper(visible=3, scale=None):
    return CoordinateMapper(600, 400, Margin(50, 50, 50, 50), scale or nice_range(12, 83), visible)


def test_point_y_maps_nice_bounds_to_plot_edges():
    m = _mapper()
    assert m.point_y(m.scale.min_nice) == 400 - 50
    assert m.point_y(m.scale.max_nice) == 50


def test_point_x_spreads_over_plot_width():
    m = _mapper()
    assert m.point_x(0) == 50
    assert m.point_x(2) == 550
    assert _mapper(visible=1).point_x(0) == 300


def test_point_y_midpoint_for_zero_span():
    m = _mapper(scale=ScaleState(5, 5, 5, 5))
    assert m.point_y(5) == 200


def test_value_steps_cover_range():
    m = _mapper()
    assert m.value_steps(5) == pytest.approx([0, 20, 40, 60, 80, 100])
