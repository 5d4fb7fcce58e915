"""Tests for the animation timeline and value sampling."""

from __future__ import annotations

import pytest

from ggraphs.charting.animation import Timeline, interpolate, sample
from ggraphs.charting.types import Frame, Primitive


def test_interpolate_numbers_and_strings():
    assert interpolate(0, 10, 0.5) == 5
    assert interpolate("-5,0", "0,0", 0.5) == "-2.500,0.000"
    assert interpolate("M0,0 L10,10", "M0,0 L20,30", 0.5) == "M0.000,0.000 L15.000,20.000"


def test_interpolate_bounds_return_endpoints():
    assert interpolate("a", "b", 0) == "a"
    assert interpolate("a", "b", 1) == "b"
    # incompatible structure holds the start value until the end
    assert interpolate("M0,0", "M0,0 L1,1", 0.5) == "M0,0"


def test_transition_sampling_is_bounded():
    target = Primitive("circle")
    tl = Timeline(duration_ms=1000)
    tr = tl.tween(target, "r", 0, 4, begin_ms=200, duration_ms=400)
    assert sample(tr, 0) == 0
    assert sample(tr, 400) == pytest.approx(2)
    assert sample(tr, 10_000) == 4
    assert tr.finish_ms == 600
    assert tl.total_ms == 600


def test_disabled_timeline_records_nothing():
    target = Primitive("path", {"d": "M0,0"})
    tl = Timeline(enabled=False)
    assert tl.tween(target, "opacity", 0, 1) is None
    assert tl.draw_stroke(target, 100) is None
    assert len(tl) == 0
    assert "stroke-dasharray" not in target.attrs


def test_draw_stroke_sets_dash_attributes():
    target = Primitive("path", {"d": "M0,0 L100,0"})
    tl = Timeline(duration_ms=500)
    tr = tl.draw_stroke(target, 100)
    assert target.attrs["stroke-dasharray"] == 100
    assert target.attrs["stroke-dashoffset"] == 0
    assert (tr.start, tr.end, tr.duration_ms) == (100, 0, 500)


def test_values_at_and_frame_snapshot():
    label = Primitive("text")
    tl = Timeline(duration_ms=100)
    tl.translate(label, "-5,0", "0,0")
    tl.tween(label, "opacity", 0, 1)
    frame = Frame(10, 10, [label], timeline=tl)
    mid = frame.snapshot(50)
    assert mid[label]["transform"] == "translate(-2.500,0.000)"
    assert mid[label]["opacity"] == pytest.approx(0.5)
    end = frame.snapshot(100)
    assert end[label]["transform"] == "translate(0,0)"
    assert Frame(1, 1).snapshot(0) == {}
