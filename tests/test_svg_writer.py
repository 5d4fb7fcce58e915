"""Tests for SVG serialization (SMIL, still-at-time and final modes)."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from ggraphs.charting.animation import Timeline
from ggraphs.charting.svg import SVG_NS, to_svg
from ggraphs.charting.types import Frame, Primitive

NS = {"svg": SVG_NS}


def _frame():
    tl = Timeline(duration_ms=1000)
    circle = Primitive("circle", {"cx": 10, "cy": 10, "r": 4}, title="A: x - 1")
    tl.tween(circle, "r", 0, 4, begin_ms=250)
    label = Primitive("text", {"x": 1.5, "y": 2}, text="hello")
    tl.translate(label, "-5,0", "0,0")
    return Frame(200, 100, [Primitive("g", {"class": "points"}, children=[circle, label])], timeline=tl)


def test_root_attributes():
    root = ET.fromstring(to_svg(_frame()))
    assert root.tag == f"{{{SVG_NS}}}svg"
    assert root.get("viewBox") == "0 0 200 100"
    assert root.get("role") == "img"
    assert root.get("aria-label") == "SVG Data Graph"


def test_smil_mode_starts_from_initial_value():
    root = ET.fromstring(to_svg(_frame()))
    circle = root.find(".//svg:circle", NS)
    assert circle.get("r") == "0"
    anim = circle.find("svg:animate", NS)
    assert anim.get("attributeName") == "r"
    assert (anim.get("from"), anim.get("to")) == ("0", "4")
    assert anim.get("dur") == "1000ms"
    assert anim.get("begin") == "250ms"
    assert anim.get("fill") == "freeze"
    assert circle.find("svg:title", NS).text == "A: x - 1"
    move = root.find(".//svg:text/svg:animateTransform", NS)
    assert move.get("type") == "translate"
    assert move.get("from") == "-5,0"


def test_final_mode_has_no_animation_elements():
    svg = to_svg(_frame(), animated=False)
    assert "<animate" not in svg
    root = ET.fromstring(svg)
    assert root.find(".//svg:circle", NS).get("r") == "4"
    assert root.find(".//svg:text", NS).text == "hello"


def test_still_at_time():
    root = ET.fromstring(to_svg(_frame(), at_ms=750))
    circle = root.find(".//svg:circle", NS)
    assert float(circle.get("r")) == 2
    assert root.find(".//svg:text", NS).get("transform") == "translate(-1.250,0.000)"
    assert "<animate" not in to_svg(_frame(), at_ms=0)


def test_engine_svg_round_trip(make_chart, sales):
    chart = make_chart({"type": "bar", "data": sales})
    root = ET.fromstring(chart.to_svg())
    assert root.findall(".//svg:rect/svg:animate", NS)
    still = ET.fromstring(chart.to_svg(animated=False))
    assert not still.findall(".//svg:animate", NS)
