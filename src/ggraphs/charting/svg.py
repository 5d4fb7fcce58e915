"""SVG serialization of a rendered frame.

Three modes:
    * ``animated=True``: final geometry plus SMIL ``<animate>`` children, the
      static attribute holding the transition's starting value.
    * ``at_ms=t``: a still image of the animation state at time ``t``.
    * ``animated=False``: the final state only.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional

from .animation import Timeline, Transition
from .geometry import fmt
from .types import Frame, Primitive

SVG_NS = "http://www.w3.org/2000/svg"


def _attr(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return fmt(float(value))
    return str(value)


def _smil(tr: Transition) -> ET.Element:
    attrs = {
        "attributeName": tr.attribute,
        "from": _attr(tr.start),
        "to": _attr(tr.end),
        "dur": f"{fmt(tr.duration_ms)}ms",
        "fill": "freeze",
    }
    if tr.begin_ms:
        attrs["begin"] = f"{fmt(tr.begin_ms)}ms"
    if tr.kind == "translate":
        attrs["type"] = "translate"
        return ET.Element("animateTransform", attrs)
    return ET.Element("animate", attrs)


def _element(
    prim: Primitive,
    transitions: Dict[Primitive, List[Transition]],
    overrides: Dict[Primitive, Dict[str, Any]],
) -> ET.Element:
    values = dict(prim.attrs)
    own = transitions.get(prim, [])
    for tr in own:
        if tr.kind != "translate":
            values[tr.attribute] = tr.start
    values.update(overrides.get(prim, {}))
    el = ET.Element(prim.tag, {k: _attr(v) for k, v in values.items() if v is not None})
    if prim.title:
        ET.SubElement(el, "title").text = prim.title
    if prim.text is not None:
        if prim.title:
            el[-1].tail = prim.text
        else:
            el.text = prim.text
    for tr in own:
        el.append(_smil(tr))
    for child in prim.children:
        el.append(_element(child, transitions, overrides))
    return el


def to_element(frame: Frame, *, animated: bool = True, at_ms: Optional[float] = None) -> ET.Element:
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": "100%",
            "height": "100%",
            "viewBox": f"0 0 {fmt(float(frame.width))} {fmt(float(frame.height))}",
            "role": "img",
            "aria-label": "SVG Data Graph",
        },
    )
    timeline: Optional[Timeline] = frame.timeline
    transitions: Dict[Primitive, List[Transition]] = {}
    overrides: Dict[Primitive, Dict[str, Any]] = {}
    if timeline is not None and len(timeline):
        if at_ms is not None:
            overrides = frame.snapshot(at_ms)
        elif animated:
            for tr in timeline:
                transitions.setdefault(tr.target, []).append(tr)
    for prim in frame.primitives:
        root.append(_element(prim, transitions, overrides))
    return root


def to_svg(frame: Frame, *, animated: bool = True, at_ms: Optional[float] = None) -> str:
    return ET.tostring(to_element(frame, animated=animated, at_ms=at_ms), encoding="unicode")


__all__ = ["SVG_NS", "to_element", "to_svg"]
