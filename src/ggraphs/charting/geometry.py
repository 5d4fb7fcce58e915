"""Path generation helpers shared by the renderers.

Every builder returns the SVG path data together with its arc length so
stroke-dash animations can be computed without a live display surface.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

Point = Tuple[float, float]

_CUBIC_SAMPLES = 24
_FULL_TURN_EPS = 1e-9


def fmt(value: float) -> str:
    """Compact number formatting for SVG attributes."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def polar_to_cartesian(cx: float, cy: float, radius: float, angle: float) -> Point:
    return cx + radius * math.cos(angle), cy + radius * math.sin(angle)


def _dist(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def linear_path(points: Sequence[Point]) -> Tuple[str, float]:
    if not points:
        return "", 0.0
    parts = [f"{'M' if i == 0 else 'L'}{fmt(x)},{fmt(y)}" for i, (x, y) in enumerate(points)]
    length = sum(_dist(points[i - 1], points[i]) for i in range(1, len(points)))
    return " ".join(parts), length


def _cubic_point(p0: Point, c1: Point, c2: Point, p1: Point, t: float) -> Point:
    u = 1 - t
    x = u ** 3 * p0[0] + 3 * u * u * t * c1[0] + 3 * u * t * t * c2[0] + t ** 3 * p1[0]
    y = u ** 3 * p0[1] + 3 * u * u * t * c1[1] + 3 * u * t * t * c2[1] + t ** 3 * p1[1]
    return x, y


def cubic_length(p0: Point, c1: Point, c2: Point, p1: Point, samples: int = _CUBIC_SAMPLES) -> float:
    total = 0.0
    prev = p0
    for i in range(1, samples + 1):
        cur = _cubic_point(p0, c1, c2, p1, i / samples)
        total += _dist(prev, cur)
        prev = cur
    return total


def curve_path(points: Sequence[Point]) -> Tuple[str, float]:
    """Smooth path; control points sit at 1/3 and 2/3 of each horizontal span."""
    if not points:
        return "", 0.0
    x0, y0 = points[0]
    parts = [f"M{fmt(x0)},{fmt(y0)}"]
    length = 0.0
    for i in range(1, len(points)):
        x1, y1 = points[i - 1]
        x2, y2 = points[i]
        c1 = (x1 + (x2 - x1) / 3, y1)
        c2 = (x2 - (x2 - x1) / 3, y2)
        parts.append(f"C{fmt(c1[0])},{fmt(c1[1])} {fmt(c2[0])},{fmt(c2[1])} {fmt(x2)},{fmt(y2)}")
        length += cubic_length((x1, y1), c1, c2, (x2, y2))
    return " ".join(parts), length


def series_path(points: Sequence[Point], curve_type: str) -> Tuple[str, float]:
    return curve_path(points) if curve_type == "curve" else linear_path(points)


def close_to_baseline(path: str, points: Sequence[Point], baseline_y: float) -> str:
    """Close a series path down to ``baseline_y`` to form a fill area."""
    first_x = points[0][0]
    last_x = points[-1][0]
    return f"{path} L{fmt(last_x)},{fmt(baseline_y)} L{fmt(first_x)},{fmt(baseline_y)} Z"


def flatten(points: Sequence[Point], baseline_y: float) -> List[Point]:
    return [(x, baseline_y) for x, _y in points]


def slice_path(cx: float, cy: float, radius: float, start: float, end: float) -> Tuple[str, float]:
    """Pie wedge from ``start`` to ``end`` (radians, clockwise in screen space)."""
    sweep = end - start
    x1, y1 = polar_to_cartesian(cx, cy, radius, start)
    if sweep >= 2 * math.pi - _FULL_TURN_EPS:
        # full turn: two half arcs, an arc with equal endpoints is empty
        xm, ym = polar_to_cartesian(cx, cy, radius, start + math.pi)
        d = (
            f"M {fmt(x1)} {fmt(y1)} "
            f"A {fmt(radius)} {fmt(radius)} 0 1 1 {fmt(xm)} {fmt(ym)} "
            f"A {fmt(radius)} {fmt(radius)} 0 1 1 {fmt(x1)} {fmt(y1)} Z"
        )
        return d, 2 * math.pi * radius
    x2, y2 = polar_to_cartesian(cx, cy, radius, end)
    large_arc = 1 if sweep > math.pi else 0
    d = (
        f"M {fmt(cx)} {fmt(cy)} L {fmt(x1)} {fmt(y1)} "
        f"A {fmt(radius)} {fmt(radius)} 0 {large_arc} 1 {fmt(x2)} {fmt(y2)} Z"
    )
    return d, 2 * radius + radius * sweep


def arc_path(cx: float, cy: float, radius: float, start: float, end: float) -> Tuple[str, float]:
    """Open arc drawn clockwise from ``start`` to ``end`` (radians)."""
    sweep = end - start
    x1, y1 = polar_to_cartesian(cx, cy, radius, start)
    x2, y2 = polar_to_cartesian(cx, cy, radius, end)
    large_arc = 1 if sweep > math.pi else 0
    d = f"M {fmt(x1)} {fmt(y1)} A {fmt(radius)} {fmt(radius)} 0 {large_arc} 1 {fmt(x2)} {fmt(y2)}"
    return d, radius * abs(sweep)


__all__ = [
    "Point",
    "fmt",
    "polar_to_cartesian",
    "linear_path",
    "cubic_length",
    "curve_path",
    "series_path",
    "close_to_baseline",
    "flatten",
    "slice_path",
    "arc_path",
]
