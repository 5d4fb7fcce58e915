"""Scale engine: "nice" axis ranges and value/index to pixel mapping.

The y domain is widened to human-friendly step boundaries (1-9 times a
power of ten) so gridlines land on readable values. When the whole range is
strictly positive (or strictly negative) and an extreme lands exactly on a
step boundary, the domain is padded by one more step so no point is drawn
flush against the plot edge.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .types import Margin, Series

_STEPS = 5
_PRECISION = 12  # significant digits kept below the leading digit of the step


@dataclass(frozen=True)
class ScaleState:
    min_value: float
    max_value: float
    min_nice: float
    max_nice: float

    @property
    def span(self) -> float:
        return self.max_nice - self.min_nice

    @property
    def baseline(self) -> float:
        """Value the x axis sits on: zero, or the range edge nearest to it."""
        if self.min_nice > 0:
            return self.min_nice
        if self.max_nice < 0:
            return self.max_nice
        return 0.0


def _snap(value: float, unit: float = 1.0) -> float:
    """Round away float noise at a precision relative to ``unit``."""
    digits = _PRECISION - math.floor(math.log10(abs(unit))) if unit else _PRECISION
    snapped = round(value, digits)
    return 0.0 if snapped == 0 else snapped


def nice_step(min_value: float, max_value: float) -> float:
    rough = (max_value - min_value) / _STEPS
    magnitude = 10 ** math.floor(math.log10(rough))
    return _snap(math.ceil(_snap(rough / magnitude)) * magnitude, magnitude)


def nice_range(min_value: float, max_value: float) -> ScaleState:
    """Return the padded nice domain enclosing [min_value, max_value]."""
    if min_value > max_value:
        min_value, max_value = max_value, min_value
    if max_value == min_value:
        return ScaleState(min_value, max_value, min_value - 1, max_value + 1)

    step = nice_step(min_value, max_value)
    min_nice = _snap(math.floor(_snap(min_value / step)) * step, step)
    max_nice = _snap(math.ceil(_snap(max_value / step)) * step, step)
    # guard against rounding pushing a bound inside the data
    if min_nice > min_value:
        min_nice = _snap(min_nice - step, step)
    if max_nice < max_value:
        max_nice = _snap(max_nice + step, step)

    if min_value > 0:
        if min_value == min_nice:
            min_nice = max(0.0, _snap(min_nice - step, step))
        if max_value == max_nice:
            max_nice = _snap(max_nice + step, step)
    if max_value < 0:
        if max_value == max_nice:
            max_nice = min(0.0, _snap(max_nice + step, step))
        if min_value == min_nice:
            min_nice = _snap(min_nice - step, step)

    return ScaleState(min_value, max_value, min_nice, max_nice)


def visible_values(series: Sequence[Series], visible_count: int) -> List[float]:
    return [p.value for s in series for p in s.data[:visible_count]]


def data_range(series: Sequence[Series], visible_count: int) -> tuple[float, float]:
    values = visible_values(series, visible_count)
    if not values:
        return 0.0, 0.0
    return min(values), max(values)


class RangeTracker:
    """Running min/max across appends and sliding-window evictions.

    A full rescan happens only when an evicted value was one of the extremes.
    """

    def __init__(self, min_value: float = 0.0, max_value: float = 0.0) -> None:
        self.min_value = min_value
        self.max_value = max_value
        self.rescans = 0

    @classmethod
    def from_values(cls, values: Iterable[float]) -> "RangeTracker":
        vals = list(values)
        if not vals:
            return cls()
        return cls(min(vals), max(vals))

    def observe(self, value: float, *, first: bool = False) -> None:
        if first:
            self.min_value = self.max_value = value
            return
        self.min_value = min(self.min_value, value)
        self.max_value = max(self.max_value, value)

    def evicted(self, value: float, remaining: Iterable[float]) -> bool:
        """Account for an evicted value; returns True when a rescan happened."""
        if value != self.min_value and value != self.max_value:
            return False
        vals = list(remaining)
        self.rescans += 1
        if vals:
            self.min_value, self.max_value = min(vals), max(vals)
        else:
            self.min_value = self.max_value = 0.0
        return True

    def scale(self) -> ScaleState:
        return nice_range(self.min_value, self.max_value)


@dataclass(frozen=True)
class CoordinateMapper:
    """Pure mapping from data space to pixel space for one render pass."""

    width: float
    height: float
    margin: Margin
    scale: ScaleState
    visible_count: int

    @property
    def plot_width(self) -> float:
        return self.width - self.margin.left - self.margin.right

    @property
    def plot_height(self) -> float:
        return self.height - self.margin.top - self.margin.bottom

    @property
    def center(self) -> tuple[float, float]:
        return (
            self.margin.left + self.plot_width / 2,
            self.margin.top + self.plot_height / 2,
        )

    def point_x(self, index: int) -> float:
        if self.visible_count <= 1:
            return self.margin.left + self.plot_width / 2
        return self.margin.left + (index / (self.visible_count - 1)) * self.plot_width

    def point_y(self, value: float) -> float:
        if self.scale.max_nice == self.scale.min_nice:
            return self.margin.top + self.plot_height / 2
        return (
            self.margin.top
            + ((self.scale.max_nice - value) / self.scale.span) * self.plot_height
        )

    def value_steps(self, steps: int = _STEPS) -> List[float]:
        unit = self.scale.span / steps
        return [_snap(self.scale.min_nice + i * unit, unit) for i in range(steps + 1)]


__all__ = [
    "ScaleState",
    "nice_step",
    "nice_range",
    "visible_values",
    "data_range",
    "RangeTracker",
    "CoordinateMapper",
]
