"""Core charting types: canonical series model and drawing primitives."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..errors import DataShapeError


def _check_value(value: Any, series_index: int, point_index: int) -> None:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(float(value)):
        raise DataShapeError(
            f"Data point value must be a finite number, got {value!r}",
            context={"series": series_index, "point": point_index},
        )


@dataclass
class DataPoint:
    """One plotted value. Only ``value`` participates in scale computation."""

    label: str
    value: float
    tooltip: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def coerce(cls, raw: Any, *, series_index: int = 0, point_index: int = 0) -> "DataPoint":
        if isinstance(raw, DataPoint):
            _check_value(raw.value, series_index, point_index)
            return cls(raw.label, raw.value, raw.tooltip, raw.color)
        if not isinstance(raw, Mapping):
            raise DataShapeError(
                "Data point must be a mapping with 'label' and 'value'",
                context={"series": series_index, "point": point_index},
            )
        value = raw.get("value")
        _check_value(value, series_index, point_index)
        label = raw.get("label")
        return cls(
            label="" if label is None else str(label),
            value=float(value),
            tooltip=raw.get("tooltip"),
            color=raw.get("color"),
        )


@dataclass
class Series:
    """Named collection of points; identity is its position in the data list."""

    name: str
    data: List[DataPoint] = field(default_factory=list)
    color: Optional[str] = None

    @classmethod
    def coerce(cls, raw: Any, *, index: int = 0) -> "Series":
        if isinstance(raw, Series):
            points = raw.data
            name, color = raw.name, raw.color
        elif isinstance(raw, Mapping):
            points = raw.get("data")
            name, color = raw.get("name"), raw.get("color")
        else:
            raise DataShapeError(
                "Each series must be a mapping with a 'data' list", context={"series": index}
            )
        if isinstance(points, (str, bytes)) or not isinstance(points, Sequence):
            raise DataShapeError("Series 'data' must be a list of points", context={"series": index})
        return cls(
            name="" if name is None else str(name),
            data=[DataPoint.coerce(p, series_index=index, point_index=i) for i, p in enumerate(points)],
            color=color,
        )


def normalize_series(data: Any) -> List[Series]:
    """Validate caller data and copy it into the canonical series list."""
    if isinstance(data, (str, bytes, Mapping)) or not isinstance(data, Sequence):
        raise DataShapeError(
            "Data must be an array of series.", context={"type": type(data).__name__}
        )
    return [Series.coerce(item, index=i) for i, item in enumerate(data)]


@dataclass(frozen=True)
class Margin:
    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class FontMetrics:
    font_size: float
    label_font_size: float


@dataclass(frozen=True)
class HitShape:
    """Geometry used to resolve pointer events to a primitive.

    kind is one of ``circle`` (cx, cy, r), ``rect`` (x, y, w, h),
    ``sector`` (cx, cy, inner_r, outer_r, start, end) with angles in radians
    measured like ``math.atan2`` in screen space, or ``polyline``
    (tolerance, x0, y0, x1, y1, ...).
    """

    kind: str
    params: Tuple[float, ...]


@dataclass(frozen=True)
class ClickEvent:
    """Payload handed to the ``on_click`` callback."""

    type: str
    series: Series
    data: Any


@dataclass(eq=False)
class Primitive:
    """Display-agnostic drawing node (maps 1:1 onto an SVG element)."""

    tag: str
    attrs: Dict[str, Any] = field(default_factory=dict)
    text: Optional[str] = None
    title: Optional[str] = None
    children: List["Primitive"] = field(default_factory=list)
    role: Optional[str] = None
    series: Optional[Series] = None
    point: Any = None
    hit: Optional[HitShape] = None

    def add(self, child: "Primitive") -> "Primitive":
        self.children.append(child)
        return child

    def walk(self) -> Iterator["Primitive"]:
        yield self
        for child in self.children:
            yield from child.walk()

    def click_event(self) -> Optional[ClickEvent]:
        if self.role is None or self.series is None:
            return None
        return ClickEvent(type=self.role, series=self.series, data=self.point)


@dataclass
class Frame:
    """Outcome of one render pass: primitives plus their timeline."""

    width: float
    height: float
    primitives: List[Primitive] = field(default_factory=list)
    timeline: Any = None
    meta: Dict[str, Any] = field(default_factory=dict)
    id_seq: int = field(default=0, repr=False, compare=False)

    def new_id(self, prefix: str) -> str:
        """Element id unique within this frame."""
        self.id_seq += 1
        return f"{prefix}-{self.id_seq}"

    def add(self, primitive: Primitive) -> Primitive:
        self.primitives.append(primitive)
        return primitive

    def walk(self) -> Iterator[Primitive]:
        for prim in self.primitives:
            yield from prim.walk()

    def snapshot(self, t_ms: float) -> Dict[Primitive, Dict[str, Any]]:
        """Attribute overrides describing the animation state at ``t_ms``."""
        if self.timeline is None:
            return {}
        return self.timeline.values_at(t_ms)

    def find(self, tag: str | None = None, *, css_class: str | None = None) -> List[Primitive]:
        found = []
        for prim in self.walk():
            if tag is not None and prim.tag != tag:
                continue
            if css_class is not None and prim.attrs.get("class") != css_class:
                continue
            found.append(prim)
        return found


__all__ = [
    "DataPoint",
    "Series",
    "normalize_series",
    "Margin",
    "FontMetrics",
    "HitShape",
    "ClickEvent",
    "Primitive",
    "Frame",
]
