"""Animation controller.

Renderers always write *final* attribute values onto primitives and, when
animation is enabled, register a :class:`Transition` describing how one
attribute travels from its "zero" state to that final value. A host driver
consumes the timeline: the SVG writer emits SMIL ``<animate>`` elements,
the Qt widget samples :meth:`Timeline.values_at` on a timer.

With animation disabled the timeline records nothing, so final values apply
immediately.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from .types import Primitive

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?")


@dataclass(frozen=True, eq=False)
class Transition:
    target: Primitive
    attribute: str
    start: Any
    end: Any
    begin_ms: float
    duration_ms: float
    kind: str = "animate"  # or "translate" (rendered as animateTransform)

    @property
    def finish_ms(self) -> float:
        return self.begin_ms + self.duration_ms

    def progress(self, t_ms: float) -> float:
        if t_ms <= self.begin_ms:
            return 0.0
        if self.duration_ms <= 0 or t_ms >= self.finish_ms:
            return 1.0
        return (t_ms - self.begin_ms) / self.duration_ms

    def value_at(self, t_ms: float) -> Any:
        return interpolate(self.start, self.end, self.progress(t_ms))


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value))
    except ValueError:
        return None


def interpolate(start: Any, end: Any, fraction: float) -> Any:
    """Linear blend of numbers or of strings sharing the same number layout."""
    if fraction <= 0:
        return start
    if fraction >= 1:
        return end
    a, b = _as_float(start), _as_float(end)
    if a is not None and b is not None:
        return a + (b - a) * fraction
    start_s, end_s = str(start), str(end)
    start_nums = _NUMBER.findall(start_s)
    end_nums = _NUMBER.findall(end_s)
    if len(start_nums) != len(end_nums) or _NUMBER.sub("#", start_s) != _NUMBER.sub("#", end_s):
        return start  # incompatible structure: hold until the end
    blended = iter(
        float(s) + (float(e) - float(s)) * fraction for s, e in zip(start_nums, end_nums)
    )
    return _NUMBER.sub(lambda _m: f"{next(blended):.3f}", end_s)


def sample(transition: Transition, t_ms: float) -> Any:
    """Value of ``transition``'s attribute at ``t_ms`` (clamped to its window)."""
    return transition.value_at(t_ms)


class Timeline:
    """Ordered collection of transitions for one frame."""

    def __init__(self, *, enabled: bool = True, duration_ms: float = 1000) -> None:
        self.enabled = enabled
        self.duration_ms = float(duration_ms)
        self._transitions: List[Transition] = []

    def __len__(self) -> int:
        return len(self._transitions)

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._transitions)

    def tween(
        self,
        target: Primitive,
        attribute: str,
        start: Any,
        end: Any,
        *,
        begin_ms: float = 0,
        duration_ms: float | None = None,
    ) -> Optional[Transition]:
        if not self.enabled:
            return None
        tr = Transition(
            target,
            attribute,
            start,
            end,
            float(begin_ms),
            self.duration_ms if duration_ms is None else float(duration_ms),
        )
        self._transitions.append(tr)
        return tr

    def translate(
        self,
        target: Primitive,
        start: str,
        end: str,
        *,
        begin_ms: float = 0,
        duration_ms: float | None = None,
    ) -> Optional[Transition]:
        if not self.enabled:
            return None
        tr = Transition(
            target,
            "transform",
            start,
            end,
            float(begin_ms),
            self.duration_ms if duration_ms is None else float(duration_ms),
            kind="translate",
        )
        self._transitions.append(tr)
        return tr

    def draw_stroke(self, target: Primitive, length: float, **kw: Any) -> Optional[Transition]:
        """Reveal a stroked path by animating its dash offset to zero."""
        if not self.enabled:
            return None
        target.attrs["stroke-dasharray"] = length
        target.attrs["stroke-dashoffset"] = 0
        return self.tween(target, "stroke-dashoffset", length, 0, **kw)

    def for_target(self, target: Primitive) -> List[Transition]:
        return [t for t in self._transitions if t.target is target]

    @property
    def total_ms(self) -> float:
        return max((t.finish_ms for t in self._transitions), default=0.0)

    def values_at(self, t_ms: float) -> Dict[Primitive, Dict[str, Any]]:
        """Attribute overrides that reproduce the animation state at ``t_ms``."""
        out: Dict[Primitive, Dict[str, Any]] = {}
        for tr in self._transitions:
            value = tr.value_at(t_ms)
            if tr.kind == "translate":
                value = f"translate({value})"
            out.setdefault(tr.target, {})[tr.attribute] = value
        return out


__all__ = ["Transition", "Timeline", "interpolate", "sample"]
