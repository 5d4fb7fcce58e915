"""Text measurement backends.

Label placement (rotation of crowded x labels) needs the rendered width of
text without a live display surface. The default backend asks matplotlib's
font machinery for the advance width; a fixed-ratio estimator is provided
for callers that want fully deterministic layout.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Protocol, Tuple

from matplotlib import font_manager
from matplotlib.font_manager import FontProperties
from matplotlib.textpath import TextToPath

_GENERIC_FAMILIES = {"serif", "sans-serif", "cursive", "fantasy", "monospace"}


class TextMetricsProtocol(Protocol):  # pragma: no cover - structural only
    def text_width(self, text: str, font_size: float, font_family: str) -> float: ...


@lru_cache(maxsize=64)
def _known_families(css_family: str) -> Tuple[str, ...]:
    available = {f.name for f in font_manager.fontManager.ttflist}
    picked = []
    for raw in css_family.split(","):
        name = raw.strip().strip("'\"")
        if name in _GENERIC_FAMILIES or name in available:
            picked.append(name)
    return tuple(picked) or ("sans-serif",)


class MatplotlibTextMetrics:
    """Measure text through matplotlib's TextToPath (no canvas required)."""

    def __init__(self) -> None:
        self._ttp = TextToPath()
        self._measure = lru_cache(maxsize=512)(self._measure_uncached)

    def _measure_uncached(self, text: str, font_size: float, font_family: str) -> float:
        prop = FontProperties(family=list(_known_families(font_family)), size=font_size)
        width, _height, _descent = self._ttp.get_text_width_height_descent(text, prop, ismath=False)
        return float(width)

    def text_width(self, text: str, font_size: float, font_family: str) -> float:
        if not text:
            return 0.0
        return self._measure(text, float(font_size), font_family or "sans-serif")


class FixedRatioTextMetrics:
    """Approximate width as ``len(text) * font_size * ratio``."""

    def __init__(self, ratio: float = 0.6) -> None:
        self.ratio = ratio

    def text_width(self, text: str, font_size: float, font_family: str) -> float:
        return len(text) * font_size * self.ratio


__all__ = ["TextMetricsProtocol", "MatplotlibTextMetrics", "FixedRatioTextMetrics"]
