"""Color resolution for series and points.

Precedence: explicit point color, then series color, then the ordinal
palette entry. Cartesian charts index the palette by series position; pie
and donut slices index it by point position so that a single-series pie
still gets distinct slice colors.
"""

from __future__ import annotations

from ..options import ChartOptions
from .types import DataPoint, Series


def series_color(series: Series, index: int, options: ChartOptions) -> str:
    return series.color or options.color_at(max(index, 0))


def point_color(point: DataPoint, series: Series, palette_index: int, options: ChartOptions) -> str:
    return point.color or series.color or options.color_at(max(palette_index, 0))


__all__ = ["series_color", "point_color"]
