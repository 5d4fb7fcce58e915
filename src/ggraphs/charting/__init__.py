"""Charting core.

Pure render pipeline: series and options in, a display-agnostic
:class:`~ggraphs.charting.types.Frame` of primitives plus an animation
timeline out. Hosts (the SVG writer, the Qt widget, the PNG exporter)
consume frames; nothing here touches a live surface.

Importing the package registers the five built-in chart kinds.
"""

from .animation import Timeline, Transition  # noqa: F401
from .backends import FixedRatioTextMetrics, MatplotlibTextMetrics  # noqa: F401
from .context import RenderContext  # noqa: F401
from .registry import chart_registry, render_frame  # noqa: F401
from .scale import CoordinateMapper, RangeTracker, ScaleState, nice_range  # noqa: F401
from .svg import to_svg  # noqa: F401
from .types import ClickEvent, DataPoint, Frame, Primitive, Series, normalize_series  # noqa: F401
