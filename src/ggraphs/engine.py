"""Chart engine lifecycle.

:class:`GGraphs` owns one drawing surface (a container resolved by id) and
runs the pipeline Ingestion -> Scale -> Layout -> Renderer -> Animation ->
Interaction on every (re)draw. Resizes re-enter at Layout after a debounce.

Render passes are pure: a complete :class:`Frame` is built first and only
then presented. The surface is cleared at the start of every pass, so a pass
that fails leaves it blank; the failure is logged, never raised.
"""

from __future__ import annotations

import logging
import os
import threading
from functools import lru_cache
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from . import settings
from .charting.animation import Timeline
from .charting.backends import MatplotlibTextMetrics, TextMetricsProtocol
from .charting.context import RenderContext
from .charting.export import export_frame
from .charting.interaction import dispatch_click, hit_test
from .charting.layout import calculate_fonts, compute_margin, visible_data_count
from .charting.registry import chart_registry, render_frame
from .charting.scale import RangeTracker, ScaleState, data_range, nice_range
from .charting.svg import to_svg
from .charting.types import ClickEvent, DataPoint, Frame, Series, normalize_series
from .errors import DataShapeError, warn_degenerate
from .options import ChartOptions, canonical_key, resolve_options, with_changes
from .parsing.table_parser import parse_table_markup
from .services.container_host import Container, Document, default_document
from .services.resize_debouncer import ResizeDebouncer, Scheduler

log = logging.getLogger(__name__)

_SOURCE_KEYS = frozenset({"data", "table"})


@lru_cache(maxsize=1)
def _shared_text_metrics() -> MatplotlibTextMetrics:
    return MatplotlibTextMetrics()


class GGraphs:
    """Embeddable chart bound to a single container.

    ``container_id`` is resolved through ``document``. Without one the
    process-wide :data:`~ggraphs.services.container_host.default_document`
    is used, which starts empty: register the container there first
    (``default_document.add_container(...)``) or pass a document.

    Resize commits are debounced on ``scheduler``: Qt timers when a Qt
    application exists, else timer threads. Render passes and data
    mutations are serialized by a per-chart lock.
    """

    def __init__(
        self,
        container_id: str,
        options: Mapping[str, Any] | None = None,
        *,
        document: Document | None = None,
        scheduler: Scheduler | None = None,
        text_metrics: TextMetricsProtocol | None = None,
    ) -> None:
        self.document = document or default_document
        self.container: Container = self.document.get_container(container_id)
        self.options: ChartOptions = resolve_options(options, self.container.computed_style().environment())
        self.text_metrics = text_metrics or _shared_text_metrics()
        self.series: List[Series] = []
        self.frame: Optional[Frame] = None
        self.last_error: Optional[BaseException] = None
        self.render_count = 0
        self._range = RangeTracker()
        self._destroyed = False
        self._lock = threading.RLock()
        self._debouncer = ResizeDebouncer(self.handle_resize, settings.RESIZE_DEBOUNCE_MS, scheduler)
        self.container.add_resize_listener(self._on_container_resize)
        self.container.attach_chart(self)

        if self.options.table:
            self.initialize()
        elif self.options.data is not None:
            self._replace_series(self.options.data)
            self.render_graph()

    # Introspection -------------------------------------------------------
    @property
    def chart_type(self) -> str:
        return self.options.type

    @property
    def width(self) -> float:
        return self.container.client_size()[0]

    @property
    def height(self) -> float:
        return self.container.client_size()[1]

    @property
    def min_value(self) -> float:
        return self._range.min_value

    @property
    def max_value(self) -> float:
        return self._range.max_value

    @property
    def range_rescans(self) -> int:
        return self._range.rescans

    @property
    def visible_data_count(self) -> int:
        return visible_data_count(self.series, self.options.max_data_points)

    @property
    def scale(self) -> ScaleState:
        """Nice range over the visible window."""
        visible = self.visible_data_count
        if all(len(s.data) <= visible for s in self.series):
            return self._range.scale()
        return nice_range(*data_range(self.series, visible))

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def scheduler(self) -> Scheduler:
        return self._debouncer.scheduler

    # Data ----------------------------------------------------------------
    def _values(self) -> Iterable[float]:
        return (p.value for s in self.series for p in s.data)

    def _replace_series(self, data: Any) -> None:
        self.series = normalize_series(data)
        self._range = RangeTracker.from_values(self._values())

    def _check_index(self, series_index: Any) -> int:
        if isinstance(series_index, bool) or not isinstance(series_index, int):
            raise DataShapeError("Series index must be an integer.", context={"series_index": series_index})
        if not 0 <= series_index < len(self.series):
            raise DataShapeError(
                f"Series index {series_index} out of range.",
                context={"series_index": series_index, "series_count": len(self.series)},
            )
        return series_index

    def _append(self, point: DataPoint, series_index: int) -> None:
        data = self.series[series_index].data
        empty = not any(s.data for s in self.series)
        data.append(point)
        self._range.observe(point.value, first=empty)
        limit = self.options.max_data_points
        if limit and len(data) > limit:
            removed = data.pop(0)
            if self._range.evicted(removed.value, self._values()):
                log.debug("evicted extreme %s; range rescanned", removed.value)

    def set_data(self, data: Any) -> None:
        """Replace all series (copied, never aliased) and re-render."""
        with self._lock:
            self._replace_series(data)
            self.render_graph()

    def add_data_point(self, point: Any, series_index: int = 0) -> None:
        """Append one point, sliding the window when it is full."""
        index = self._check_index(series_index)
        coerced = DataPoint.coerce(point, series_index=index, point_index=len(self.series[index].data))
        with self._lock:
            self._append(coerced, index)
            self.redraw_graph()

    def add_data_points(self, batch: Sequence[Mapping[str, Any]]) -> None:
        """Append ``[{series_index, data}]`` entries, then redraw once without animation.

        The whole batch is validated before anything is mutated.
        """
        if isinstance(batch, (str, bytes, Mapping)) or not isinstance(batch, Sequence):
            raise DataShapeError("Batch must be a list of {series_index, data} entries.")
        staged: List[Tuple[int, DataPoint]] = []
        for position, entry in enumerate(batch):
            if not isinstance(entry, Mapping):
                raise DataShapeError("Batch entry must be a mapping.", context={"entry": position})
            index = self._check_index(entry.get("series_index", entry.get("seriesIndex", 0)))
            staged.append((index, DataPoint.coerce(entry.get("data"), series_index=index, point_index=position)))
        with self._lock:
            for index, point in staged:
                self._append(point, index)
            self.redraw_graph(False)

    # Rendering -----------------------------------------------------------
    def initialize(self) -> None:
        """Load data from the configured table or ``data`` option, then render."""
        self.container.clear()
        if self.options.table:
            table = self.document.find_table(self.options.table)
            if table is None:
                warn_degenerate(log, 'Table with ID "%s" not found.', self.options.table)
            else:
                self._replace_series(parse_table_markup(table))
        elif self.options.data is not None:
            self._replace_series(self.options.data)
        self.render_graph()

    def _context(self, animate: bool) -> RenderContext:
        opts = self.options
        width, height = self.container.client_size()
        return RenderContext(
            series=self.series,
            options=opts,
            chart_type=opts.type,
            width=width,
            height=height,
            margin=compute_margin(opts.type, opts),
            fonts=calculate_fonts(opts.type, opts, width, height),
            scale=self.scale,
            visible_count=self.visible_data_count,
            metrics=self.text_metrics,
            timeline=Timeline(enabled=animate, duration_ms=opts.animation_duration),
        )

    def render_graph(self, animate: Optional[bool] = None) -> Optional[Frame]:
        """Run one full render pass; errors are logged, not raised."""
        with self._lock:
            return self._render_locked(animate)

    def _render_locked(self, animate: Optional[bool]) -> Optional[Frame]:
        if self._destroyed:
            log.debug("render skipped: chart destroyed")
            return None
        animate = self.options.animation if animate is None else bool(animate)
        self.container.clear()
        self.frame = None
        try:
            config = chart_registry.config_for(self.options.type, self.options)
            frame = render_frame(self._context(animate), config)
        except Exception as exc:
            self.last_error = exc
            log.exception("Error rendering %s chart", self.options.type)
            return None
        self.last_error = None
        self.frame = frame
        self.render_count += 1
        self.container.present(frame)
        log.debug("rendered %s chart in %.2f ms", frame.meta.get("chart_type"), frame.meta.get("build_ms", 0.0))
        return frame

    def redraw_graph(self, animate: Optional[bool] = None) -> Optional[Frame]:
        return self.render_graph(animate)

    def set_type(self, chart_type: str) -> None:
        self.options = with_changes(self.options, type=chart_type)
        self.render_graph()

    def set_options(self, **changes: Any) -> None:
        """Apply option changes (re-validated) and re-render."""
        self.options = with_changes(self.options, **changes)
        if any(canonical_key(key) in _SOURCE_KEYS for key in changes):
            self.initialize()
        else:
            self.render_graph()

    # Resize --------------------------------------------------------------
    def _on_container_resize(self) -> None:
        if not self._destroyed:
            self._debouncer.signal()

    def handle_resize(self) -> None:
        """Re-run layout against the container's current size."""
        self.redraw_graph()

    @property
    def resize_pending(self) -> bool:
        return self._debouncer.pending

    # Interaction ---------------------------------------------------------
    def handle_click(self, x: float, y: float) -> Optional[ClickEvent]:
        if self.frame is None:
            return None
        prim = dispatch_click(self.frame, x, y, self.options)
        return prim.click_event() if prim is not None else None

    def tooltip_at(self, x: float, y: float) -> Optional[str]:
        if self.frame is None or not self.options.show_tooltip:
            return None
        prim = hit_test(self.frame, x, y)
        return prim.title if prim is not None else None

    # Output --------------------------------------------------------------
    def _current_frame(self) -> Frame:
        return self.frame if self.frame is not None else Frame(self.width, self.height)

    def to_svg(self, animated: bool = True, at_ms: Optional[float] = None) -> str:
        return to_svg(self._current_frame(), animated=animated, at_ms=at_ms)

    def export(self, path: str | os.PathLike, format: Optional[str] = None, *, scale: float = 1.0):
        return export_frame(self._current_frame(), path, format=format, scale=scale)

    def destroy(self) -> None:
        """Detach from the container; safe to call more than once."""
        with self._lock:
            if self._destroyed:
                return
            self._destroyed = True
            self.container.remove_resize_listener(self._on_container_resize)
            self.container.detach_chart()
            self._debouncer.cancel()
            self.container.clear()
            self.frame = None

    # camelCase aliases
    setData = set_data
    addDataPoint = add_data_point
    addDataPoints = add_data_points
    renderGraph = render_graph
    redrawGraph = redraw_graph


__all__ = ["GGraphs"]
