"""Qt host widget for charts.

``ChartWidget`` is a container in the engine's sense: it reports its client
size and computed style, forwards resize events to registered listeners and
paints presented frames through ``QSvgRenderer``. Animated frames are driven
by a timer that re-samples the frame's timeline roughly 60 times a second.

Usage::
    doc = Document()
    widget = doc.add_container(ChartWidget("sales"))
    chart = GGraphs("sales", {"type": "bar", "data": series}, document=doc)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

from PyQt6.QtCore import QByteArray, QElapsedTimer, QPointF, QRectF, QTimer
from PyQt6.QtGui import QPainter, QPalette
from PyQt6.QtSvg import QSvgRenderer
from PyQt6.QtWidgets import QToolTip, QWidget

from ..charting.svg import to_svg
from ..charting.types import Frame
from ..services.container_host import ContainerStyle

if TYPE_CHECKING:  # pragma: no cover
    from ..engine import GGraphs

__all__ = ["ChartWidget"]

_FRAME_INTERVAL_MS = 16


class ChartWidget(QWidget):
    """Paints the latest frame and routes pointer input back to the chart."""

    def __init__(self, container_id: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.container_id = container_id
        self.setObjectName(container_id)
        self.setMouseTracking(True)
        self._listeners: List[Callable[[], None]] = []
        self._chart: Optional["GGraphs"] = None
        self._frame: Optional[Frame] = None
        self._renderer = QSvgRenderer(self)
        self._has_content = False
        self._clock = QElapsedTimer()
        self._anim_timer = QTimer(self)
        self._anim_timer.setInterval(_FRAME_INTERVAL_MS)
        self._anim_timer.timeout.connect(self._tick)  # type: ignore[attr-defined]

    # Container protocol ------------------------------------------------
    def client_size(self) -> Tuple[float, float]:
        return float(self.width()), float(self.height())

    def computed_style(self) -> ContainerStyle:
        font = self.font()
        if font.pixelSize() > 0:
            size = float(font.pixelSize())
        else:
            size = font.pointSizeF() * 96.0 / 72.0
        pal = self.palette()
        return ContainerStyle(
            font_size=size,
            font_family=font.family() or "sans-serif",
            color=pal.color(QPalette.ColorRole.WindowText).name(),
            background_color=pal.color(QPalette.ColorRole.Window).name(),
        )

    def add_resize_listener(self, listener: Callable[[], None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_resize_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def attach_chart(self, chart: "GGraphs") -> None:
        self._chart = chart

    def detach_chart(self) -> None:
        self._chart = None

    def present(self, frame: Frame) -> None:
        self._frame = frame
        timeline = frame.timeline
        if timeline is not None and len(timeline):
            self._clock.start()
            self._load(to_svg(frame, at_ms=0))
            self._anim_timer.start()
        else:
            self._load(to_svg(frame, animated=False))

    def clear(self) -> None:
        self._anim_timer.stop()
        self._frame = None
        self._has_content = False
        self.update()

    # Introspection -----------------------------------------------------
    def frame(self) -> Optional[Frame]:
        return self._frame

    def is_animating(self) -> bool:
        return self._anim_timer.isActive()

    # Internal ----------------------------------------------------------
    def _load(self, svg: str) -> None:
        self._has_content = self._renderer.load(QByteArray(svg.encode("utf-8")))
        self.update()

    def _tick(self) -> None:
        if self._frame is None or self._frame.timeline is None:
            self._anim_timer.stop()
            return
        elapsed = float(self._clock.elapsed())
        if elapsed >= self._frame.timeline.total_ms:
            self._anim_timer.stop()
            self._load(to_svg(self._frame, animated=False))
            return
        self._load(to_svg(self._frame, at_ms=elapsed))

    def _to_frame(self, pos: QPointF) -> Tuple[float, float]:
        if self._frame is None or self.width() == 0 or self.height() == 0:
            return pos.x(), pos.y()
        return (
            pos.x() * self._frame.width / self.width(),
            pos.y() * self._frame.height / self.height(),
        )

    # Qt events ---------------------------------------------------------
    def paintEvent(self, event):  # type: ignore[override]
        p = QPainter(self)
        p.fillRect(self.rect(), self.palette().color(QPalette.ColorRole.Window))
        if self._has_content:
            self._renderer.render(p, QRectF(self.rect()))
        p.end()

    def resizeEvent(self, event):  # type: ignore[override]
        super().resizeEvent(event)
        for listener in list(self._listeners):
            listener()

    def mouseMoveEvent(self, event):  # type: ignore[override]
        super().mouseMoveEvent(event)
        if self._chart is None:
            return
        text = self._chart.tooltip_at(*self._to_frame(event.position()))
        if text:
            QToolTip.showText(event.globalPosition().toPoint(), text, self)
        else:
            QToolTip.hideText()

    def mousePressEvent(self, event):  # type: ignore[override]
        super().mousePressEvent(event)
        if self._chart is not None:
            self._chart.handle_click(*self._to_frame(event.position()))
