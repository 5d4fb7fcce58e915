"""Chart export utilities.

SVG is written directly from the frame. PNG rasterizes the final (not
animated) SVG through Qt's SVG renderer, so no browser is required.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

from .svg import to_svg
from .types import Frame

_GUI_APP = None


def _ensure_gui_app():
    global _GUI_APP
    from PyQt6.QtGui import QGuiApplication

    app = QGuiApplication.instance()
    if app is None:
        if sys.platform.startswith("linux") and not (os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")):
            os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        _GUI_APP = app = QGuiApplication([])
    return app


def render_png(frame: Frame, *, scale: float = 1.0) -> bytes:
    """Rasterize ``frame`` and return PNG bytes."""
    from PyQt6.QtCore import QBuffer, QByteArray, QIODevice, QRectF
    from PyQt6.QtGui import QColor, QImage, QPainter
    from PyQt6.QtSvg import QSvgRenderer

    _ensure_gui_app()
    width = max(1, int(round(frame.width * scale)))
    height = max(1, int(round(frame.height * scale)))
    renderer = QSvgRenderer(QByteArray(to_svg(frame, animated=False).encode("utf-8")))
    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(QColor(0, 0, 0, 0))
    painter = QPainter(image)
    try:
        renderer.render(painter, QRectF(0, 0, width, height))
    finally:
        painter.end()
    buffer = QBuffer()
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    image.save(buffer, "PNG")
    return bytes(buffer.data())


def export_frame(frame: Frame, path: str | os.PathLike, *, format: str | None = None, scale: float = 1.0) -> Path:
    """Export a rendered frame to disk.

    Args:
        frame: The frame produced by the last render pass.
        path: Destination file path (existing directory required).
        format: 'svg' or 'png'; inferred from the suffix when omitted.
        scale: Raster scale factor for PNG.
    """
    out = Path(path)
    fmt = (format or out.suffix.lstrip(".") or "svg").lower()
    if fmt not in {"png", "svg"}:
        raise ValueError("format must be 'png' or 'svg'")
    if fmt == "svg":
        out.write_text(to_svg(frame), encoding="utf-8")
    else:
        out.write_bytes(render_png(frame, scale=scale))
    return out


__all__ = ["render_png", "export_frame"]
