"""Headless host model: documents, containers and their computed style.

A chart binds to one container, resolved by id through a :class:`Document`.
Containers report their size and computed style, accept resize listeners and
receive the finished :class:`~ggraphs.charting.types.Frame` of every render
pass. :class:`StaticContainer` is the in-memory implementation; the Qt
``ChartWidget`` satisfies the same protocol.

Containers may also be declared in markup::

    <div id="chart" style="width: 640px; height: 360px; font-size: 14px"></div>
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from bs4 import BeautifulSoup, Tag

from .. import settings
from ..charting.types import Frame
from ..errors import ContainerNotFoundError
from ..options import EnvironmentDefaults

log = logging.getLogger(__name__)

ResizeListener = Callable[[], None]

_PX = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(?:px)?\s*$")


@dataclass(frozen=True)
class ContainerStyle:
    """Computed style values a chart inherits from its container."""

    font_size: float = settings.DEFAULT_FONT_SIZE
    font_family: str = settings.DEFAULT_FONT_FAMILY
    color: str = settings.DEFAULT_TEXT_COLOR
    background_color: str = settings.DEFAULT_BACKGROUND_COLOR

    def environment(self) -> EnvironmentDefaults:
        return EnvironmentDefaults(self.font_size, self.font_family, self.color, self.background_color)


class Container(Protocol):  # pragma: no cover - structural only
    container_id: str

    def client_size(self) -> Tuple[float, float]: ...

    def computed_style(self) -> ContainerStyle: ...

    def add_resize_listener(self, listener: ResizeListener) -> None: ...

    def remove_resize_listener(self, listener: ResizeListener) -> None: ...

    def attach_chart(self, chart: Any) -> None: ...

    def detach_chart(self) -> None: ...

    def present(self, frame: Frame) -> None: ...

    def clear(self) -> None: ...


class StaticContainer:
    """In-memory container; ``resize`` emulates a host layout change."""

    def __init__(
        self,
        container_id: str,
        width: float = settings.DEFAULT_CONTAINER_WIDTH,
        height: float = settings.DEFAULT_CONTAINER_HEIGHT,
        style: ContainerStyle | None = None,
    ) -> None:
        self.container_id = container_id
        self._width = float(width)
        self._height = float(height)
        self._style = style or ContainerStyle()
        self._listeners: List[ResizeListener] = []
        self.frame: Optional[Frame] = None
        self.presented = 0
        self.chart: Any = None

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def style(self) -> ContainerStyle:
        return self._style

    def client_size(self) -> Tuple[float, float]:
        return self._width, self._height

    def computed_style(self) -> ContainerStyle:
        return self._style

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_resize_listener(self, listener: ResizeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_resize_listener(self, listener: ResizeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def resize(self, width: float, height: float) -> None:
        self._width = float(width)
        self._height = float(height)
        for listener in list(self._listeners):
            listener()

    def attach_chart(self, chart: Any) -> None:
        self.chart = chart

    def detach_chart(self) -> None:
        self.chart = None

    def present(self, frame: Frame) -> None:
        self.frame = frame
        self.presented += 1

    def clear(self) -> None:
        self.frame = None

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"StaticContainer({self.container_id!r}, {self._width:g}x{self._height:g})"


def _inline_style(tag: Tag) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for decl in (tag.get("style") or "").split(";"):
        if ":" not in decl:
            continue
        key, value = decl.split(":", 1)
        out[key.strip().lower()] = value.strip()
    return out


def _px(value: Optional[str], fallback: float) -> float:
    if not value:
        return fallback
    match = _PX.match(value)
    return float(match.group(1)) if match else fallback


def container_from_tag(tag: Tag) -> StaticContainer:
    """Build a container from an element's inline ``style`` declarations."""
    css = _inline_style(tag)
    style = ContainerStyle(
        font_size=_px(css.get("font-size"), settings.DEFAULT_FONT_SIZE),
        font_family=css.get("font-family", settings.DEFAULT_FONT_FAMILY),
        color=css.get("color", settings.DEFAULT_TEXT_COLOR),
        background_color=css.get("background-color", settings.DEFAULT_BACKGROUND_COLOR),
    )
    return StaticContainer(
        tag["id"],
        _px(css.get("width"), settings.DEFAULT_CONTAINER_WIDTH),
        _px(css.get("height"), settings.DEFAULT_CONTAINER_HEIGHT),
        style,
    )


class Document:
    """Id-addressable registry of containers and data tables."""

    def __init__(self, markup: str | None = None) -> None:
        self.soup = BeautifulSoup(markup or "", "html.parser")
        self._containers: Dict[str, Container] = {}

    def add_container(self, container: Container) -> Container:
        self._containers[container.container_id] = container
        return container

    def remove_container(self, container_id: str) -> None:
        self._containers.pop(container_id, None)

    def get_container(self, container_id: str) -> Container:
        container = self._containers.get(container_id)
        if container is not None:
            return container
        tag = self.soup.find(id=container_id)
        if tag is not None and tag.name != "table":
            return self.add_container(container_from_tag(tag))
        raise ContainerNotFoundError(
            f'Container with ID "{container_id}" not found.', context={"container_id": container_id}
        )

    def find_table(self, table_id: str) -> Optional[Tag]:
        return self.soup.find("table", id=table_id)


default_document = Document()


__all__ = [
    "ContainerStyle",
    "Container",
    "StaticContainer",
    "container_from_tag",
    "Document",
    "default_document",
]
