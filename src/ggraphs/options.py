"""Configuration resolver.

Merges caller options over environment defaults (the container's computed
font and colors) over built-in defaults, validates types once, and returns a
frozen :class:`ChartOptions`. Both snake_case and the legacy camelCase
option names are accepted (``legendPosition`` == ``legend_position``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, replace
from numbers import Real
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from . import settings
from .errors import ConfigurationError

LEGEND_POSITIONS = ("top", "bottom", "left", "right")
CURVE_TYPES = ("linear", "curve")

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class EnvironmentDefaults:
    """Style values read from the host container at construction time."""

    font_size: float = settings.DEFAULT_FONT_SIZE
    font_family: str = settings.DEFAULT_FONT_FAMILY
    text_color: str = settings.DEFAULT_TEXT_COLOR
    background_color: str = settings.DEFAULT_BACKGROUND_COLOR


@dataclass(frozen=True)
class ChartOptions:
    colors: Tuple[str, ...] = settings.DEFAULT_COLORS
    background_color: str = settings.DEFAULT_BACKGROUND_COLOR
    show_grid: bool = True
    grid_color: str = "#E0E0E0"
    axis_color: str = "#333333"
    curve_type: str = "linear"
    max_gauge_value: float = 100
    center_text: Optional[str] = None
    show_center_text: bool = True
    gap: float = 2
    border_width: float = 1
    border_color: Optional[str] = "#000000"
    point_radius: float = 4
    line_width: float = 2
    fill_area: bool = False
    fill_opacity: float = 0.1
    font_family: str = settings.DEFAULT_FONT_FAMILY
    text_color: str = settings.DEFAULT_TEXT_COLOR
    font_size: float = settings.DEFAULT_FONT_SIZE
    show_axis_labels: bool = True
    show_axis: bool = True
    animation_duration: float = 1000
    donut_thickness: float = 50
    gauge_curve_width: float = 20
    show_legend: bool = True
    legend_position: str = "bottom"
    show_tooltip: bool = True
    tooltip_formatter: Optional[Callable[[Any, Any], str]] = None
    show_data_labels: bool = True
    animation: bool = True
    max_data_points: int = 20
    type: str = "line"
    table: Optional[str] = None
    data: Any = field(default=None, compare=False)
    on_click: Optional[Callable[[Any], None]] = None

    def color_at(self, index: int) -> str:
        return self.colors[index % len(self.colors)]


_FIELD_NAMES = frozenset(f.name for f in fields(ChartOptions))

_BOOL_OPTIONS = (
    "show_grid",
    "show_center_text",
    "fill_area",
    "show_axis_labels",
    "show_axis",
    "show_legend",
    "show_tooltip",
    "show_data_labels",
    "animation",
)
_NUMBER_OPTIONS = (
    "gap",
    "border_width",
    "point_radius",
    "line_width",
    "fill_opacity",
    "font_size",
    "animation_duration",
    "donut_thickness",
    "gauge_curve_width",
)


def canonical_key(key: str) -> str:
    """Map camelCase option names to the snake_case field name."""
    if key in _FIELD_NAMES:
        return key
    return _CAMEL.sub("_", key).lower()


def _canonicalize(options: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in options.items():
        name = canonical_key(key)
        if name not in _FIELD_NAMES:
            raise ConfigurationError(f"Unknown option {key!r}.", context={"option": key})
        out[name] = value
    return out


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate(opts: ChartOptions) -> None:
    colors = opts.colors
    if isinstance(colors, (str, bytes)) or not isinstance(colors, Sequence):
        raise ConfigurationError('Option "colors" must be an array.', context={"colors": colors})
    if not colors:
        raise ConfigurationError('Option "colors" must not be empty.')
    for name in _BOOL_OPTIONS:
        if not isinstance(getattr(opts, name), bool):
            raise ConfigurationError(f'Option "{name}" must be a boolean.', context={name: getattr(opts, name)})
    for name in _NUMBER_OPTIONS:
        if not _is_number(getattr(opts, name)):
            raise ConfigurationError(f'Option "{name}" must be a number.', context={name: getattr(opts, name)})
    if not isinstance(opts.legend_position, str):
        raise ConfigurationError('Option "legendPosition" must be a string.')
    if opts.legend_position not in LEGEND_POSITIONS:
        raise ConfigurationError(
            f'Option "legendPosition" must be one of {", ".join(LEGEND_POSITIONS)}.',
            context={"legend_position": opts.legend_position},
        )
    if not _is_number(opts.max_gauge_value):
        raise ConfigurationError('Option "maxGaugeValue" must be a number.')
    if opts.max_gauge_value <= 0:
        raise ConfigurationError('Option "maxGaugeValue" must be positive.')
    if opts.curve_type not in CURVE_TYPES:
        raise ConfigurationError(f'Option "curveType" must be one of {", ".join(CURVE_TYPES)}.')
    if isinstance(opts.max_data_points, bool) or not isinstance(opts.max_data_points, int) or opts.max_data_points < 0:
        raise ConfigurationError('Option "maxDataPoints" must be a non-negative integer.')
    if not isinstance(opts.type, str):
        raise ConfigurationError('Option "type" must be a string.')
    if opts.table is not None and not isinstance(opts.table, str):
        raise ConfigurationError('Option "table" must be an element id string.')
    for name in ("tooltip_formatter", "on_click"):
        value = getattr(opts, name)
        if value is not None and not callable(value):
            raise ConfigurationError(f'Option "{name}" must be callable.')


def resolve_options(
    options: Mapping[str, Any] | None = None,
    environment: EnvironmentDefaults | None = None,
) -> ChartOptions:
    """Build the validated option set for one chart instance."""
    env = environment or EnvironmentDefaults()
    merged: Dict[str, Any] = {
        "font_size": env.font_size,
        "font_family": env.font_family,
        "text_color": env.text_color,
        "background_color": env.background_color,
    }
    merged.update(_canonicalize(options or {}))
    if isinstance(merged.get("colors"), list):
        merged["colors"] = tuple(merged["colors"])
    opts = ChartOptions(**merged)
    validate(opts)
    return opts


def with_changes(opts: ChartOptions, **changes: Any) -> ChartOptions:
    """Return a re-validated copy with ``changes`` applied (setter path)."""
    canonical = _canonicalize(changes)
    if isinstance(canonical.get("colors"), list):
        canonical["colors"] = tuple(canonical["colors"])
    updated = replace(opts, **canonical)
    validate(updated)
    return updated


__all__ = [
    "LEGEND_POSITIONS",
    "CURVE_TYPES",
    "EnvironmentDefaults",
    "ChartOptions",
    "canonical_key",
    "validate",
    "resolve_options",
    "with_changes",
]
