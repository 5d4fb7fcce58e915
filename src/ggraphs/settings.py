"""Global configuration and constants for the chart engine."""

from __future__ import annotations

import os
from typing import Final, Tuple

DEFAULT_COLORS: Final[Tuple[str, ...]] = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#FFA07A",
    "#98D8C8",
    "#F9ED69",
    "#F08A5D",
    "#B83B5E",
    "#6A2C70",
    "#00B8A9",
    "#F8F3D4",
    "#3F72AF",
)

# Environment fallbacks used when a container exposes no computed style
DEFAULT_FONT_SIZE: Final = 16.0
DEFAULT_FONT_FAMILY: Final = "sans-serif"
DEFAULT_TEXT_COLOR: Final = "#000000"
DEFAULT_BACKGROUND_COLOR: Final = "#FFFFFF"

MIN_FONT_SIZE: Final = 10.0
FONT_SIZE_DIVISOR: Final = 20  # font never exceeds min(width, height) / 20
LABEL_FONT_RATIO: Final = 0.8
GAUGE_LABEL_FONT_RATIO: Final = 0.5

BASE_MARGIN: Final = 50
COMPACT_MARGIN: Final = 10
PIE_MARGIN: Final = 20
LEGEND_MARGIN_VERTICAL: Final = 50  # extra inset when legend sits top/bottom
LEGEND_MARGIN_HORIZONTAL: Final = 100  # extra inset when legend sits left/right

LEGEND_PADDING: Final = 10
LEGEND_STRIDE_X: Final = 120
LEGEND_STRIDE_Y: Final = 25
LEGEND_SWATCH: Final = 20
LEGEND_LABEL_WIDTH: Final = 100

GRID_STEPS: Final = 5
X_LABEL_OFFSET: Final = 20
Y_LABEL_OFFSET: Final = 10
LABEL_SPACING: Final = 10

LEADER_RISE: Final = 15
LEADER_TICK: Final = 5
PIE_LABEL_RADIUS_FACTOR: Final = 1.2
PIE_RADIUS_DIVISOR_LEGEND: Final = 1.6
PIE_RADIUS_DIVISOR: Final = 2.2
GAUGE_RADIUS_DIVISOR_LEGEND: Final = 1.8
GAUGE_RADIUS_DIVISOR: Final = 2.0
GAUGE_LABEL_OFFSET: Final = 30

MARKER_ANIMATION_MS: Final = 500

RESIZE_DEBOUNCE_MS: Final = int(os.environ.get("GGRAPHS_RESIZE_DEBOUNCE_MS", "200"))
LOG_LEVEL: Final = os.environ.get("GGRAPHS_LOG_LEVEL", "WARNING")

# Size assumed for a markup container that declares no inline width/height
DEFAULT_CONTAINER_WIDTH: Final = 300
DEFAULT_CONTAINER_HEIGHT: Final = 150
