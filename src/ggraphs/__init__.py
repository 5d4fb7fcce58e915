"""GGraphs public API.

Small, stable surface for embedding charts:

- :class:`GGraphs` - chart lifecycle bound to one container.
- :class:`Document` / :class:`StaticContainer` - headless host model.
- structured errors from :mod:`ggraphs.errors`.

The Qt host lives in :mod:`ggraphs.widgets` and is not imported here, so
no widget machinery loads for headless callers.
"""

from __future__ import annotations

from .engine import GGraphs  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    ContainerNotFoundError,
    DataShapeError,
    DegenerateDataWarning,
    GraphError,
    UnknownChartTypeError,
)
from .options import ChartOptions, resolve_options  # noqa: F401
from .services.container_host import ContainerStyle, Document, StaticContainer  # noqa: F401
from .services.resize_debouncer import ManualScheduler  # noqa: F401

__version__ = "0.1.0"
