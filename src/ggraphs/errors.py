"""Structured errors raised (or logged) by the chart engine."""

from __future__ import annotations
import logging
from typing import Any


class GraphError(Exception):
    """Base class for chart engine issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ContainerNotFoundError(GraphError, LookupError):
    """Raised when the target container id cannot be resolved."""


class ConfigurationError(GraphError, TypeError):
    """Raised when an option has the wrong type or an invalid value."""


class DataShapeError(GraphError, ValueError):
    """Raised when supplied series data is not an array of series."""


class UnknownChartTypeError(GraphError, ValueError):
    """Raised when the chart type tag is not one of the supported kinds."""


class DegenerateDataWarning(UserWarning):
    """Category for non-fatal data problems (zero pie total, missing table)."""


def warn_degenerate(logger: logging.Logger, message: str, *args: Any) -> None:
    """Log one WARNING record tagged with the DegenerateDataWarning category."""
    logger.warning(message, *args, extra={"category": DegenerateDataWarning.__name__})


__all__ = [
    "warn_degenerate",
    "GraphError",
    "ContainerNotFoundError",
    "ConfigurationError",
    "DataShapeError",
    "UnknownChartTypeError",
    "DegenerateDataWarning",
]
