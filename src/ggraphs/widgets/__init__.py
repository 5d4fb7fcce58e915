"""Qt widgets hosting charts."""

from .chart_widget import ChartWidget

__all__ = ["ChartWidget"]
