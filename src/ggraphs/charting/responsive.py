"""Responsive label rules.

Rules:
    - Rotate x labels by 45 degrees when their combined estimated width plus
      a fixed spacing per label exceeds the plot width.
    - Thin labels to every n-th one when even rotated labels would overlap
      (rotated labels need roughly one line-height each).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .. import settings
from .backends import TextMetricsProtocol


@dataclass(frozen=True)
class LabelPlan:
    rotate: bool
    stride: int = 1

    def shows(self, index: int) -> bool:
        return index % self.stride == 0


def plan_x_labels(
    labels: Sequence[str],
    plot_width: float,
    font_size: float,
    font_family: str,
    metrics: TextMetricsProtocol,
) -> LabelPlan:
    if not labels:
        return LabelPlan(False)
    estimated = metrics.text_width(" ".join(labels), font_size, font_family)
    total = estimated + len(labels) * settings.LABEL_SPACING
    if plot_width >= total:
        return LabelPlan(False)
    # a rotated label occupies about one line-height along the axis
    per_label = font_size * 1.2
    capacity = max(1, int(plot_width // per_label))
    stride = max(1, math.ceil(len(labels) / capacity))
    return LabelPlan(True, stride)


__all__ = ["LabelPlan", "plan_x_labels"]
