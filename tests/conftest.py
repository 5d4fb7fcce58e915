# Shared fixtures. Forces the offscreen Qt platform so widget tests run headless;
# pytest-qt supplies the qtbot fixture.

import os
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from ggraphs.charting.backends import FixedRatioTextMetrics  # noqa: E402
from ggraphs.services.container_host import Document, StaticContainer  # noqa: E402
from ggraphs.services.resize_debouncer import ManualScheduler  # noqa: E402

SALES = [
    {
        "name": "Revenue",
        "data": [
            {"label": "Jan", "value": 12},
            {"label": "Feb", "value": 47},
            {"label": "Mar", "value": 83},
        ],
    },
    {
        "name": "Cost",
        "data": [
            {"label": "Jan", "value": 20},
            {"label": "Feb", "value": 30},
            {"label": "Mar", "value": 40},
        ],
    },
]


@pytest.fixture
def sales():
    return [dict(s, data=[dict(p) for p in s["data"]]) for s in SALES]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def metrics():
    return FixedRatioTextMetrics()


@pytest.fixture
def document():
    doc = Document()
    doc.add_container(StaticContainer("chart", 600, 400))
    return doc


@pytest.fixture
def make_chart(document, scheduler, metrics):
    """Factory building a chart on the 600x400 'chart' container."""
    from ggraphs.engine import GGraphs

    created = []

    def _make(options=None, container_id="chart"):
        chart = GGraphs(container_id, options, document=document, scheduler=scheduler, text_metrics=metrics)
        created.append(chart)
        return chart

    yield _make
    for chart in created:
        chart.destroy()
