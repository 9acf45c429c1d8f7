from datetime import date, timedelta

from itsm_app.analytics.metrics.mttr import mttr_distribution
from itsm_app.visual.charts import count_bar_chart, histogram_chart, trend_chart


def _series():
    start = date(2024, 1, 1)
    return [{"date": start + timedelta(days=i), "count": i % 3} for i in range(7)]


def test_trend_chart_shapes():
    assert trend_chart(_series(), "day") is not None
    assert trend_chart([], "day") is None


def test_histogram_chart():
    assert histogram_chart(mttr_distribution([1, 5, 30])) is not None
    assert histogram_chart(mttr_distribution([])) is None


def test_count_bar_chart():
    assert count_bar_chart({"P1": 2, "P2": 0}) is not None
    assert count_bar_chart({}) is None
