from datetime import date

from itsm_app.analytics.metrics import trends
from itsm_app.core.models import Scalar


def test_classify_trend_directions():
    assert trends.classify_trend([10] * 5 + [12] * 5) == trends.INCREASING
    assert trends.classify_trend([12] * 5 + [10] * 5) == trends.DECREASING
    assert trends.classify_trend([10] * 5 + [10.5] * 5) == trends.STABLE


def test_classify_trend_short_series():
    assert trends.classify_trend([]) == trends.NO_TREND
    assert trends.classify_trend([{"count": 3}]) == trends.NO_TREND
    assert trends.classify_trend([1, 2, 3]) == trends.INSUFFICIENT


def test_classify_trend_accepts_points():
    points = [{"date": date(2024, 1, d), "count": 10 if d <= 5 else 20} for d in range(1, 11)]
    assert trends.classify_trend(points) == trends.INCREASING


def test_count_series_sorted():
    records = [
        {"sys_created_on": Scalar("2024-01-03 10:00:00")},
        {"sys_created_on": Scalar("2024-01-01 10:00:00")},
        {"sys_created_on": Scalar("2024-01-03 12:00:00")},
    ]
    assert trends.count_series(records, "day") == [
        {"date": date(2024, 1, 1), "count": 1},
        {"date": date(2024, 1, 3), "count": 2},
    ]


def test_sla_and_mttr_series():
    sla_records = [
        {"sys_created_on": Scalar("2024-01-01 01:00:00"), "has_breached": Scalar("false")},
        {"sys_created_on": Scalar("2024-01-01 02:00:00"), "has_breached": Scalar("true")},
        {"sys_created_on": Scalar("2024-01-01 03:00:00"), "has_breached": Scalar("false")},
    ]
    assert trends.sla_compliance_series(sla_records, "day") == [{"date": date(2024, 1, 1), "count": 67}]

    resolved = [
        {"sys_created_on": Scalar("2024-01-01 00:00:00"), "resolved_at": Scalar("2024-01-01 03:00:00")},
        {"sys_created_on": Scalar("2024-01-01 06:00:00"), "resolved_at": Scalar("2024-01-01 10:00:00")},
        {"sys_created_on": Scalar("2024-01-02 00:00:00"), "resolved_at": Scalar("2024-01-02 00:00:00")},
    ]
    assert trends.mttr_series(resolved, "day") == [{"date": date(2024, 1, 1), "count": 3.5}]


def test_zero_fill_and_labels():
    series = [{"date": date(2024, 1, 2), "count": 4}]
    filled = trends.zero_fill(series, "day", date(2024, 1, 1), date(2024, 1, 3))
    assert [p["count"] for p in filled] == [0, 4, 0]

    weekly = trends.zero_fill([], "week", date(2024, 1, 3), date(2024, 1, 20))
    assert [p["date"] for p in weekly] == [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15)]

    assert trends.format_date_label(date(2024, 1, 8), "day") == "Jan 8"
    assert trends.format_date_label(date(2024, 1, 8), "week") == "Week of Jan 8"
    assert trends.format_date_label(date(2024, 1, 1), "month") == "January 2024"
