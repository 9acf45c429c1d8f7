from datetime import date

import pytest

from itsm_app.analytics.metrics.stats import (
    bucketize,
    group_by_interval,
    mean,
    median,
    round_half_up,
)
from itsm_app.core.models import Scalar

BUCKETS = [("0-4h", 0, 4), ("4-8h", 4, 8), ("8-24h", 8, 24), ("24h+", 24, float("inf"))]


def test_mean_median_empty_and_odd_even():
    assert mean([]) == 0
    assert median([]) == 0
    assert median([5, 1, 3]) == 3
    assert median([4, 1, 3, 2]) == 2.5
    assert mean([1, "x", 3]) == 2


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(92.49) == 92


def test_bucketize_counts_and_percentages():
    out = bucketize([2, 6, 10, 200], BUCKETS, unit="h")
    assert [b["count"] for b in out] == [1, 1, 1, 1]
    assert [b["percentage"] for b in out] == [25, 25, 25, 25]
    assert out[-1]["range"] == "24-∞h"
    assert out[0]["label"] == "0-4h"


def test_bucketize_empty():
    out = bucketize([], BUCKETS)
    assert all(b["count"] == 0 and b["percentage"] == 0 for b in out)


def test_group_by_interval_day_week_month():
    records = [
        {"sys_created_on": Scalar("2024-03-06 10:00:00")},  # Wednesday
        {"sys_created_on": Scalar("2024-03-06 23:00:00")},
        {"sys_created_on": Scalar("2024-03-11 08:00:00")},  # next Monday
        {"sys_created_on": Scalar("not a date")},
    ]
    days = group_by_interval(records, "sys_created_on", "day")
    assert {k: len(v) for k, v in days.items()} == {date(2024, 3, 6): 2, date(2024, 3, 11): 1}

    weeks = group_by_interval(records, "sys_created_on", "week")
    assert {k: len(v) for k, v in weeks.items()} == {date(2024, 3, 4): 2, date(2024, 3, 11): 1}

    months = group_by_interval(records, "sys_created_on", "month")
    assert {k: len(v) for k, v in months.items()} == {date(2024, 3, 1): 3}


def test_group_by_interval_rejects_unknown_interval():
    with pytest.raises(ValueError):
        group_by_interval([], "sys_created_on", "quarter")
