"""Time-bucketed trend series and trend classification."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Any

import pandas as pd

from itsm_app.core.config import TREND_THRESHOLD, TREND_WINDOW

from .mttr import resolution_hours
from .sla import breaches, percent_compliant
from .stats import group_by_interval, mean, round_half_up

NO_TREND = "No trend"
INSUFFICIENT = "Insufficient data"
INCREASING = "Increasing"
DECREASING = "Decreasing"
STABLE = "Stable"

Point = dict[str, Any]


def _sorted_points(groups: Mapping[date, Any], reducer) -> list[Point]:
    return [{"date": key, "count": reducer(groups[key])} for key in sorted(groups)]


def count_series(records: Iterable[Mapping[str, Any]], interval: str, field: str = "sys_created_on") -> list[Point]:
    """Records per bucket, sorted by bucket start."""
    return _sorted_points(group_by_interval(records, field, interval), len)


def sla_compliance_series(records: Iterable[Mapping[str, Any]], interval: str) -> list[Point]:
    """Whole-percent compliance per bucket."""
    groups = group_by_interval(records, "sys_created_on", interval)
    return _sorted_points(groups, lambda recs: percent_compliant(len(recs), len(breaches(recs)), empty=100))


def mttr_series(records: Iterable[Mapping[str, Any]], interval: str) -> list[Point]:
    """Average resolution hours per creation bucket (one decimal).

    Only incidents with a strictly positive resolution time contribute.
    """
    rows = [
        {"sys_created_on": rec.get("sys_created_on"), "hours": hours}
        for rec, hours in resolution_hours(records)
    ]
    groups = group_by_interval(rows, "sys_created_on", interval)
    return _sorted_points(groups, lambda recs: round_half_up(mean(r["hours"] for r in recs), 1))


def zero_fill(series: Sequence[Point], interval: str, start: date, end: date) -> list[Point]:
    """Dense copy of ``series`` with a zero point for every empty bucket in range."""
    freq = {"day": "D", "week": "W-MON", "month": "MS"}[interval]
    first = pd.Timestamp(start)
    if interval == "week":
        first = first - pd.Timedelta(days=first.weekday())
    elif interval == "month":
        first = first.replace(day=1)
    known = {p["date"]: p["count"] for p in series}
    buckets = pd.date_range(first, pd.Timestamp(end), freq=freq)
    return [{"date": ts.date(), "count": known.get(ts.date(), 0)} for ts in buckets]


def format_date_label(day: date, interval: str) -> str:
    short = f"{day.strftime('%b')} {day.day}"
    if interval == "week":
        return f"Week of {short}"
    if interval == "month":
        return day.strftime("%B %Y")
    return short


def classify_trend(series: Sequence[float | Mapping[str, Any]]) -> str:
    """Compare the mean of the last 5 points against the 5 before them.

    More than 10% higher is ``Increasing``, more than 10% lower is
    ``Decreasing``, otherwise ``Stable``. Fewer than 2 points gives ``No
    trend``; when the earlier window is empty the result is ``Insufficient
    data``. Window size and threshold are fixed.
    """
    values = [p["count"] if isinstance(p, Mapping) else p for p in series]
    if len(values) < 2:
        return NO_TREND
    recent = values[-TREND_WINDOW:]
    older = values[-2 * TREND_WINDOW : -TREND_WINDOW]
    if not recent or not older:
        return INSUFFICIENT
    recent_avg = mean(recent)
    older_avg = mean(older)
    if recent_avg > older_avg * (1 + TREND_THRESHOLD):
        return INCREASING
    if recent_avg < older_avg * (1 - TREND_THRESHOLD):
        return DECREASING
    return STABLE
