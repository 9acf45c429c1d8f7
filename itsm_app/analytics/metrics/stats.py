"""Entity-agnostic numeric helpers: averages, histogram buckets, time grouping.

This module provides the reductions every derived metric is built on. All
helpers accept plain iterables and return plain Python structures so the
results can be handed straight to chart builders.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

import pandas as pd
import pytz

from itsm_app.core.config import TIME_INTERVALS, TIMEZONE
from itsm_app.core.mappers import parse_timestamp


@dataclass(frozen=True, slots=True)
class Bucket:
    """Half-open numeric range ``[lower, upper)`` with a display label."""

    label: str
    lower: float
    upper: float

    def contains(self, val: float) -> bool:
        return self.lower <= val < self.upper

    def range_label(self, unit: str = "") -> str:
        upper = "∞" if math.isinf(self.upper) else f"{self.upper:g}"
        return f"{self.lower:g}-{upper}{unit}"


def _numeric(values: Iterable[Any]) -> pd.Series:
    series = pd.Series(list(values), dtype=object)
    return pd.to_numeric(series, errors="coerce").dropna()


def mean(values: Iterable[Any]) -> float:
    """Arithmetic mean; ``0`` for empty input."""
    numeric = _numeric(values)
    if numeric.empty:
        return 0
    return float(numeric.mean())


def median(values: Iterable[Any]) -> float:
    """Middle element (or average of the two middle elements); ``0`` for empty input."""
    numeric = _numeric(values)
    if numeric.empty:
        return 0
    return float(numeric.median())


def round_half_up(val: float, digits: int = 0) -> float:
    """Round with ties away from zero for positive values (``2.5 -> 3``)."""
    factor = 10**digits
    return math.floor(val * factor + 0.5) / factor


def bucketize(
    values: Iterable[Any],
    buckets: Sequence[Bucket | tuple[str, float, float]],
    *,
    unit: str = "",
) -> list[dict[str, Any]]:
    """Count values into labeled half-open ranges.

    Parameters
    ----------
    values : iterable
        Numeric values; non-numeric entries are ignored.
    buckets : sequence
        Ordered, non-overlapping ranges. The first matching range wins; the
        caller supplies a final unbounded range so outliers are not dropped.
    unit : str
        Suffix appended to each ``range`` label (e.g. ``"h"``).

    Returns
    -------
    list[dict]
        One ``{label, range, count, percentage}`` entry per bucket, in input
        order. Percentages are ``0`` when there are no values.
    """
    specs = [b if isinstance(b, Bucket) else Bucket(*b) for b in buckets]
    numeric = _numeric(values)
    counts = [0] * len(specs)
    for val in numeric:
        for idx, spec in enumerate(specs):
            if spec.contains(float(val)):
                counts[idx] += 1
                break
    total = len(numeric)
    return [
        {
            "label": spec.label,
            "range": spec.range_label(unit),
            "count": count,
            "percentage": (count / total) * 100 if total > 0 else 0,
        }
        for spec, count in zip(specs, counts)
    ]


def bucket_start(ts: pd.Timestamp, interval: str, tz: str = TIMEZONE) -> date:
    """Normalize a timestamp to the first day of its ``interval`` bucket."""
    local_day = ts.tz_convert(pytz.timezone(tz)).date()
    if interval == "day":
        return local_day
    if interval == "week":
        return local_day - timedelta(days=local_day.weekday())
    if interval == "month":
        return local_day.replace(day=1)
    raise ValueError(f"Unsupported interval {interval!r}; expected one of {', '.join(TIME_INTERVALS)}")


def group_by_interval(
    records: Iterable[dict[str, Any]],
    timestamp_field: str,
    interval: str,
    *,
    tz: str = TIMEZONE,
) -> dict[date, list[dict[str, Any]]]:
    """Group records into calendar buckets keyed by bucket start date.

    Only buckets containing at least one record are present (no zero
    filling) and key order is not guaranteed; sort before display. Records
    whose timestamp cannot be parsed are skipped.
    """
    if interval not in TIME_INTERVALS:
        raise ValueError(f"Unsupported interval {interval!r}; expected one of {', '.join(TIME_INTERVALS)}")
    groups: dict[date, list[dict[str, Any]]] = {}
    for rec in records:
        ts = parse_timestamp(rec.get(timestamp_field))
        if ts is None:
            continue
        groups.setdefault(bucket_start(ts, interval, tz), []).append(rec)
    return groups
