"""Mean-time-to-resolution metrics (pure functions).

Durations are measured in hours between ``sys_created_on`` and
``resolved_at``. Records missing either timestamp, or whose resolution is
not strictly after creation, are excluded before any statistic is
computed: they neither count as resolved nor pull averages toward zero.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from itsm_app.core.config import (
    MTTR_BUCKETS,
    MTTR_LIMIT_HOURS,
    MTTR_TARGET_HOURS,
    PRIORITY_LABELS,
    TOP_N_RESOLUTIONS,
)
from itsm_app.core.mappers import map_priority, parse_timestamp, text

from .stats import bucketize, mean, median, round_half_up

ResolvedPair = tuple[Mapping[str, Any], float]


@dataclass(frozen=True, slots=True)
class MTTRSummary:
    avg: float
    median: float
    count: int

    def as_dict(self) -> dict[str, float | int]:
        return {"avg": self.avg, "median": self.median, "count": self.count}


def resolution_hours(records: Iterable[Mapping[str, Any]]) -> list[ResolvedPair]:
    """Pair each qualifying incident with its strictly positive resolution time."""
    out: list[ResolvedPair] = []
    for rec in records:
        created = parse_timestamp(rec.get("sys_created_on"))
        resolved = parse_timestamp(rec.get("resolved_at"))
        if created is None or resolved is None:
            continue
        hours = (resolved - created).total_seconds() / 3600.0
        if hours > 0:
            out.append((rec, hours))
    return out


def summarize(hours: Iterable[float]) -> MTTRSummary:
    values = list(hours)
    return MTTRSummary(avg=mean(values), median=median(values), count=len(values))


def summarize_mttr(records: Iterable[Mapping[str, Any]]) -> MTTRSummary:
    return summarize(h for _, h in resolution_hours(records))


def mttr_by_priority(pairs: Iterable[ResolvedPair]) -> dict[str, dict[str, float | int]]:
    grouped: dict[str, list[float]] = {}
    for rec, hours in pairs:
        grouped.setdefault(map_priority(rec.get("priority")), []).append(hours)
    return {label: summarize(grouped[label]).as_dict() for label in PRIORITY_LABELS if label in grouped}


def mttr_by_category(pairs: Iterable[ResolvedPair]) -> dict[str, dict[str, float | int]]:
    grouped: dict[str, list[float]] = {}
    for rec, hours in pairs:
        grouped.setdefault(text(rec.get("category")).strip() or "Unknown", []).append(hours)
    summaries = {cat: summarize(vals).as_dict() for cat, vals in grouped.items()}
    return dict(sorted(summaries.items(), key=lambda kv: kv[1]["avg"], reverse=True))


def mttr_distribution(hours: Iterable[float]) -> list[dict[str, Any]]:
    return bucketize(hours, MTTR_BUCKETS, unit="h")


def fastest(pairs: Iterable[ResolvedPair], n: int = TOP_N_RESOLUTIONS) -> list[ResolvedPair]:
    return sorted(pairs, key=lambda p: p[1])[:n]


def slowest(pairs: Iterable[ResolvedPair], n: int = TOP_N_RESOLUTIONS) -> list[ResolvedPair]:
    return sorted(pairs, key=lambda p: p[1], reverse=True)[:n]


def performance_score(summary: MTTRSummary) -> int:
    """Resolution efficiency score (0-105); penalizes slow and inconsistent resolution."""
    score = 100.0
    if summary.avg > MTTR_TARGET_HOURS:
        score -= (summary.avg - MTTR_TARGET_HOURS) * 2
    if summary.avg > MTTR_LIMIT_HOURS:
        score -= (summary.avg - MTTR_LIMIT_HOURS) * 3
    consistency = abs(summary.avg - summary.median)
    if consistency < 2:
        score += 5
    elif consistency > 8:
        score -= 10
    return max(int(round_half_up(score)), 0)
