"""Incident volume metrics: counts by priority, category, and state."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from itsm_app.core.config import PRIORITY_LABELS
from itsm_app.core.mappers import map_priority, normalize_incident_state, text


def count_by_priority(records: Iterable[Mapping[str, Any]]) -> dict[str, int]:
    """Count incidents per ``P1``-``P4``.

    A missing or unparseable priority counts toward ``P4`` so the counts
    always sum to the number of input records.
    """
    counts = {label: 0 for label in PRIORITY_LABELS}
    for rec in records:
        counts[map_priority(rec.get("priority"))] += 1
    return counts


def count_by_category(records: Iterable[Mapping[str, Any]]) -> dict[str, int]:
    counter: Counter[str] = Counter()
    for rec in records:
        counter[text(rec.get("category")).strip() or "Unknown"] += 1
    return dict(counter.most_common())


def is_resolved(rec: Mapping[str, Any]) -> bool:
    return normalize_incident_state(rec.get("state")) == "Resolved"


def count_open(records: Iterable[Mapping[str, Any]]) -> int:
    return sum(1 for rec in records if not is_resolved(rec))


def time_series_rows(records: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Project incidents to the fields trend charts need."""
    return [
        {
            "sys_created_on": rec.get("sys_created_on"),
            "priority": map_priority(rec.get("priority")),
            "state": normalize_incident_state(rec.get("state")),
        }
        for rec in records
    ]
