"""Change request metrics: state counts, type breakdown, success rate."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from itsm_app.core.config import CHANGE_SUCCESS_STATE, CHANGE_TERMINAL_STATES
from itsm_app.core.mappers import normalize_change_state, text

from .stats import round_half_up


def count_by_state(records: Iterable[Mapping[str, Any]]) -> dict[str, int]:
    counter: Counter[str] = Counter(normalize_change_state(rec.get("state")) for rec in records)
    return dict(counter)


def count_by_type(records: Iterable[Mapping[str, Any]]) -> dict[str, int]:
    counter: Counter[str] = Counter(text(rec.get("type")).strip() or "Unknown" for rec in records)
    return dict(counter)


def successful(records: Iterable[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    return [rec for rec in records if normalize_change_state(rec.get("state")) == CHANGE_SUCCESS_STATE]


def success_rate(records: Iterable[Mapping[str, Any]]) -> int:
    """Percent of terminal-state changes that completed successfully.

    Only Completed, Closed, Failed, and Cancelled changes receive a verdict;
    success is strictly Completed. Returns ``0`` when nothing is terminal.
    """
    states = [normalize_change_state(rec.get("state")) for rec in records]
    eligible = [s for s in states if s in CHANGE_TERMINAL_STATES]
    if not eligible:
        return 0
    succeeded = sum(1 for s in eligible if s == CHANGE_SUCCESS_STATE)
    return int(round_half_up(succeeded / len(eligible) * 100))


def time_series_rows(records: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Project changes to the fields trend charts need."""
    return [
        {
            "sys_created_on": rec.get("sys_created_on"),
            "state": normalize_change_state(rec.get("state")),
            "type": text(rec.get("type")).strip() or "Unknown",
        }
        for rec in records
    ]
