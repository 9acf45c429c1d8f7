"""SLA compliance metrics computed from a single batch of SLA records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from itsm_app.core.config import SLA_COMPLIANCE_SENTINEL
from itsm_app.core.mappers import parse_bool, parse_float, text

from .stats import mean, round_half_up


def is_breached(rec: Mapping[str, Any]) -> bool:
    return parse_bool(rec.get("has_breached"))


def breaches(records: Iterable[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    return [rec for rec in records if is_breached(rec)]


def compliance_rate(records: Iterable[Mapping[str, Any]]) -> dict[str, float | int]:
    """Compliance ``{rate, total, breached, compliant}`` from one record batch.

    Numerator and denominator come from the same list so they always
    describe the same snapshot. An empty batch returns a copy of
    ``SLA_COMPLIANCE_SENTINEL``, a placeholder meaning "insufficient data".
    """
    batch = list(records)
    total = len(batch)
    if total == 0:
        return dict(SLA_COMPLIANCE_SENTINEL)
    breached = len(breaches(batch))
    compliant = total - breached
    rate = round_half_up(compliant / total * 10000) / 100
    return {"rate": rate, "total": total, "breached": breached, "compliant": compliant}


def percent_compliant(total: int, breached: int, *, empty: int = 0) -> int:
    if total <= 0:
        return empty
    return int(round_half_up((total - breached) / total * 100))


def compliance_by_type(records: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Per SLA definition: ``{type, total, breached, compliance, avg_percentage}``.

    ``avg_percentage`` is the mean elapsed percentage of the SLA timer (one
    decimal); entries without a numeric ``percentage`` are left out of it.
    """
    grouped: dict[str, dict[str, Any]] = {}
    for rec in records:
        name = text(rec.get("sla")).strip() or "Unknown"
        entry = grouped.setdefault(name, {"total": 0, "breached": 0, "percentages": []})
        entry["total"] += 1
        if is_breached(rec):
            entry["breached"] += 1
        pct = parse_float(rec.get("percentage"))
        if pct is not None:
            entry["percentages"].append(pct)
    return [
        {
            "type": name,
            "total": entry["total"],
            "breached": entry["breached"],
            "compliance": percent_compliant(entry["total"], entry["breached"]),
            "avg_percentage": round_half_up(mean(entry["percentages"]), 1),
        }
        for name, entry in grouped.items()
    ]
